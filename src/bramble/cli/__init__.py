"""
CLI module for Bramble.

Provides the command-line interface using Click.
"""

from bramble.cli.main import cli, main

__all__ = ["main", "cli"]
