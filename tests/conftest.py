"""
Shared pytest fixtures for Bramble tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import io as _io
import os as _os
import pathlib as _pathlib
import typing as _typing
import unittest.mock as _mock

import pytest as _pytest

import bramble.config as config
import bramble.core as core


def _is_bramble_key(key: str) -> bool:
    return key.startswith("BRAMBLE_")


@_pytest.fixture
def clean_env(tmp_path: _pathlib.Path) -> dict[str, str]:
    """
    Return environment dict with BRAMBLE_* keys removed.

    The user config directory is pointed at an empty temporary directory
    so a developer's ~/.config/bramble/config.yaml never leaks in.

    Use with mock.patch.dict to isolate tests from the actual environment.
    """
    env = {k: v for k, v in _os.environ.items() if not _is_bramble_key(k)}
    env["BRAMBLE_CONFIG_DIR"] = str(tmp_path / "user-config")
    return env


@_pytest.fixture
def isolated_env(clean_env: dict[str, str]):
    """
    Context manager that isolates tests from environment variables.

    Usage:
        def test_something(isolated_env):
            with isolated_env:
                settings = config.Settings.construct_without_dotenv()
    """
    return _mock.patch.dict(_os.environ, clean_env, clear=True)


@_pytest.fixture
def isolated_workspace(
    tmp_path: _pathlib.Path,
    monkeypatch: _pytest.MonkeyPatch,
) -> _pathlib.Path:
    """Create an isolated project workspace and chdir into it."""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    (workspace / "pyproject.toml").write_text(
        '[project]\nname = "test-project"\nversion = "0.1.0"\n'
    )
    monkeypatch.chdir(workspace)
    return workspace


@_pytest.fixture
def clean_settings(isolated_env, isolated_workspace: _pathlib.Path) -> config.Settings:  # noqa: ARG001
    """
    Settings instance isolated from environment, .env and config files.

    This fixture ensures tests get predictable default settings.
    """
    with isolated_env:
        return config.Settings.construct_without_dotenv()


@_pytest.fixture
def recorder() -> core.RecordingObserver:
    """A fresh observer recording every event of a run."""
    return core.RecordingObserver()


@_pytest.fixture
def output() -> _io.StringIO:
    """In-memory stream for reporter output."""
    return _io.StringIO()


# =============================================================================
# Sample suites
# =============================================================================


def math_suite() -> core.Suite:
    """
    Small arithmetic suite used across runner, reporter and CLI tests.

    One example fails on purpose.
    """

    def body(ctx: core.ContextBuilder) -> None:
        @ctx.context("addition")
        def _(ctx: core.ContextBuilder) -> None:
            ctx.it("adds small numbers", lambda env: env["a"] + env["b"] == 3)
            ctx.it("is commutative", lambda env: env["a"] + env["b"] == env["b"] + env["a"])

        @ctx.context("subtraction")
        def _(ctx: core.ContextBuilder) -> None:
            ctx.it("subtracts", lambda env: env["b"] - env["a"] == 1)
            ctx.it("is broken", lambda env: env["a"] - env["b"] == 1)

    return core.suite("arithmetic", {"a": 1, "b": 2}, body)


def passing_suite() -> core.Suite:
    """Suite where every example passes."""

    def body(ctx: core.ContextBuilder) -> None:
        ctx.it("is true", lambda env: True)
        ctx.it("returns nothing", lambda env: None)

    return core.suite("passing", {}, body)


@_pytest.fixture
def sample_suite() -> core.Suite:
    return math_suite()


@_pytest.fixture
def sample_passing_suite() -> core.Suite:
    return passing_suite()


def write_suite_file(directory: _pathlib.Path, body: str, name: str = "sample_spec.py") -> _pathlib.Path:
    """Write a suite module to `directory` and return its path."""
    path = directory / name
    path.write_text(body)
    return path


SUITE_FILE_TEMPLATE: _typing.Final[str] = '''
import bramble


def _body(ctx):
    ctx.it("passes", lambda env: True)
{extra}

suite = bramble.suite("file suite", {{}}, _body)


def make_suite():
    return suite


not_a_suite = 42
'''
