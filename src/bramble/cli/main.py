"""
Main CLI entry point for Bramble.

Provides the command-line interface using Click. `bramble run` executes
one explicitly named suite; `bramble config` inspects the effective
settings.
"""

import json as _json
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import click as _click
import yaml as _yaml

import bramble
import bramble.config as config
import bramble.config.sources as config_sources
import bramble.errors as errors
import bramble.launch as launch
import bramble.loader as loader
import bramble.ui as ui

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configure_logging(level: str) -> None:
    """Route `bramble` log records to stderr at the configured level."""
    _logging.basicConfig(format=LOG_FORMAT)
    _logging.getLogger("bramble").setLevel(level)


def _load_settings() -> config.Settings:
    try:
        return config.Settings()
    except config.ConfigFileError as e:
        raise _click.ClickException(str(e)) from e


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(bramble.__version__, "-v", "--version", prog_name="bramble")
@_click.option(
    "--log-level",
    type=_click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level for diagnostics (default: from settings)",
)
@_click.pass_context
def cli(ctx: _click.Context, log_level: str | None) -> None:
    """
    Bramble - behavior-driven test harness.

    \b
    Examples:
        bramble run tests/calc_spec.py:suite   # Run a suite from a file
        bramble run mypkg.specs:make_suite -w 4
        bramble run mypkg.specs:suite --serial --format rich
        bramble config                         # Show effective settings
    """
    settings = _load_settings()
    if log_level:
        settings.logging.level = log_level.upper()  # type: ignore[assignment]
    _configure_logging(settings.logging.level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command(name="run")
@_click.argument("target")
@_click.option(
    "-w",
    "--workers",
    type=_click.IntRange(min=1),
    default=None,
    help="Maximum number of concurrently running units",
)
@_click.option("--serial", is_flag=True, help="Run everything serially in declaration order")
@_click.option(
    "-f",
    "--format",
    "output_format",
    type=_click.Choice(ui.FORMATS),
    default=None,
    help="Output format (default: from settings)",
)
@_click.option("--color/--no-color", "use_color", default=None, help="Enable/disable colors")
@_click.option("--log/--no-log", "log_enabled", default=None, help="Write a JSONL run log")
@_click.option("--no-exit", is_flag=True, help="Always exit with status 0")
@_click.pass_context
def run_cmd(
    ctx: _click.Context,
    target: str,
    workers: int | None,
    serial: bool,
    output_format: str | None,
    use_color: bool | None,
    log_enabled: bool | None,
    no_exit: bool,
) -> None:
    """Run the suite named by TARGET (MODULE:ATTR).

    MODULE is a dotted module name or a path to a .py file. ATTR names a
    Suite or a zero-argument callable returning one.

    Exits with status 101 when any example or hook failed.
    """
    settings: config.Settings = ctx.obj["settings"]

    if workers is not None:
        settings.runner.workers = workers
    if serial:
        settings.runner.parallel = False
    if output_format is not None:
        settings.output.format = output_format  # type: ignore[assignment]
    if use_color is not None:
        settings.output.color = use_color
    if log_enabled is not None:
        settings.logging.enabled = log_enabled
    # The exit status is decided here, not by the launcher
    settings.runner.exit_on_failure = False

    try:
        suite = loader.load_suite(target)
    except errors.SuiteLoadError as e:
        raise _click.ClickException(str(e)) from e

    result = launch.run(suite, settings=settings)

    if not no_exit:
        ctx.exit(launch.exit_code(result))


@cli.group(invoke_without_command=True)
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.option("--section", type=str, default=None, help="Show specific section only")
@_click.pass_context
def config_cmd(ctx: _click.Context, as_json: bool, section: str | None) -> None:
    """Show effective configuration from all sources.

    Displays the merged configuration from defaults, user config, project
    config and BRAMBLE_* environment variables.

    \b
    Examples:
        bramble config                    # Show all settings as YAML
        bramble config --json             # Show as JSON
        bramble config --section runner   # Show one section
        bramble config path               # Show config file locations
    """
    if ctx.invoked_subcommand is not None:
        return

    settings: config.Settings = ctx.obj["settings"]
    full_config = settings.to_display_dict()

    if section:
        if section not in full_config:
            raise _click.ClickException(f"Unknown section: {section}")
        full_config = {section: full_config[section]}

    if as_json:
        _click.echo(_json.dumps(full_config, indent=2))
    else:
        _click.echo(_yaml.dump(full_config, default_flow_style=False, sort_keys=False), nl=False)

    for name, extra in settings.get_extra_fields().items():
        where = f"section '{name}'" if name else "top level"
        _click.echo(f"Warning: unknown keys in {where}: {', '.join(sorted(extra))}", err=True)


# Register config_cmd with the name "config" to avoid shadowing the module
cli.add_command(config_cmd, name="config")


@config_cmd.command(name="path")
@_click.option("--all", "show_all", is_flag=True, help="Show all paths even if not found")
def config_path(show_all: bool) -> None:
    """Show configuration file paths and their status.

    \b
    Examples:
        bramble config path        # Show existing config files
        bramble config path --all  # Show all possible paths
    """
    project_root = config.find_project_root()
    paths: list[tuple[str, _pathlib.Path]] = [
        ("User config", config_sources.user_config_path()),
        ("Project config", project_root / config_sources.PROJECT_CONFIG),
    ]

    for name, path in paths:
        exists = path.exists()
        if exists or show_all:
            status = "✓" if exists else "✗"
            _click.echo(f"{status} {name}: {path}")


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="bramble")


if __name__ == "__main__":
    main()
