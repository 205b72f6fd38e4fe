"""Root CLI group for calpack with global flags and command registration."""

from __future__ import annotations

import click

from calpack import __version__
from calpack.commands import register_commands
from calpack.commands._base import CalpackGroup
from calpack.commands._context import AppContext
from calpack.config.settings import CalpackSettings


@click.group(cls=CalpackGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="calpack")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Bare values only.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    help="Config file path (default: calpack.toml found from the current directory up).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """calpack: pack calendar times into integer indices."""
    ctx.ensure_object(dict)
    settings = CalpackSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
