"""Root CLI group for instrctl with global flags and command registration."""

from __future__ import annotations

import click

from instrctl import __version__
from instrctl.commands import register_commands
from instrctl.commands._base import InstrGroup
from instrctl.commands._context import AppContext
from instrctl.config.settings import InstrSettings


@click.group(
    cls=InstrGroup,
    invoke_without_command=True,
    examples="""\
  instrctl check
  instrctl fix --dry-run
  instrctl match src/app.py
  instrctl -c ci/instrctl.toml --json check""",
)
@click.version_option(version=__version__, prog_name="instrctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """instrctl — lint and fix *.instructions.md front-matter."""
    settings = InstrSettings.from_cli(
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
