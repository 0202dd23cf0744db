"""Command: quote plain front-matter values."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from instrctl.commands._base import InstrCommand

if TYPE_CHECKING:
    from instrctl.commands._context import AppContext


@click.command(
    cls=InstrCommand,
    examples="""\
  instrctl fix
  instrctl fix --dry-run
  instrctl fix --key description
  instrctl fix .github/instructions/pillow.instructions.md""",
)
@click.option("--dry-run", is_flag=True, help="Show what would change without writing.")
@click.option(
    "--key",
    "keys",
    multiple=True,
    help="Front-matter key to quote (repeatable). Defaults to [check] quoted_keys.",
)
@click.argument("paths", nargs=-1, type=click.Path(dir_okay=False))
@click.pass_obj
def fix(app: AppContext, dry_run: bool, keys: tuple[str, ...], paths: tuple[str, ...]) -> None:
    """Wrap unquoted description/applyTo values in double quotes."""
    from instrctl.services.fix import FixService

    app.emit(
        FixService(app.corpus).fix(
            dry_run=dry_run,
            keys=list(keys) or None,
            paths=list(paths) or None,
        )
    )
