"""Command: lint instruction documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from instrctl.commands._base import InstrCommand

if TYPE_CHECKING:
    from instrctl.commands._context import AppContext


@click.command(
    cls=InstrCommand,
    examples="""\
  instrctl check
  instrctl check --errors-only
  instrctl check --min-severity error
  instrctl check .github/instructions/django.instructions.md
  instrctl --json check
  instrctl -q check""",
)
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default="warning",
    help="Hide issues below this severity.",
)
@click.option("--errors-only", is_flag=True, help="Shortcut for --min-severity error.")
@click.argument("paths", nargs=-1, type=click.Path(dir_okay=False))
@click.pass_obj
def check(app: AppContext, min_severity: str, errors_only: bool, paths: tuple[str, ...]) -> None:
    """Check front-matter and content hygiene.

    Exits with status 1 when any error-severity issue is found.
    """
    from instrctl.services.check import CheckService

    threshold = "error" if errors_only else min_severity
    result = CheckService(app.corpus).check(min_severity=threshold, paths=list(paths) or None)
    app.emit(result)
    if not result.data.get("healthy", True):
        raise SystemExit(1)
