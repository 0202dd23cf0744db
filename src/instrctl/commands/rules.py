"""Command: show the lint rule table."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from instrctl.commands._base import InstrCommand

if TYPE_CHECKING:
    from instrctl.commands._context import AppContext


@click.command(
    cls=InstrCommand,
    examples="""\
  instrctl rules
  instrctl -v rules""",
)
@click.pass_obj
def rules(app: AppContext) -> None:
    """List enabled lint rules (built-in and plugin)."""
    from instrctl.services.query import QueryService

    app.emit(QueryService(app.corpus).rules())
