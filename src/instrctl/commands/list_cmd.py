"""Command: list instruction documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from instrctl.commands._base import InstrCommand

if TYPE_CHECKING:
    from instrctl.commands._context import AppContext


@click.command(
    "list",
    cls=InstrCommand,
    examples="""\
  instrctl list
  instrctl -q list
  instrctl --json list""",
)
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List documents with their description and applyTo globs."""
    from instrctl.services.query import QueryService

    app.emit(QueryService(app.corpus).list_documents())
