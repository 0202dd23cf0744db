"""Command: find the instructions that apply to source files."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from instrctl.commands._base import InstrCommand

if TYPE_CHECKING:
    from instrctl.commands._context import AppContext


@click.command(
    cls=InstrCommand,
    examples="""\
  instrctl match src/app/models.py
  instrctl match infra/main.tf .circleci/config.yml
  instrctl -q match pom.xml""",
)
@click.argument("targets", nargs=-1, required=True)
@click.pass_obj
def match(app: AppContext, targets: tuple[str, ...]) -> None:
    """Show which documents' applyTo globs match TARGETS."""
    from instrctl.services.query import QueryService

    app.emit(QueryService(app.corpus).match(list(targets)))
