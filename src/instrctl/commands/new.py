"""Command: scaffold a new instruction document."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from instrctl.commands._base import InstrCommand

if TYPE_CHECKING:
    from instrctl.commands._context import AppContext


@click.command(
    cls=InstrCommand,
    examples="""\
  instrctl new django --description "Django best practices" --apply-to "*.py"
  instrctl new terraform -d "Terraform conventions" -a "*.tf,*.tfvars"
""",
)
@click.argument("name")
@click.option("-d", "--description", required=True, help="One-line summary of the guidance.")
@click.option("-a", "--apply-to", required=True, help="Comma-separated glob patterns.")
@click.pass_obj
def new(app: AppContext, name: str, description: str, apply_to: str) -> None:
    """Create NAME.instructions.md in the instructions directory."""
    from instrctl.services.create import CreateService

    app.emit(CreateService(app.corpus).create(name, description=description, apply_to=apply_to))
