"""Subcommand modules for instrctl.

register_commands() imports each command module on registration so the
root group stays importable without them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from instrctl.commands.check import check
    from instrctl.commands.fix import fix
    from instrctl.commands.list_cmd import list_cmd
    from instrctl.commands.match import match
    from instrctl.commands.new import new
    from instrctl.commands.rules import rules

    cli.add_command(check)
    cli.add_command(fix)
    cli.add_command(list_cmd)
    cli.add_command(match)
    cli.add_command(new)
    cli.add_command(rules)
