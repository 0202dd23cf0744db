"""Pluggy hook specifications for instrctl.

One setup-time hook lets plugins contribute lint rules; one event hook
reports the outcome of every check run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from instrctl.domain.rules import Rule

PROJECT_NAME = "instrctl"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class InstrctlHookSpec:
    """Hook specifications for the instrctl plugin system."""

    @hookspec
    def register_rules(self) -> list[Rule] | None:
        """Return extra lint rules to run alongside the built-ins."""

    @hookspec
    def post_check(
        self,
        files_checked: int,
        issues_found: int,
        error_count: int,
    ) -> None:
        """Called after a check run completes."""
