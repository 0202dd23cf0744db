"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``.  Builds the Corpus lazily (so ``--help`` never
touches the filesystem) and routes results to stdout/stderr.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from instrctl.config.logging import configure_logging
from instrctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from instrctl.config.settings import InstrSettings
    from instrctl.infrastructure.corpus import Corpus
    from instrctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: InstrSettings) -> None:
        self.settings = settings
        self._corpus: Corpus | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def corpus(self) -> Corpus:
        """The corpus (created lazily on first access)."""
        if self._corpus is None:
            from instrctl.infrastructure.corpus import Corpus

            self._corpus = Corpus(self.settings)
        return self._corpus

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout.  Warnings go to stderr so piped output stays
          clean (in JSON mode they are already in the payload).
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
