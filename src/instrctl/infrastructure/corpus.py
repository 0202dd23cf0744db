"""Corpus — the single dependency injected into every service.

The Corpus owns the resolved settings, document discovery and loading,
tracked writes, and the plugin manager.  Services never touch the
filesystem or pluggy directly.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from instrctl.domain.document import InstructionDocument, load_document
from instrctl.domain.placeholders import compile_patterns
from instrctl.domain.rules import Rule, RuleContext, get_rules
from instrctl.infrastructure.filesystem import find_instruction_files, read_text, write_text

if TYPE_CHECKING:
    from instrctl.config.settings import InstrSettings
    from instrctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class Corpus:
    """A directory of instruction documents plus the settings that govern it."""

    def __init__(self, settings: InstrSettings) -> None:
        self._settings = settings
        self._plugins: PluginManager | None = None
        self._plugin_rules: list[Rule] | None = None
        self._plugin_warnings: list[str] = []

    @property
    def settings(self) -> InstrSettings:
        return self._settings

    @property
    def root(self) -> Path:
        """Project root; document paths are reported relative to it."""
        return self._settings.project_root

    @property
    def directory(self) -> Path:
        return self._settings.instructions_dir

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def find_documents(self) -> list[Path]:
        corpus = self._settings.corpus
        return find_instruction_files(
            self.directory, pattern=corpus.pattern, recursive=corpus.recursive
        )

    def relative(self, path: Path) -> str:
        """POSIX path of *path* relative to the project root (if inside it)."""
        try:
            return path.resolve().relative_to(self.root.resolve()).as_posix()
        except ValueError:
            return path.as_posix()

    def load(self, path: Path) -> InstructionDocument:
        """Read and parse one document.

        Raises:
            OSError: The file cannot be read.
            UnicodeDecodeError: The file is not UTF-8.
        """
        return load_document(self.relative(path), read_text(path))

    def write(self, path: Path, content: str) -> None:
        write_text(path, content)
        logger.debug("Wrote %s", self.relative(path))

    # ------------------------------------------------------------------
    # Rules and plugins
    # ------------------------------------------------------------------

    @property
    def plugins(self) -> PluginManager | None:
        """Plugin manager, loaded lazily; None when plugins are disabled.

        A manager installed with :meth:`set_plugin_manager` is always used.
        """
        if self._plugins is not None:
            return self._plugins
        if not self._settings.plugins.enabled:
            return None

        from instrctl.plugins.manager import PluginManager

        self._plugins = PluginManager()
        self._plugins.discover_and_load()
        return self._plugins

    def set_plugin_manager(self, manager: PluginManager) -> None:
        """Use *manager* instead of entry-point discovery."""
        self._plugins = manager
        self._plugin_rules = None

    def rules(self) -> list[Rule]:
        """Built-in plus plugin rules, minus ``check.disabled_rules``."""
        disabled = set(self._settings.check.disabled_rules)
        if self._plugin_rules is None:
            self._plugin_rules = []
            manager = self.plugins
            if manager is not None:
                self._plugin_rules, self._plugin_warnings = manager.collect_rules()
        extra = [r for r in self._plugin_rules if r.code not in disabled and r.name not in disabled]
        return [*get_rules(disabled), *sorted(extra, key=lambda r: r.code)]

    @property
    def plugin_warnings(self) -> list[str]:
        return list(self._plugin_warnings)

    def rule_context(self) -> RuleContext:
        """Build the :class:`RuleContext` from ``[check]`` settings.

        Raises:
            re.error: A configured placeholder pattern is not a valid regex.
        """
        check = self._settings.check
        return RuleContext(
            allowed_keys=tuple(check.allowed_keys),
            quoted_keys=tuple(check.quoted_keys),
            template_files=tuple(check.template_files),
            placeholder_patterns=tuple(compile_patterns(check.placeholder_patterns)),
            require_body=check.require_body,
        )
