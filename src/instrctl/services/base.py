"""BaseService — shared foundation for instrctl services.

Every service receives a :class:`Corpus` at construction time and reads
documents, rules, and settings through it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from instrctl.services.result import FILE_NOT_FOUND, NO_INSTRUCTIONS_DIR, ServiceResult

if TYPE_CHECKING:
    from instrctl.domain.document import InstructionDocument
    from instrctl.infrastructure.corpus import Corpus

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class CheckService(BaseService):
            def check(self) -> ServiceResult:
                for _path, doc in self._load_all(files, warnings):
                    ...
    """

    def __init__(self, corpus: Corpus) -> None:
        self._corpus = corpus

    def _resolve_paths(self, op: str, paths: list[str] | None) -> list[Path] | ServiceResult:
        """Return the documents to operate on, or a failure result.

        With no *paths*, every document in the corpus directory is used.
        Explicit paths are taken relative to the current directory.
        """
        if paths:
            resolved: list[Path] = []
            for raw in paths:
                candidate = Path(raw)
                if not candidate.is_file():
                    return ServiceResult.failure(
                        op, FILE_NOT_FOUND, f"No such document: {raw}", path=raw
                    )
                resolved.append(candidate)
            return resolved

        directory = self._corpus.directory
        if not directory.is_dir():
            return ServiceResult.failure(
                op,
                NO_INSTRUCTIONS_DIR,
                f"Instructions directory not found: {directory}",
                directory=str(directory),
            )
        return self._corpus.find_documents()

    def _load_all(
        self, files: list[Path], warnings: list[str]
    ) -> list[tuple[Path, InstructionDocument]]:
        """Load *files*, turning unreadable ones into warnings."""
        documents: list[tuple[Path, InstructionDocument]] = []
        for path in files:
            try:
                documents.append((path, self._corpus.load(path)))
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Cannot read %s: %s", path, exc)
                warnings.append(f"Cannot read {self._corpus.relative(path)}: {exc}")
        return documents

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Call a plugin hook. No-op when plugins are disabled.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        manager = self._corpus.plugins
        if manager is None:
            return
        try:
            getattr(manager.hook, hook_name)(**payload)
        except Exception:
            logger.debug("Plugin hook %s failed", hook_name, exc_info=True)
            warnings.append(f"Plugin hook {hook_name} failed")
