"""QueryService — read-only views over the corpus.

- ``list_documents``: every valid document with its description and globs.
- ``match``: which documents' ``applyTo`` globs cover given source files.
- ``rules``: the enabled rule table.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from instrctl.domain.frontmatter import InstructionFrontmatter
from instrctl.domain.globs import match_path, normalize_path
from instrctl.services.base import BaseService
from instrctl.services.result import INVALID_PATH, ServiceResult

logger = logging.getLogger(__name__)


class QueryService(BaseService):
    """Lists documents and resolves ``applyTo`` matches."""

    def _valid_documents(
        self, op: str, warnings: list[str]
    ) -> list[tuple[str, InstructionFrontmatter]] | ServiceResult:
        files = self._resolve_paths(op, None)
        if isinstance(files, ServiceResult):
            return files

        valid: list[tuple[str, InstructionFrontmatter]] = []
        for _path, document in self._load_all(files, warnings):
            if document.frontmatter is None:
                warnings.append(f"Skipped {document.path}: unreadable front-matter")
                continue
            try:
                fm = InstructionFrontmatter.model_validate(dict(document.frontmatter))
            except ValidationError as exc:
                fields = ", ".join(str(e["loc"][0]) for e in exc.errors() if e["loc"])
                warnings.append(f"Skipped {document.path}: invalid {fields or 'front-matter'}")
                continue
            valid.append((document.path, fm))
        return valid

    def list_documents(self) -> ServiceResult:
        """List every document whose front-matter validates."""
        warnings: list[str] = []
        documents = self._valid_documents("list_documents", warnings)
        if isinstance(documents, ServiceResult):
            return documents

        items = [
            {"path": path, "description": fm.description, "apply_to": fm.globs}
            for path, fm in documents
        ]
        return ServiceResult(
            ok=True,
            op="list_documents",
            data={"items": items, "count": len(items)},
            warnings=warnings,
        )

    def match(self, targets: list[str]) -> ServiceResult:
        """Find the documents whose ``applyTo`` globs match each target.

        Targets are source-file paths, relative to the current directory
        or absolute; both must lie inside the project root.
        """
        relative: list[str] = []
        root = self._corpus.root.resolve()
        for raw in targets:
            candidate = Path(raw)
            if not candidate.is_absolute():
                candidate = Path.cwd() / candidate
            try:
                rel = candidate.resolve().relative_to(root)
            except ValueError:
                return ServiceResult.failure(
                    "match",
                    INVALID_PATH,
                    f"Path is outside the project root: {raw}",
                    path=raw,
                    root=str(root),
                )
            relative.append(normalize_path(rel.as_posix()))

        warnings: list[str] = []
        documents = self._valid_documents("match", warnings)
        if isinstance(documents, ServiceResult):
            return documents

        items: list[dict[str, Any]] = []
        for target in relative:
            matched = [
                {"path": path, "description": fm.description, "patterns": hits}
                for path, fm in documents
                if (hits := [g for g in fm.globs if match_path(g, target)])
            ]
            logger.debug("%s matched %d documents", target, len(matched))
            items.append({"target": target, "documents": matched, "count": len(matched)})

        return ServiceResult(
            ok=True,
            op="match",
            data={"items": items, "count": sum(item["count"] for item in items)},
            warnings=warnings,
        )

    def rules(self) -> ServiceResult:
        """Describe the rules a check run would apply."""
        items = [r.describe() for r in self._corpus.rules()]
        return ServiceResult(
            ok=True,
            op="rules",
            data={"items": items, "count": len(items)},
            warnings=self._corpus.plugin_warnings,
        )
