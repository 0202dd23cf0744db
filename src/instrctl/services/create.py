"""CreateService — scaffold a new instruction document.

New documents are written with quoted ``description`` and ``applyTo``
values so they pass ``instrctl check`` as created.
"""

from __future__ import annotations

import logging
import re

from pydantic import ValidationError
from ruamel.yaml.scalarstring import DoubleQuotedScalarString

from instrctl.domain.content import render_frontmatter
from instrctl.domain.frontmatter import InstructionFrontmatter
from instrctl.services.base import BaseService
from instrctl.services.result import ServiceResult

logger = logging.getLogger(__name__)

ALREADY_EXISTS = "ALREADY_EXISTS"
INVALID_NAME = "INVALID_NAME"
VALIDATION_FAILED = "VALIDATION_FAILED"

_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9._-]*$")
_SUFFIX = ".instructions.md"


def _title_for(name: str) -> str:
    return " ".join(part.capitalize() for part in re.split(r"[-_.]+", name) if part)


class CreateService(BaseService):
    """Creates instruction documents inside the corpus directory."""

    def create(
        self,
        name: str,
        *,
        description: str,
        apply_to: str,
        body: str | None = None,
    ) -> ServiceResult:
        """Write ``<directory>/<name>.instructions.md``.

        Args:
            name: Lower-case slug, e.g. ``django`` or ``aws-ecs``.
            description: One-line summary of the guidance.
            apply_to: Comma-separated glob patterns.
            body: Markdown body; defaults to a title heading.
        """
        op = "create"
        if name.endswith(_SUFFIX):
            name = name[: -len(_SUFFIX)]
        if not _NAME_PATTERN.match(name):
            return ServiceResult.failure(
                op,
                INVALID_NAME,
                f"Invalid document name {name!r}: use lower-case letters, digits, '-', '_', '.'",
                name=name,
            )

        try:
            fm = InstructionFrontmatter(description=description, applyTo=apply_to)
        except ValidationError as exc:
            return ServiceResult.failure(
                op,
                VALIDATION_FAILED,
                "Invalid front-matter values",
                errors=[e["msg"] for e in exc.errors()],
            )

        path = self._corpus.directory / f"{name}{_SUFFIX}"
        if path.exists():
            return ServiceResult.failure(
                op,
                ALREADY_EXISTS,
                f"Document already exists: {self._corpus.relative(path)}",
                path=self._corpus.relative(path),
            )

        frontmatter = {
            "description": DoubleQuotedScalarString(fm.description),
            "applyTo": DoubleQuotedScalarString(",".join(fm.globs)),
        }
        content = render_frontmatter(frontmatter, body or f"\n# {_title_for(name)}\n")
        self._corpus.write(path, content)
        logger.debug("Created %s", path)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": self._corpus.relative(path),
                "description": fm.description,
                "apply_to": fm.globs,
            },
        )
