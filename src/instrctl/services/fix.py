"""FixService — quote plain front-matter values in place.

For each document, single-line plain values of the configured keys are
wrapped in double quotes.  The rewrite is accepted only if the block
still loads as a mapping and every rewritten key keeps its text; any
other document is left untouched and reported as a warning.
"""

from __future__ import annotations

import logging

from instrctl.config.logging import document_context
from instrctl.domain.content import FrontmatterError, load_yaml_block, replace_frontmatter_text
from instrctl.domain.document import InstructionDocument
from instrctl.domain.quoting import find_plain_scalar, quote_block
from instrctl.services.base import BaseService
from instrctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


def _non_string_keys(document: InstructionDocument, keys: list[str]) -> list[str]:
    """Return the *keys* whose plain value YAML reads as null, a number or a bool.

    Quoting those would turn them into strings and hide the type error.
    """
    found: list[str] = []
    for key in keys:
        scalar = find_plain_scalar(document.yaml_lines, key)
        if scalar is None:
            continue
        if document.frontmatter is not None:
            value = document.frontmatter.get(key)
        else:
            try:
                value = load_yaml_block(f"{key}: {scalar.value}").get(key)
            except FrontmatterError:
                continue
        if not isinstance(value, str):
            found.append(key)
    return found


class FixService(BaseService):
    """Repairs fixable style issues (unquoted values)."""

    def fix(
        self,
        *,
        dry_run: bool = False,
        keys: list[str] | None = None,
        paths: list[str] | None = None,
    ) -> ServiceResult:
        """Quote plain values of *keys* (default: ``check.quoted_keys``).

        Args:
            dry_run: Report what would change without writing.
            keys: Front-matter keys whose values should be quoted.
            paths: Fix only these files instead of the whole corpus.
        """
        files = self._resolve_paths("fix", paths)
        if isinstance(files, ServiceResult):
            return files

        keys = keys or list(self._corpus.settings.check.quoted_keys)
        warnings: list[str] = []
        fixes: list[dict[str, object]] = []
        files_changed = 0

        for path, document in self._load_all(files, warnings):
            with document_context(document.path):
                if not document.block.closed:
                    warnings.append(f"Skipped {document.path}: no closed front-matter block")
                    continue

                fm = document.frontmatter
                not_strings = _non_string_keys(document, keys)
                if not_strings:
                    warnings.append(
                        f"Skipped {', '.join(not_strings)} in {document.path}:"
                        " not a string value; fix it by hand"
                    )
                quote_keys = [k for k in keys if k not in not_strings]

                new_text, changed = quote_block(document.block.text, quote_keys)
                if not changed:
                    continue

                try:
                    reloaded = load_yaml_block(new_text)
                except FrontmatterError as exc:
                    warnings.append(f"Skipped {document.path}: quoting leaves invalid YAML ({exc})")
                    continue

                drifted = [
                    s.key
                    for s in changed
                    if reloaded.get(s.key) != (fm.get(s.key) if fm is not None else s.value)
                ]
                if drifted:
                    warnings.append(
                        f"Skipped {document.path}: {', '.join(drifted)} spans several lines;"
                        " quote it by hand"
                    )
                    continue

                if not dry_run:
                    self._corpus.write(
                        path, replace_frontmatter_text(document.content, document.block, new_text)
                    )
                files_changed += 1
                for scalar in changed:
                    fixes.append(
                        {
                            "path": document.path,
                            "key": scalar.key,
                            "line": document.block.start_line + scalar.index,
                            "value": scalar.value,
                        }
                    )
                logger.debug("Quoted %s in %s", ", ".join(s.key for s in changed), document.path)

        return ServiceResult(
            ok=True,
            op="fix",
            data={
                "fixes": fixes,
                "count": len(fixes),
                "files_changed": files_changed,
                "dry_run": dry_run,
            },
            warnings=warnings,
        )
