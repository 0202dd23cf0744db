"""CheckService — front-matter and content hygiene.

Single command following the linter pattern: every enabled rule runs over
every document, issues are filtered by severity, and the run is healthy
when no error-severity issue remains.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from instrctl.config.logging import document_context
from instrctl.domain.rules import (
    RULE_REGISTRY,
    SEVERITY_ERROR,
    SEVERITY_RANK,
    SEVERITY_WARNING,
    Issue,
    Rule,
    RuleContext,
    run_rules,
)
from instrctl.services.base import BaseService
from instrctl.services.result import INVALID_CONFIG, ServiceResult

if TYPE_CHECKING:
    from instrctl.domain.document import InstructionDocument

logger = logging.getLogger(__name__)


class CheckService(BaseService):
    """Runs lint rules over the instruction corpus."""

    def check(
        self,
        *,
        min_severity: str = SEVERITY_WARNING,
        paths: list[str] | None = None,
    ) -> ServiceResult:
        """Report issues without modifying anything.

        Args:
            min_severity: Hide issues below this severity.
            paths: Check only these files instead of the whole corpus.
        """
        files = self._resolve_paths("check", paths)
        if isinstance(files, ServiceResult):
            return files

        try:
            context = self._corpus.rule_context()
        except re.error as exc:
            return ServiceResult.failure(
                "check",
                INVALID_CONFIG,
                f"Invalid placeholder pattern in [check]: {exc}",
                pattern=str(exc.pattern),
            )

        rules = self._corpus.rules()
        warnings = self._corpus.plugin_warnings
        threshold = SEVERITY_RANK[min_severity]

        issues: list[Issue] = []
        documents = self._load_all(files, warnings)
        for _path, document in documents:
            with document_context(document.path):
                found = self._run(document, rules, context, warnings)
                logger.debug("Checked %s: %d issues", document.path, len(found))
            issues.extend(i for i in found if SEVERITY_RANK[i.severity] >= threshold)

        issues.sort(key=lambda i: (i.path, i.line or 0, i.code))
        error_count = sum(1 for i in issues if i.severity == SEVERITY_ERROR)

        self._dispatch_event(
            "post_check",
            {
                "files_checked": len(documents),
                "issues_found": len(issues),
                "error_count": error_count,
            },
            warnings,
        )

        return ServiceResult(
            ok=True,
            op="check",
            data={
                "issues": [i.to_dict() for i in issues],
                "count": len(issues),
                "error_count": error_count,
                "warning_count": len(issues) - error_count,
                "files_checked": len(documents),
                "healthy": error_count == 0,
            },
            warnings=warnings,
        )

    def _run(
        self,
        document: InstructionDocument,
        rules: list[Rule],
        context: RuleContext,
        warnings: list[str],
    ) -> list[Issue]:
        """Run built-in rules directly and plugin rules behind a guard.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        builtin = [r for r in rules if RULE_REGISTRY.get(r.code) is r]
        found = run_rules(document, builtin, context)
        for plugin_rule in rules:
            if RULE_REGISTRY.get(plugin_rule.code) is plugin_rule:
                continue
            try:
                found.extend(plugin_rule.check(document, context))
            except Exception:
                logger.warning("Plugin rule %s failed", plugin_rule.code, exc_info=True)
                warnings.append(f"Rule {plugin_rule.code} failed on {document.path}")
        return found
