"""Lint rules for instruction documents.

Each rule has a stable code (``IN0xx``), a kebab-case name, a severity,
and a category.  Rules are plain functions registered with :func:`rule`;
plugins contribute extra :class:`Rule` objects through the
``register_rules`` hook.

Categories:

- ``structure``: the front-matter block itself (present, closed, YAML).
- ``fields``: required ``description`` / ``applyTo`` values.
- ``globs``: individual ``applyTo`` patterns.
- ``style``: quoting and unexpected keys.
- ``content``: the Markdown body.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import asdict, dataclass, field
from typing import Any

from instrctl.domain.content import FrontmatterNotMappingError
from instrctl.domain.document import InstructionDocument
from instrctl.domain.globs import glob_problem, matches_any, split_apply_to
from instrctl.domain.placeholders import find_placeholders
from instrctl.domain.quoting import find_plain_scalar

# ---------------------------------------------------------------------------
# Severity and category constants
# ---------------------------------------------------------------------------

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

SEVERITY_RANK: dict[str, int] = {SEVERITY_WARNING: 0, SEVERITY_ERROR: 1}

CAT_STRUCTURE = "structure"
CAT_FIELDS = "fields"
CAT_GLOBS = "globs"
CAT_STYLE = "style"
CAT_CONTENT = "content"

FIX_QUOTE_VALUE = "quote_value"


# ---------------------------------------------------------------------------
# Issue / Rule / RuleContext
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Issue:
    """A single lint finding."""

    code: str
    rule: str
    severity: str
    category: str
    path: str
    message: str
    line: int | None = None
    fix_action: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RuleContext:
    """Configuration the rules read while checking a document."""

    allowed_keys: tuple[str, ...] = ("description", "applyTo")
    quoted_keys: tuple[str, ...] = ("description", "applyTo")
    template_files: tuple[str, ...] = ("*brainstorm*",)
    placeholder_patterns: tuple[re.Pattern[str], ...] = field(default_factory=tuple)
    require_body: bool = True

    def is_template(self, document: InstructionDocument) -> bool:
        return matches_any(list(self.template_files), document.path)


CheckFn = Callable[[InstructionDocument, RuleContext], Iterable[Issue]]


@dataclass(frozen=True)
class Rule:
    """A registered lint rule."""

    code: str
    name: str
    severity: str
    category: str
    check: CheckFn
    summary: str = ""
    fixable: bool = False

    def issue(
        self,
        document: InstructionDocument,
        message: str,
        *,
        line: int | None = None,
        fix_action: str | None = None,
    ) -> Issue:
        """Build an :class:`Issue` attributed to this rule."""
        return Issue(
            code=self.code,
            rule=self.name,
            severity=self.severity,
            category=self.category,
            path=document.path,
            message=message,
            line=line,
            fix_action=fix_action,
        )

    def describe(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "severity": self.severity,
            "category": self.category,
            "summary": self.summary,
            "fixable": self.fixable,
        }


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

RULE_REGISTRY: dict[str, Rule] = {}

_CODE_PATTERN = re.compile(r"^[A-Z]+[0-9]+$")


def register_rule(new_rule: Rule) -> None:
    """Add *new_rule* to :data:`RULE_REGISTRY`.

    Raises:
        ValueError: The code is malformed, or the code or name is taken.
        TypeError: The rule's check is not callable.
    """
    if not _CODE_PATTERN.match(new_rule.code):
        msg = f"Rule code must look like 'IN001', got {new_rule.code!r}"
        raise ValueError(msg)
    if new_rule.severity not in SEVERITY_RANK:
        msg = f"Unknown severity {new_rule.severity!r} for rule {new_rule.code}"
        raise ValueError(msg)
    if not callable(new_rule.check):
        msg = f"Rule {new_rule.code} check must be callable"
        raise TypeError(msg)
    if new_rule.code in RULE_REGISTRY:
        msg = f"Rule code {new_rule.code} is already registered"
        raise ValueError(msg)
    if any(r.name == new_rule.name for r in RULE_REGISTRY.values()):
        msg = f"Rule name {new_rule.name!r} is already registered"
        raise ValueError(msg)
    RULE_REGISTRY[new_rule.code] = new_rule


def unregister_rule(code: str) -> None:
    """Remove a rule from :data:`RULE_REGISTRY` (no-op if absent)."""
    RULE_REGISTRY.pop(code, None)


def rule(
    code: str,
    name: str,
    severity: str,
    category: str,
    *,
    fixable: bool = False,
) -> Callable[[CheckFn], CheckFn]:
    """Decorator registering a check function as a built-in rule."""

    def decorator(fn: CheckFn) -> CheckFn:
        summary = (fn.__doc__ or "").strip().split("\n")[0]
        register_rule(
            Rule(
                code=code,
                name=name,
                severity=severity,
                category=category,
                check=fn,
                summary=summary,
                fixable=fixable,
            )
        )
        return fn

    return decorator


def get_rules(disabled: Iterable[str] = ()) -> list[Rule]:
    """Return registered rules sorted by code, minus *disabled* codes or names."""
    skip = set(disabled)
    return [
        r
        for code, r in sorted(RULE_REGISTRY.items())
        if code not in skip and r.name not in skip
    ]


def run_rules(
    document: InstructionDocument,
    rules: Iterable[Rule],
    context: RuleContext,
) -> list[Issue]:
    """Run *rules* over *document* and collect their issues."""
    issues: list[Issue] = []
    for r in rules:
        issues.extend(r.check(document, context))
    return issues


def _this(code: str) -> Rule:
    return RULE_REGISTRY[code]


def _key_line(document: InstructionDocument, key: str) -> int | None:
    """1-based file line of the top-level *key*, if it can be found."""
    pattern = re.compile(rf"^{re.escape(key)}\s*:")
    for index, line in enumerate(document.yaml_lines):
        if pattern.match(line):
            return document.block.start_line + index
    return None


# ---------------------------------------------------------------------------
# structure
# ---------------------------------------------------------------------------

_ALIAS_VALUE = re.compile(r"^(?P<key>[A-Za-z_][\w-]*)\s*:\s+\*")


@rule("IN001", "missing-frontmatter", SEVERITY_ERROR, CAT_STRUCTURE)
def check_missing_frontmatter(
    document: InstructionDocument, context: RuleContext
) -> Iterable[Issue]:
    """Document must open with a ``---`` front-matter block."""
    if not document.block.present:
        yield _this("IN001").issue(
            document, "No front-matter block (file must start with '---')", line=1
        )


@rule("IN002", "unterminated-frontmatter", SEVERITY_ERROR, CAT_STRUCTURE)
def check_unterminated_frontmatter(
    document: InstructionDocument, context: RuleContext
) -> Iterable[Issue]:
    """Front-matter block must be closed by a second ``---`` line."""
    if document.block.present and not document.block.closed:
        yield _this("IN002").issue(
            document, "Front-matter block is never closed with '---'", line=1
        )


@rule("IN003", "invalid-yaml", SEVERITY_ERROR, CAT_STRUCTURE)
def check_invalid_yaml(document: InstructionDocument, context: RuleContext) -> Iterable[Issue]:
    """Front-matter must be valid YAML."""
    error = document.yaml_error
    if error is None or isinstance(error, FrontmatterNotMappingError):
        return
    message = f"Invalid YAML in front-matter: {error}"
    line = error.line
    fix_action = None
    for index, text in enumerate(document.yaml_lines):
        match = _ALIAS_VALUE.match(text)
        if match is not None:
            message += (
                f" (unquoted '{match.group('key')}' value starting with '*' is read as"
                " a YAML alias; quote it)"
            )
            fix_action = FIX_QUOTE_VALUE
            if line is None:
                line = document.block.start_line + index
            break
    yield _this("IN003").issue(document, message, line=line, fix_action=fix_action)


@rule("IN004", "frontmatter-not-mapping", SEVERITY_ERROR, CAT_STRUCTURE)
def check_not_mapping(document: InstructionDocument, context: RuleContext) -> Iterable[Issue]:
    """Front-matter must be a YAML mapping of keys to values."""
    if isinstance(document.yaml_error, FrontmatterNotMappingError):
        error = document.yaml_error
        yield _this("IN004").issue(document, str(error), line=error.line)


# ---------------------------------------------------------------------------
# fields
# ---------------------------------------------------------------------------


@rule("IN010", "missing-description", SEVERITY_ERROR, CAT_FIELDS)
def check_missing_description(
    document: InstructionDocument, context: RuleContext
) -> Iterable[Issue]:
    """Front-matter must define ``description``."""
    fm = document.frontmatter
    if fm is not None and "description" not in fm:
        yield _this("IN010").issue(document, "Front-matter has no 'description'", line=1)


@rule("IN011", "empty-description", SEVERITY_ERROR, CAT_FIELDS)
def check_empty_description(
    document: InstructionDocument, context: RuleContext
) -> Iterable[Issue]:
    """``description`` must not be empty."""
    fm = document.frontmatter
    if fm is None or "description" not in fm:
        return
    value = fm["description"]
    if value is None or (isinstance(value, str) and not value.strip()):
        yield _this("IN011").issue(
            document, "'description' is empty", line=_key_line(document, "description")
        )


@rule("IN012", "description-not-string", SEVERITY_ERROR, CAT_FIELDS)
def check_description_type(
    document: InstructionDocument, context: RuleContext
) -> Iterable[Issue]:
    """``description`` must be a string."""
    fm = document.frontmatter
    if fm is None:
        return
    value = fm.get("description")
    if value is not None and not isinstance(value, str):
        yield _this("IN012").issue(
            document,
            f"'description' must be a string, got {type(value).__name__}",
            line=_key_line(document, "description"),
        )


@rule("IN020", "missing-applyto", SEVERITY_ERROR, CAT_FIELDS)
def check_missing_apply_to(
    document: InstructionDocument, context: RuleContext
) -> Iterable[Issue]:
    """Front-matter must define ``applyTo``."""
    fm = document.frontmatter
    if fm is not None and "applyTo" not in fm:
        yield _this("IN020").issue(document, "Front-matter has no 'applyTo'", line=1)


def _apply_to_segments(value: Any) -> list[str] | None:
    """Raw segments of an ``applyTo`` value, or None for an invalid type."""
    if isinstance(value, str):
        return split_apply_to(value)
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        segments: list[str] = []
        for item in value:
            segments.extend(split_apply_to(item))
        return segments
    return None


@rule("IN021", "empty-applyto", SEVERITY_ERROR, CAT_FIELDS)
def check_empty_apply_to(document: InstructionDocument, context: RuleContext) -> Iterable[Issue]:
    """``applyTo`` must name at least one glob pattern."""
    fm = document.frontmatter
    if fm is None or "applyTo" not in fm:
        return
    value = fm["applyTo"]
    segments = [] if value is None else _apply_to_segments(value)
    if segments is not None and not any(segments):
        yield _this("IN021").issue(
            document,
            "'applyTo' names no glob patterns",
            line=_key_line(document, "applyTo"),
        )


@rule("IN022", "applyto-invalid-type", SEVERITY_ERROR, CAT_FIELDS)
def check_apply_to_type(document: InstructionDocument, context: RuleContext) -> Iterable[Issue]:
    """``applyTo`` must be a comma-separated string (or a list of strings)."""
    fm = document.frontmatter
    if fm is None:
        return
    value = fm.get("applyTo")
    if value is not None and _apply_to_segments(value) is None:
        yield _this("IN022").issue(
            document,
            f"'applyTo' must be a comma-separated string, got {type(value).__name__}",
            line=_key_line(document, "applyTo"),
        )


# ---------------------------------------------------------------------------
# globs
# ---------------------------------------------------------------------------


@rule("IN023", "applyto-empty-pattern", SEVERITY_WARNING, CAT_GLOBS)
def check_empty_pattern(document: InstructionDocument, context: RuleContext) -> Iterable[Issue]:
    """``applyTo`` should not contain empty entries (stray commas)."""
    fm = document.frontmatter
    if fm is None or fm.get("applyTo") is None:
        return
    segments = _apply_to_segments(fm["applyTo"])
    if segments and any(segments) and not all(segments):
        yield _this("IN023").issue(
            document,
            "'applyTo' contains an empty pattern (stray comma)",
            line=_key_line(document, "applyTo"),
        )


@rule("IN024", "applyto-malformed-glob", SEVERITY_WARNING, CAT_GLOBS)
def check_malformed_glob(document: InstructionDocument, context: RuleContext) -> Iterable[Issue]:
    """Each ``applyTo`` pattern should be a well-formed relative glob.

    Placeholder patterns in template documents are not globs yet and are
    skipped.
    """
    fm = document.frontmatter
    if fm is None or fm.get("applyTo") is None:
        return
    line = _key_line(document, "applyTo")
    templated = context.is_template(document)
    for pattern in _apply_to_segments(fm["applyTo"]) or []:
        if not pattern:
            continue
        if templated and any(p.search(pattern) for p in context.placeholder_patterns):
            continue
        problem = glob_problem(pattern)
        if problem is not None:
            yield _this("IN024").issue(
                document, f"applyTo pattern {pattern!r} {problem}", line=line
            )


# ---------------------------------------------------------------------------
# style
# ---------------------------------------------------------------------------


@rule("IN030", "unquoted-value", SEVERITY_WARNING, CAT_STYLE, fixable=True)
def check_unquoted_value(document: InstructionDocument, context: RuleContext) -> Iterable[Issue]:
    """Configured keys should hold quoted string values."""
    if document.frontmatter is None:
        return
    lines = document.yaml_lines
    for key in context.quoted_keys:
        scalar = find_plain_scalar(lines, key)
        if scalar is None:
            continue
        yield _this("IN030").issue(
            document,
            f"'{key}' value is not quoted",
            line=document.block.start_line + scalar.index,
            fix_action=FIX_QUOTE_VALUE,
        )


@rule("IN031", "unknown-key", SEVERITY_WARNING, CAT_STYLE)
def check_unknown_key(document: InstructionDocument, context: RuleContext) -> Iterable[Issue]:
    """Front-matter should only use the configured keys."""
    fm = document.frontmatter
    if fm is None or not context.allowed_keys:
        return
    for key in fm:
        if str(key) not in context.allowed_keys:
            yield _this("IN031").issue(
                document,
                f"Unexpected front-matter key {str(key)!r}",
                line=_key_line(document, str(key)),
            )


# ---------------------------------------------------------------------------
# content
# ---------------------------------------------------------------------------


@rule("IN040", "unresolved-placeholder", SEVERITY_ERROR, CAT_CONTENT)
def check_placeholders(document: InstructionDocument, context: RuleContext) -> Iterable[Issue]:
    """Documents must not contain unresolved template placeholders."""
    if not context.placeholder_patterns or context.is_template(document):
        return
    patterns = list(context.placeholder_patterns)
    found: list[tuple[int, str]] = []
    if document.block.closed:
        found.extend(
            find_placeholders(
                document.block.text, patterns, first_line=document.block.start_line
            )
        )
        found.extend(
            find_placeholders(document.body, patterns, first_line=document.body_first_line)
        )
    elif not document.block.present:
        found.extend(find_placeholders(document.body, patterns))
    for line, placeholder in found:
        yield _this("IN040").issue(
            document, f"Unresolved template placeholder {placeholder!r}", line=line
        )


@rule("IN041", "empty-body", SEVERITY_WARNING, CAT_CONTENT)
def check_empty_body(document: InstructionDocument, context: RuleContext) -> Iterable[Issue]:
    """Documents should carry guidance after the front-matter."""
    if context.require_body and document.block.closed and not document.body.strip():
        yield _this("IN041").issue(
            document,
            "Document has no content after the front-matter",
            line=document.block.end_line,
        )
