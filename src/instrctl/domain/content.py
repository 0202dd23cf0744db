"""Front-matter parsing and rendering for instruction documents.

An instruction document opens with a ``---`` line, holds a YAML mapping,
and closes the block with a second ``---`` line.  Everything after the
closing delimiter is the Markdown body.

Parsing is split in two steps so lint rules can report on documents that
are only partly well-formed:

- :func:`split_frontmatter` locates the block (no YAML involved).
- :func:`load_yaml_block` loads the YAML text, raising
  :class:`FrontmatterError` with a 1-based file line on failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import MarkedYAMLError, YAMLError

# ---------------------------------------------------------------------------
# YAML parser (round-trip preserves comments and quote styles)
# ---------------------------------------------------------------------------


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel.yaml's YAML object is stateful; a failed load or dump can leave
    a shared instance in a broken state, so every call gets its own.
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    y.width = 4096
    return y


CANONICAL_KEY_ORDER: list[str] = ["description", "applyTo"]

FRONTMATTER_DELIMITER = "---"


class FrontmatterError(ValueError):
    """Front-matter YAML could not be loaded.

    Attributes:
        line: 1-based line in the *file* where the problem was detected,
            or None when the parser gave no position.
    """

    def __init__(self, message: str, *, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line


class FrontmatterNotMappingError(FrontmatterError):
    """Front-matter YAML loaded, but not as a mapping."""


@dataclass(frozen=True)
class FrontmatterBlock:
    """Location of the front-matter block inside a document.

    ``start_line`` is the 1-based file line of the first YAML line and
    ``end_line`` the 1-based line of the closing delimiter (None when the
    block never closes).
    """

    present: bool
    closed: bool
    text: str = ""
    body: str = ""
    start_line: int = 2
    end_line: int | None = None


# ---------------------------------------------------------------------------
# Splitting / loading
# ---------------------------------------------------------------------------


def split_frontmatter(content: str) -> FrontmatterBlock:
    """Locate the front-matter block in *content*.

    Handles both ``\\n`` and ``\\r\\n`` line endings.  A leading UTF-8 BOM
    is ignored.
    """
    normalized = content.replace("\r\n", "\n").lstrip("\ufeff")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return FrontmatterBlock(present=False, closed=False, body=normalized)

    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONTMATTER_DELIMITER:
            body = "\n".join(lines[i + 1 :])
            if body.startswith("\n"):
                body = body[1:]
            return FrontmatterBlock(
                present=True,
                closed=True,
                text="\n".join(lines[1:i]),
                body=body,
                end_line=i + 1,
            )

    return FrontmatterBlock(
        present=True,
        closed=False,
        text="\n".join(lines[1:]),
    )


def load_yaml_block(text: str, *, line_offset: int = 1) -> dict[str, Any]:
    """Load a YAML front-matter block into a mapping.

    *line_offset* is the number of file lines preceding *text* (1 for the
    opening delimiter) so reported lines point into the file.

    Raises:
        FrontmatterError: The YAML is invalid or is not a mapping.
    """
    try:
        data = _new_yaml().load(text)
    except MarkedYAMLError as exc:
        mark = exc.problem_mark or exc.context_mark
        line = mark.line + 1 + line_offset if mark is not None else None
        problem = exc.problem or exc.context or "invalid YAML"
        raise FrontmatterError(str(problem), line=line) from exc
    except YAMLError as exc:
        raise FrontmatterError(str(exc)) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"front-matter must be a mapping, got {type(data).__name__}"
        raise FrontmatterNotMappingError(msg, line=line_offset + 1)
    return data


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML front-matter and body from markdown content.

    Returns:
        A ``(frontmatter_dict, body_text)`` tuple. If no closed
        front-matter block is found, returns ``({}, content)``.

    Raises:
        FrontmatterError: The block exists but does not load as a mapping.
    """
    block = split_frontmatter(content)
    if not block.closed:
        return {}, content
    return load_yaml_block(block.text), block.body


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def order_frontmatter(fm: dict[str, Any]) -> dict[str, Any]:
    """Return *fm* with keys in canonical order.

    ``description`` and ``applyTo`` come first, then any remaining keys
    sorted alphabetically.  ``None`` values are omitted.
    """
    ordered: dict[str, Any] = {}
    for key in CANONICAL_KEY_ORDER:
        if key in fm and fm[key] is not None:
            ordered[key] = fm[key]

    for key in sorted(fm.keys(), key=str):
        if key not in ordered and fm[key] is not None:
            ordered[key] = fm[key]

    return ordered


def render_frontmatter(frontmatter: dict[str, Any], body: str) -> str:
    """Render a front-matter dict and body text into markdown."""
    buf = StringIO()
    _new_yaml().dump(order_frontmatter(frontmatter), buf)

    parts = [FRONTMATTER_DELIMITER, "\n", buf.getvalue(), FRONTMATTER_DELIMITER, "\n"]
    if body:
        parts.append(body)
    return "".join(parts)


def replace_frontmatter_text(content: str, block: FrontmatterBlock, new_text: str) -> str:
    """Return *content* with the YAML of *block* replaced by *new_text*.

    The opening and closing delimiters, the body, a leading BOM, and the
    file's line-ending style are all kept.

    Raises:
        ValueError: *block* is not a closed front-matter block.
    """
    if not block.closed or block.end_line is None:
        msg = "cannot replace front-matter of a document without a closed block"
        raise ValueError(msg)

    crlf = "\r\n" in content
    lines = content.replace("\r\n", "\n").split("\n")
    lines[1 : block.end_line - 1] = new_text.split("\n")
    rendered = "\n".join(lines)
    return rendered.replace("\n", "\r\n") if crlf else rendered
