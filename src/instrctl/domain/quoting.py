"""Plain-scalar detection and double-quoting of front-matter values.

Works line by line on the raw YAML block so that everything except the
rewritten value (comments, key order, other quoting) is left untouched.
A value is rewritten only when it sits on a single top-level line as a
plain scalar.  Callers re-load the result to confirm it stayed valid.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Characters that open a non-plain YAML value (quoted, block, or flow).
_NON_PLAIN_STARTS = ('"', "'", "|", ">", "[", "{")


@dataclass(frozen=True)
class PlainScalar:
    """A top-level ``key: value`` line carrying an unquoted value.

    ``index`` is the 0-based line index inside the YAML block.
    """

    key: str
    value: str
    comment: str
    index: int


def _key_pattern(key: str) -> re.Pattern[str]:
    return re.compile(rf"^{re.escape(key)}\s*:(?:\s+(?P<rest>.*))?$")


def _split_comment(rest: str) -> tuple[str, str]:
    """Split ``value  # comment`` into ``(value, "# comment")``."""
    idx = rest.find(" #")
    if idx == -1:
        return rest.strip(), ""
    return rest[:idx].strip(), rest[idx:].strip()


def find_plain_scalar(lines: list[str], key: str) -> PlainScalar | None:
    """Find the first top-level line for *key* whose value is a plain scalar."""
    pattern = _key_pattern(key)
    for index, line in enumerate(lines):
        match = pattern.match(line.rstrip())
        if match is None:
            continue
        rest = (match.group("rest") or "").strip()
        if not rest or rest.startswith(_NON_PLAIN_STARTS) or rest.startswith("#"):
            return None
        value, comment = _split_comment(rest)
        return PlainScalar(key=key, value=value, comment=comment, index=index)
    return None


def quote_scalar(value: str) -> str:
    """Return *value* as a YAML double-quoted scalar."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def quote_block(text: str, keys: list[str]) -> tuple[str, list[PlainScalar]]:
    """Double-quote the plain values of *keys* in the YAML block *text*.

    Returns the rewritten text and the scalars that were quoted.
    """
    lines = text.split("\n")
    changed: list[PlainScalar] = []
    for key in keys:
        scalar = find_plain_scalar(lines, key)
        if scalar is None:
            continue
        new_line = f"{key}: {quote_scalar(scalar.value)}"
        if scalar.comment:
            new_line = f"{new_line}  {scalar.comment}"
        lines[scalar.index] = new_line
        changed.append(scalar)
    return "\n".join(lines), changed
