"""Unresolved template placeholder detection.

Guidance documents routinely show template syntax inside code samples
(Django ``{{ var }}``, SvelteKit ``{expr}``), so fenced code blocks and
inline code spans are blanked out before scanning.
"""

from __future__ import annotations

import re

DEFAULT_PLACEHOLDER_PATTERNS: list[str] = [
    r"\{\{[^{}\n]*\}\}",
    r"\[(?:TODO|TBD|PLACEHOLDER)[^\]\n]*\]",
    r"<(?:TODO|TBD|PLACEHOLDER)[^>\n]*>",
]

_FENCE = re.compile(r"^\s*(```|~~~)")
_INLINE_CODE = re.compile(r"`[^`\n]*`")


def strip_code(text: str) -> list[str]:
    """Return the lines of *text* with code blanked out (line count kept)."""
    out: list[str] = []
    fence: str | None = None
    for line in text.split("\n"):
        marker = _FENCE.match(line)
        if fence is not None:
            if marker is not None and marker.group(1) == fence:
                fence = None
            out.append("")
            continue
        if marker is not None:
            fence = marker.group(1)
            out.append("")
            continue
        out.append(_INLINE_CODE.sub("", line))
    return out


def compile_patterns(patterns: list[str]) -> list[re.Pattern[str]]:
    """Compile placeholder regexes.

    Raises:
        re.error: A pattern is not a valid regular expression.
    """
    return [re.compile(p) for p in patterns]


def find_placeholders(
    text: str,
    patterns: list[re.Pattern[str]],
    *,
    first_line: int = 1,
) -> list[tuple[int, str]]:
    """Return ``(line, placeholder)`` pairs found outside code in *text*.

    *first_line* is the file line number of the first line of *text*.
    """
    found: list[tuple[int, str]] = []
    for offset, line in enumerate(strip_code(text)):
        for pattern in patterns:
            for match in pattern.finditer(line):
                found.append((first_line + offset, match.group(0)))
    return found
