"""applyTo glob parsing, validation, and matching.

``applyTo`` is a comma-separated list of glob patterns.  Matching follows
fnmatch semantics against corpus-relative POSIX paths:

- A pattern without ``/`` matches the basename or the full path.
- A pattern with ``/`` matches the full path; ``*`` crosses separators,
  so ``**/`` behaves like ``*/``.
- ``**/`` may also match zero directories: a leading ``**/`` matches
  files at the root and ``src/**/*.py`` matches ``src/a.py``.
"""

from __future__ import annotations

from fnmatch import fnmatchcase
from pathlib import PurePosixPath
from typing import Any


def split_apply_to(value: str) -> list[str]:
    """Split *value* on commas, keeping empty segments (for linting)."""
    return [segment.strip() for segment in value.split(",")]


def parse_apply_to(value: Any) -> list[str]:
    """Return the non-empty glob patterns named by an ``applyTo`` value.

    Accepts the canonical comma-separated string or a list of strings.
    Anything else yields an empty list.
    """
    if isinstance(value, str):
        return [p for p in split_apply_to(value) if p]
    if isinstance(value, list):
        patterns: list[str] = []
        for item in value:
            if isinstance(item, str):
                patterns.extend(p for p in split_apply_to(item) if p)
        return patterns
    return []


def glob_problem(pattern: str) -> str | None:
    """Describe what is wrong with *pattern*, or None if it looks sound."""
    if any(ch.isspace() for ch in pattern):
        return "contains whitespace"
    if pattern.startswith("/"):
        return "is absolute; patterns are relative to the project root"
    depth = 0
    for ch in pattern:
        if ch == "[":
            depth += 1
        elif ch == "]":
            if depth == 0:
                return "has an unbalanced ']'"
            depth -= 1
    if depth:
        return "has an unbalanced '['"
    return None


def normalize_path(path: str) -> str:
    """Normalize *path* to a POSIX relative form without a ``./`` prefix."""
    posix = PurePosixPath(path.replace("\\", "/")).as_posix()
    while posix.startswith("./"):
        posix = posix[2:]
    return posix


def match_path(pattern: str, path: str) -> bool:
    """Return True when *pattern* matches the relative *path*."""
    pattern = normalize_path(pattern)
    path = normalize_path(path)

    if "/" not in pattern:
        return fnmatchcase(PurePosixPath(path).name, pattern) or fnmatchcase(path, pattern)

    if fnmatchcase(path, pattern):
        return True
    if pattern.startswith("**/") and match_path(pattern[3:], path):
        return True
    # Each inner "/**/" may also stand for a single "/".
    idx = pattern.find("/**/")
    while idx != -1:
        if match_path(pattern[:idx] + pattern[idx + 3 :], path):
            return True
        idx = pattern.find("/**/", idx + 1)
    return False


def matches_any(patterns: list[str], path: str) -> bool:
    """Return True when any of *patterns* matches *path*."""
    return any(match_path(p, path) for p in patterns)
