"""Filesystem operations for the instruction corpus.

INVARIANT: Files are truth.  instrctl keeps no index or cache; every run
reads documents from disk.
"""

from __future__ import annotations

from pathlib import Path

# Directories never descended into when discovering documents.
_SKIP_DIRS = frozenset({".git", "node_modules", "__pycache__"})


def read_text(path: Path) -> str:
    """Read a document as UTF-8, keeping its line endings."""
    with path.open(encoding="utf-8", newline="") as fh:
        return fh.read()


def write_text(path: Path, content: str) -> None:
    """Write *content* as UTF-8 without translating line endings."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(content)


def _skipped(path: Path, root: Path) -> bool:
    rel_parts = path.relative_to(root).parts[:-1]
    return any(part in _SKIP_DIRS or part.startswith(".") for part in rel_parts)


def find_instruction_files(
    directory: Path,
    *,
    pattern: str = "*.instructions.md",
    recursive: bool = False,
) -> list[Path]:
    """Discover instruction documents under *directory*.

    Non-recursive discovery mirrors ``<dir>/*.instructions.md``.  Recursive
    discovery skips ``.git``, hidden directories, and tool caches.
    Returns a sorted list; a missing directory yields an empty list.
    """
    if not directory.is_dir():
        return []

    candidates = directory.rglob(pattern) if recursive else directory.glob(pattern)
    results = [p for p in candidates if p.is_file() and not _skipped(p, directory)]
    return sorted(results)
