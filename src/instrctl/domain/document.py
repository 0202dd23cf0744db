"""InstructionDocument — one parsed ``*.instructions.md`` file.

Loading never raises for malformed content: the problems are recorded on
the document and reported by lint rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from instrctl.domain.content import (
    FrontmatterBlock,
    FrontmatterError,
    load_yaml_block,
    split_frontmatter,
)


@dataclass(frozen=True)
class InstructionDocument:
    """A document with its front-matter block, loaded mapping, and body."""

    path: str
    content: str
    block: FrontmatterBlock
    frontmatter: dict[str, Any] | None = None
    yaml_error: FrontmatterError | None = None

    @property
    def body(self) -> str:
        return self.block.body

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]

    @property
    def body_first_line(self) -> int:
        """1-based file line where the body starts."""
        if self.block.end_line is None:
            return 1
        lines = self.content.replace("\r\n", "\n").split("\n")
        after = lines[self.block.end_line : self.block.end_line + 2]
        # split_frontmatter drops one blank separator line after the block.
        skipped = 1 if len(after) == 2 and after[0] == "" else 0
        return self.block.end_line + 1 + skipped

    @property
    def yaml_lines(self) -> list[str]:
        return self.block.text.split("\n")


def load_document(path: str, content: str) -> InstructionDocument:
    """Parse *content* into an :class:`InstructionDocument`."""
    block = split_frontmatter(content)
    if not block.closed:
        return InstructionDocument(path=path, content=content, block=block)

    try:
        fm = load_yaml_block(block.text)
    except FrontmatterError as exc:
        return InstructionDocument(path=path, content=content, block=block, yaml_error=exc)
    return InstructionDocument(path=path, content=content, block=block, frontmatter=fm)
