"""Rich Console factory and theme for instrctl output.

Consoles render to a StringIO buffer so the ``format_result() -> str``
contract holds.  In non-TTY environments (tests, pipes) Rich disables
color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

INSTR_THEME = Theme(
    {
        "instr.ok": "bold green",
        "instr.error": "bold red",
        "instr.warning": "bold yellow",
        "instr.op": "bold cyan",
        "instr.key": "dim",
        "instr.path": "bold blue",
        "instr.code": "magenta",
        "instr.glob": "cyan",
        "instr.line": "dim",
    }
)

_SEVERITY_STYLES: dict[str, str] = {
    "error": "instr.error",
    "warning": "instr.warning",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps test output stable).
    """
    return Console(
        file=StringIO(),
        theme=INSTR_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_severity(severity: str) -> str:
    return _SEVERITY_STYLES.get(severity, "")
