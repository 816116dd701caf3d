"""Rich Console factory and theme for setup-kced output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, CI logs) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SETUP_THEME = Theme(
    {
        "setup.ok": "bold green",
        "setup.error": "bold red",
        "setup.op": "bold cyan",
        "setup.key": "dim",
        "setup.version": "bold blue",
        "setup.path": "dim",
        "setup.hit": "green",
        "setup.miss": "yellow",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=SETUP_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
