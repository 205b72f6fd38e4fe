"""Rich Console factory and theme for calpack output.

Consoles render into a StringIO buffer so renderers keep returning plain
strings.  Without a terminal (tests, pipes) Rich drops the color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CALPACK_THEME = Theme(
    {
        "cal.ok": "bold green",
        "cal.error": "bold red",
        "cal.op": "bold cyan",
        "cal.key": "dim",
        "cal.index": "bold blue",
        "cal.time": "bold",
        "cal.domain": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console writing to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=CALPACK_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Text rendered so far by a console from :func:`create_console`."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
