"""Rich Console factory and theme for msgrules output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

MSGRULES_THEME = Theme(
    {
        "rules.ok": "bold green",
        "rules.error": "bold red",
        "rules.warning": "bold yellow",
        "rules.op": "bold cyan",
        "rules.key": "dim",
        "rules.title": "bold",
        "rules.origin.incoming": "green",
        "rules.origin.outgoing": "blue",
        "rules.origin.self": "magenta",
        "rules.required": "bold green",
        "rules.prohibited": "bold red",
    }
)

_ORIGIN_STYLES: dict[str, str] = {
    "incoming": "rules.origin.incoming",
    "outgoing": "rules.origin.outgoing",
    "self": "rules.origin.self",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=MSGRULES_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_origin(origin: str) -> str:
    """Return the Rich style name for a message origin."""
    return _ORIGIN_STYLES.get(origin, "")
