"""ANSI rendering of rich ``Text`` for hints and error messages."""

from rich.console import Console
from rich.text import Text


def render(text: Text) -> str:
    """Render ``text`` to a string with standard 16-color ANSI codes."""
    console = Console(
        force_terminal=True,
        color_system="standard",
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )
    with console.capture() as capture:
        console.print(text, end="")
    return capture.get()


def strip_styles(rendered: str) -> str:
    """Plain text of a string produced by :func:`render`."""
    return Text.from_ansi(rendered).plain
