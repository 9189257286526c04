"""Light and dark palettes for the terminal UI.

To add a theme, define a ``Palette`` here and register it in ``THEMES``.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Palette:
    name: str
    accent: str
    muted: str
    question: str
    inline_code: str
    code_border: str
    syntax_theme: str


LIGHT = Palette(
    name="light",
    accent="bold blue",
    muted="grey50",
    question="bold white on blue",
    inline_code="bold blue on grey93",
    code_border="grey70",
    syntax_theme="default",
)

DARK = Palette(
    name="dark",
    accent="bold cyan",
    muted="grey70",
    question="bold white on dark_blue",
    inline_code="bold yellow on grey23",
    code_border="grey42",
    syntax_theme="monokai",
)

THEMES = {palette.name: palette for palette in (LIGHT, DARK)}


def toggle(palette: Palette) -> Palette:
    """Return the other palette."""
    return LIGHT if palette is DARK else DARK
