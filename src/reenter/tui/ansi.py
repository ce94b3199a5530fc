"""ANSI escape constants and the fixed style palette.

Plain string-wrapping functions; no hidden state.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Escape constants
# ---------------------------------------------------------------------------

RESET = "\x1b[0m"

HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"
CLEAR_LINE = "\x1b[2K"
CURSOR_UP_FMT = "\x1b[{}A"

# ---------------------------------------------------------------------------
# Glyphs
# ---------------------------------------------------------------------------

DOT = "●"
POINTER = "❯"
RULE = "─"


# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------


def cyan(text: str) -> str:
    return f"\x1b[36m{text}{RESET}"


def dim(text: str) -> str:
    return f"\x1b[90m{text}{RESET}"


def bold(text: str) -> str:
    return f"\x1b[1m{text}{RESET}"


def green(text: str) -> str:
    return f"\x1b[32m{text}{RESET}"


def red(text: str) -> str:
    return f"\x1b[31m{text}{RESET}"


def blue(text: str) -> str:
    return f"\x1b[94m{text}{RESET}"


def white(text: str) -> str:
    return f"\x1b[37m{text}{RESET}"


# Same code as dim.
gray = dim


def pulse_dot(on: bool) -> str:
    """The breathing indicator: white on one phase, gray on the other."""
    return white(DOT) if on else gray(DOT)


def done_dot() -> str:
    return green(DOT)


def header_dot() -> str:
    return blue(DOT)
