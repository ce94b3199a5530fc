"""In-place frame replacement.

The controller remembers the last frame it wrote and, before writing the
next one, erases exactly the terminal rows that frame occupies at the
current width. It never clears the screen, so output printed before the
prompt stays intact above it.
"""

from __future__ import annotations

import math

from reenter.tui.ansi import CLEAR_LINE, CURSOR_UP_FMT
from reenter.tui.terminal import Terminal
from reenter.tui.utils import visible_width


def frame_extent(frame: str, columns: int) -> int:
    """Terminal rows *frame* occupies once long lines wrap at *columns*."""
    columns = max(1, columns)
    return sum(
        max(1, math.ceil(visible_width(line) / columns)) for line in frame.split("\n")
    )


class RedrawController:
    def __init__(self, terminal: Terminal) -> None:
        self._terminal = terminal
        self._previous: str | None = None

    @property
    def extent(self) -> int:
        """Rows owned by the frame currently on screen (0 before the first render)."""
        if self._previous is None:
            return 0
        return frame_extent(self._previous, self._terminal.columns)

    def _erase_sequence(self) -> str:
        rows = self.extent
        if rows == 0:
            return ""
        # Cursor sits on the frame's last row; walk up, clearing as we go.
        return "\r" + CLEAR_LINE + (CURSOR_UP_FMT.format(1) + CLEAR_LINE) * (rows - 1)

    def render(self, frame: str) -> None:
        """Replace the previous frame with *frame* in a single write."""
        self._terminal.write(self._erase_sequence() + frame)
        self._previous = frame

    def clear(self) -> None:
        """Erase the current frame, leaving the cursor at column 0 of its first row."""
        sequence = self._erase_sequence()
        if sequence:
            self._terminal.write(sequence)
        self._previous = None

    def finish(self, frame: str) -> None:
        """Write a final frame and move below it; later output starts on a fresh line."""
        self._terminal.write(self._erase_sequence() + frame + "\n")
        self._previous = None
