"""Frame rendering: pure functions from prompt/overlay state to a frame string.

A frame is everything written for one render cycle, ANSI styling included.
Nothing here performs I/O; the redraw controller decides how the frame
replaces the previous one.
"""

from __future__ import annotations

from collections.abc import Sequence

from reenter.tui.ansi import (
    POINTER,
    RULE,
    bold,
    cyan,
    dim,
    done_dot,
    gray,
    header_dot,
    pulse_dot,
)
from reenter.tui.state import Choice, PromptStatus, SelectState, TextInputState
from reenter.tui.utils import truncate_to_width, visible_width

# Descriptions squeezed below this many columns are dropped instead.
_MIN_DESCRIPTION_WIDTH = 10


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


def page_window(active: int, total: int, page_size: int) -> list[int]:
    """Indices of the choices visible on the active page.

    Lists that fit on one page are shown whole, in order. Longer lists show a
    window of ``page_size`` entries centred on ``active`` that loops around
    the ends, so the entry before the first choice is the last one.
    """
    if total <= 0:
        return []
    page_size = max(1, page_size)
    if total <= page_size:
        return list(range(total))

    start = active - page_size // 2
    return [(start + offset) % total for offset in range(page_size)]


# ---------------------------------------------------------------------------
# Select prompt
# ---------------------------------------------------------------------------


def _render_choice(choice: Choice, is_active: bool, columns: int | None) -> str:
    if not is_active:
        return f"  {choice.title}"

    prefix = f"{POINTER} {choice.title}"
    line = f"{dim(POINTER)} {bold(choice.title)}"
    if not choice.description:
        return line

    description = " ".join(choice.description.split())
    if columns is not None:
        room = columns - visible_width(prefix) - 2
        if room < _MIN_DESCRIPTION_WIDTH:
            return line
        description = truncate_to_width(description, room)
    return f"{line}  {dim(description)}"


def render_select(
    message: str,
    choices: Sequence[Choice],
    state: SelectState,
    page_size: int = 7,
    columns: int | None = None,
) -> str:
    """Render the select prompt.

    Idle: a header line, then one line per visible choice. Done: the single
    collapsed line that stays on screen after the prompt exits.
    """
    if state.status is PromptStatus.DONE:
        chosen = choices[state.active_index]
        return f"{done_dot()} {message}  {cyan(chosen.title)}"

    lines = [f"{header_dot()} {bold(message)}"]
    for index in page_window(state.active_index, len(choices), page_size):
        lines.append(_render_choice(choices[index], index == state.active_index, columns))
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Free-text prompt
# ---------------------------------------------------------------------------


def render_text_input(message: str, state: TextInputState, columns: int | None = None) -> str:
    """Render the free-text prompt.

    Idle: a header line, a gray rule across the full width (when *columns* is
    known), then the input line. Done: the collapsed answer line.
    """
    if state.status is PromptStatus.DONE:
        return f"{done_dot()} {message}  {cyan(state.buffer.strip())}"
    lines = [f"{header_dot()} {bold(message)}"]
    if columns is not None:
        lines.append(gray(RULE * max(1, columns)))
    lines.append(f"{dim(POINTER)} {state.buffer}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Progress overlay
# ---------------------------------------------------------------------------


def format_elapsed(seconds: float) -> str:
    s = int(seconds)
    if s < 60:
        return f"{s}s"
    return f"{s // 60}m {s % 60}s"


def render_progress(label: str, elapsed: float, blink_on: bool, counter: int | None = None) -> str:
    """The live progress line: pulsing dot, label, token count, elapsed time."""
    if counter is None:
        detail = f"({label}  · {format_elapsed(elapsed)})"
    else:
        detail = f"({label}  {counter} tokens · {format_elapsed(elapsed)})"
    return f"{pulse_dot(blink_on)} {gray(detail)}"


def render_completion(label: str, counter: int | None = None) -> str:
    line = f"{done_dot()} {label}"
    if counter is not None:
        line += f"  {gray(f'({counter} tokens)')}"
    return line
