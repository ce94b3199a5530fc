"""Progress overlay shown while slow work runs.

A single line with a pulsing dot, the label and the elapsed time, redrawn
on a repeating timer until the work settles. The streaming variant also
shows a running token estimate while a model response arrives, then the
authoritative total once the final message is in.
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from types import TracebackType
from typing import Protocol, TypeVar

from reenter.tui.defaults import get_prompt_defaults
from reenter.tui.redraw import RedrawController
from reenter.tui.render import render_completion, render_progress
from reenter.tui.terminal import ProcessTerminal, Terminal

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Rough characters-per-token ratio for the live estimate.
_CHARS_PER_TOKEN = 4


# ---------------------------------------------------------------------------
# Stream boundary
# ---------------------------------------------------------------------------


@dataclass
class MessageUsage:
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass
class ContentBlock:
    type: str
    text: str | None = None


@dataclass
class FinalMessage:
    usage: MessageUsage = field(default_factory=MessageUsage)
    content: list[ContentBlock] = field(default_factory=list)


class StreamLike(Protocol):
    """A streaming model response.

    ``on_text`` registers a callback for each text chunk; the callbacks fire
    while ``final_message`` is being awaited.
    """

    def on_text(self, callback: Callable[[str], None]) -> None: ...

    async def final_message(self) -> FinalMessage: ...


# ---------------------------------------------------------------------------
# Overlay
# ---------------------------------------------------------------------------


@dataclass
class OverlayState:
    start_time: float
    counter: int | None = None
    blink_on: bool = True
    completed: bool = False
    ticks: int = 0


class ProgressOverlay:
    """Owns the progress line and the timer that redraws it.

    Use as a context manager around the work: entering draws the first frame
    and starts the timer; leaving stops the timer. Leaving through an
    exception also clears the line. ``complete()`` writes the persistent
    completion line.
    """

    def __init__(
        self,
        label: str,
        *,
        terminal: Terminal | None = None,
        interval: float | None = None,
        streaming: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.label = label
        self._terminal = terminal or ProcessTerminal()
        self._redraw = RedrawController(self._terminal)
        self._interval = interval if interval is not None else get_prompt_defaults().tick_interval
        self._clock = clock
        self._timer_handle: asyncio.TimerHandle | None = None
        self._cursor_hidden = False
        self.state = OverlayState(start_time=clock(), counter=0 if streaming else None)

    # -- lifecycle ----------------------------------------------------------

    def __enter__(self) -> ProgressOverlay:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        line_pending = not self.state.completed
        self.stop()
        if exc is not None and line_pending:
            # Leave no stray progress line; the error surfaces on a blank line.
            self._redraw.clear()
            self._terminal.write("\n")
        self._restore_cursor()

    def start(self) -> None:
        self.state.start_time = self._clock()
        self._terminal.hide_cursor()
        self._cursor_hidden = True
        self._draw()
        self._schedule()

    def stop(self) -> None:
        """Stop the timer. Safe to call more than once."""
        self.state.completed = True
        if self._timer_handle is not None:
            self._timer_handle.cancel()
            self._timer_handle = None

    def complete(self, label: str | None = None) -> None:
        """Stop and replace the progress line with the completion line."""
        self.stop()
        self._redraw.finish(render_completion(label or self.label, self.state.counter))
        self._restore_cursor()

    def dismiss(self) -> None:
        """Stop and erase the progress line without writing a completion line."""
        self.stop()
        self._redraw.clear()
        self._restore_cursor()

    @property
    def elapsed(self) -> float:
        return self._clock() - self.state.start_time

    # -- streaming ----------------------------------------------------------

    def add_text(self, text: str) -> None:
        """Count a streamed chunk towards the live estimate and redraw."""
        if self.state.completed or self.state.counter is None:
            return
        self.state.counter += math.ceil(len(text) / _CHARS_PER_TOKEN)
        self._draw()

    # -- timer --------------------------------------------------------------

    def _schedule(self) -> None:
        loop = asyncio.get_running_loop()
        self._timer_handle = loop.call_later(self._interval, self._tick)

    def _tick(self) -> None:
        self._timer_handle = None
        if self.state.completed:
            return
        self.state.ticks += 1
        self.state.blink_on = not self.state.blink_on
        self._draw()
        self._schedule()

    def _draw(self) -> None:
        self._redraw.render(
            render_progress(self.label, self.elapsed, self.state.blink_on, self.state.counter)
        )

    def _restore_cursor(self) -> None:
        if self._cursor_hidden:
            self._terminal.show_cursor()
            self._cursor_hidden = False


async def with_spinner(
    label: str,
    done_label: str,
    work: Callable[[], Awaitable[T]],
    *,
    terminal: Terminal | None = None,
    interval: float | None = None,
) -> T:
    """Run *work* under a progress overlay and return its result.

    On success the line becomes ``● done_label``. On failure the line is
    cleared and the original exception propagates unchanged.
    """
    overlay = ProgressOverlay(label, terminal=terminal, interval=interval)
    with overlay:
        result = await work()
        overlay.complete(done_label)
    logger.debug("%s finished in %.2fs", label, overlay.elapsed)
    return result


async def with_streaming_overlay(
    label: str,
    source: StreamLike,
    transform: Callable[[str], T],
    *,
    terminal: Terminal | None = None,
    interval: float | None = None,
) -> T:
    """Show a token-counting overlay while *source* streams, then transform its text.

    The live count is an estimate (a quarter token per character); the
    completion line shows the input plus output tokens reported by the final
    message. Raises ``ValueError`` if the response does not start with a text
    block.
    """
    overlay = ProgressOverlay(label, terminal=terminal, interval=interval, streaming=True)
    with overlay:
        source.on_text(overlay.add_text)
        message = await source.final_message()
        overlay.state.counter = message.usage.input_tokens + message.usage.output_tokens
        overlay.complete()

    logger.debug("%s used %d tokens", label, overlay.state.counter)
    if not message.content or message.content[0].type != "text":
        raise ValueError("Expected text response from AI")
    return transform(message.content[0].text or "")
