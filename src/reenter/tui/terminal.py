"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal`` backed by
the process's stdin/stdout. Prompts only talk to the protocol, so tests can
drive them with a virtual terminal instead of a real TTY.
"""

from __future__ import annotations

import asyncio
import codecs
import logging
import os
import sys
import termios
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Protocol, TextIO

from reenter.tui.ansi import HIDE_CURSOR, SHOW_CURSOR
from reenter.tui.keys import split_sequences

logger = logging.getLogger(__name__)

_EOF = object()


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    def raw_mode(self, *, hide_cursor: bool = False) -> AbstractContextManager[None]: ...

    async def read_key(self) -> str: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal backed by ``sys.stdin``/``sys.stdout``.

    Raw mode turns off echo, line buffering and signal generation on input
    (so Ctrl-C arrives as the ``\\x03`` byte) while leaving output processing
    alone, so ``"\\n"`` in a frame still returns the carriage.
    """

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._queue: asyncio.Queue[object] | None = None
        self._reader_fd: int | None = None
        self._decoder: codecs.IncrementalDecoder | None = None

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(self._stdout.fileno()).columns or 80
        except (ValueError, OSError):
            return 80

    @property
    def is_interactive(self) -> bool:
        try:
            return os.isatty(self._stdin.fileno())
        except (ValueError, OSError):
            return False

    # -- raw mode -----------------------------------------------------------

    @contextmanager
    def raw_mode(self, *, hide_cursor: bool = False) -> Iterator[None]:
        """Put stdin in raw mode for the duration of the block.

        The original terminal attributes and cursor visibility are restored
        on every exit path, including exceptions raised inside the block.
        Must be entered from inside a running event loop.
        """
        if not self.is_interactive:
            raise RuntimeError("interactive prompts need a terminal")

        fd = self._stdin.fileno()
        loop = asyncio.get_running_loop()
        original = termios.tcgetattr(fd)

        mode = list(original)
        mode[0] &= ~(termios.ICRNL | termios.IXON)  # c_iflag
        mode[3] &= ~(termios.ECHO | termios.ICANON | termios.ISIG | termios.IEXTEN)  # c_lflag
        mode[6] = list(mode[6])
        mode[6][termios.VMIN] = 1
        mode[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSAFLUSH, mode)
        logger.debug("Entered raw mode on fd %d", fd)

        self._queue = asyncio.Queue()
        # A character split across two reads is held back until it is complete.
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        loop.add_reader(fd, self._on_stdin_readable)
        self._reader_fd = fd
        if hide_cursor:
            self.hide_cursor()

        try:
            yield
        finally:
            loop.remove_reader(fd)
            self._reader_fd = None
            self._queue = None
            self._decoder = None
            if hide_cursor:
                self.show_cursor()
            termios.tcsetattr(fd, termios.TCSADRAIN, original)
            logger.debug("Restored terminal attributes on fd %d", fd)

    async def read_key(self) -> str:
        """Wait for the next complete key sequence."""
        if self._queue is None:
            raise RuntimeError("read_key() called outside raw_mode()")
        item = await self._queue.get()
        if item is _EOF:
            raise EOFError("stdin closed")
        return item  # type: ignore[return-value]

    # -- write --------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write directly to stdout, bypassing buffering."""
        try:
            self._stdout.write(data)
            self._stdout.flush()
        except BrokenPipeError:
            logger.debug("stdout closed, dropping %d characters", len(data))

    def hide_cursor(self) -> None:
        self.write(HIDE_CURSOR)

    def show_cursor(self) -> None:
        self.write(SHOW_CURSOR)

    # -- private: stdin reading --------------------------------------------

    def _on_stdin_readable(self) -> None:
        """Callback invoked by the event loop when stdin has data."""
        if self._queue is None or self._reader_fd is None or self._decoder is None:
            return
        raw = os.read(self._reader_fd, 4096)
        if not raw:
            tail = self._decoder.decode(b"", final=True)
            for sequence in split_sequences(tail):
                self._queue.put_nowait(sequence)
            self._queue.put_nowait(_EOF)
            asyncio.get_running_loop().remove_reader(self._reader_fd)
            return

        for sequence in split_sequences(self._decoder.decode(raw)):
            self._queue.put_nowait(sequence)
