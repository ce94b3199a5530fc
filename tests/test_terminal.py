"""Tests for the process terminal, driven through a pseudo-terminal."""

from __future__ import annotations

import asyncio
import io
import os
import termios
from collections.abc import Iterator

import pytest

from reenter.tui.terminal import ProcessTerminal

pytestmark = pytest.mark.skipif(not hasattr(os, "openpty"), reason="needs a pseudo-terminal")


@pytest.fixture
def pty() -> Iterator[tuple[int, io.BufferedReader]]:
    master, slave = os.openpty()
    stdin = os.fdopen(slave, "rb", buffering=0)
    try:
        yield master, stdin
    finally:
        stdin.close()
        os.close(master)


class TestProcessTerminal:
    def test_not_interactive_without_tty(self) -> None:
        terminal = ProcessTerminal(stdin=io.StringIO(), stdout=io.StringIO())
        assert not terminal.is_interactive

    @pytest.mark.asyncio
    async def test_raw_mode_needs_a_terminal(self) -> None:
        terminal = ProcessTerminal(stdin=io.StringIO(), stdout=io.StringIO())
        with pytest.raises(RuntimeError, match="interactive prompts need a terminal"):
            with terminal.raw_mode():
                pass

    def test_columns_fallback(self) -> None:
        assert ProcessTerminal(stdout=io.StringIO()).columns == 80

    @pytest.mark.asyncio
    async def test_read_key_outside_raw_mode(self) -> None:
        with pytest.raises(RuntimeError):
            await ProcessTerminal(stdout=io.StringIO()).read_key()

    @pytest.mark.asyncio
    async def test_reads_keys_in_raw_mode(self, pty: tuple[int, io.BufferedReader]) -> None:
        master, stdin = pty
        out = io.StringIO()
        terminal = ProcessTerminal(stdin=stdin, stdout=out)  # type: ignore[arg-type]

        with terminal.raw_mode(hide_cursor=True):
            os.write(master, b"a\x1b[A\x03")
            keys = [await asyncio.wait_for(terminal.read_key(), 1) for _ in range(3)]

        assert keys == ["a", "\x1b[A", "\x03"]
        assert out.getvalue() == "\x1b[?25l\x1b[?25h"

    @pytest.mark.asyncio
    async def test_character_split_across_reads(self, pty: tuple[int, io.BufferedReader]) -> None:
        master, stdin = pty
        terminal = ProcessTerminal(stdin=stdin, stdout=io.StringIO())  # type: ignore[arg-type]
        encoded = "é".encode()

        with terminal.raw_mode():
            os.write(master, encoded[:1])
            await asyncio.sleep(0.05)
            os.write(master, encoded[1:])
            key = await asyncio.wait_for(terminal.read_key(), 1)

        assert key == "é"

    @pytest.mark.asyncio
    async def test_terminal_attributes_restored(self, pty: tuple[int, io.BufferedReader]) -> None:
        _, stdin = pty
        before = termios.tcgetattr(stdin.fileno())
        terminal = ProcessTerminal(stdin=stdin, stdout=io.StringIO())  # type: ignore[arg-type]

        with pytest.raises(KeyError):
            with terminal.raw_mode():
                assert termios.tcgetattr(stdin.fileno()) != before
                raise KeyError("boom")

        assert termios.tcgetattr(stdin.fileno()) == before
