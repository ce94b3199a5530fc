"""Single-line free-text prompt."""

from __future__ import annotations

import logging

import grapheme

from reenter.tui.keybindings import PromptKeybindingsManager, get_prompt_keybindings
from reenter.tui.keys import ESC, is_printable
from reenter.tui.redraw import RedrawController
from reenter.tui.render import render_text_input
from reenter.tui.state import PromptStatus, TextInputState
from reenter.tui.terminal import ProcessTerminal, Terminal

logger = logging.getLogger(__name__)


class TextInputPrompt:
    """Key handling for a text prompt, independent of any terminal.

    Printable input is appended, backspace removes the last character, Enter
    submits. Escape sequences (arrow keys and the like) are ignored.
    """

    def __init__(self, message: str, keybindings: PromptKeybindingsManager | None = None) -> None:
        self.message = message
        self.state = TextInputState()
        self._keybindings = keybindings

    @property
    def done(self) -> bool:
        return self.state.status is PromptStatus.DONE

    @property
    def value(self) -> str:
        """The submitted text with surrounding whitespace removed."""
        return self.state.buffer.strip()

    def handle_key(self, data: str) -> bool:
        """Apply one key sequence. Returns ``True`` when the frame changed.

        Raises ``KeyboardInterrupt`` on Ctrl-C.
        """
        if self.done:
            return False

        kb = self._keybindings or get_prompt_keybindings()

        if kb.matches(data, "interrupt"):
            raise KeyboardInterrupt
        if kb.matches(data, "submit"):
            self.state.status = PromptStatus.DONE
            return True
        if kb.matches(data, "deleteCharBackward"):
            buffer = self.state.buffer
            if not buffer:
                return False
            self.state.buffer = grapheme.slice(buffer, 0, grapheme.length(buffer) - 1)
            return True
        if data.startswith(ESC):
            return False
        if is_printable(data):
            self.state.buffer += data
            return True
        return False

    def render(self, columns: int | None = None) -> str:
        return render_text_input(self.message, self.state, columns)


async def text_input_prompt(message: str, *, terminal: Terminal | None = None) -> str:
    """Ask for a line of text and return it trimmed.

    The prompt collapses to ``● message  value`` once submitted.
    """
    prompt = TextInputPrompt(message)
    terminal = terminal or ProcessTerminal()
    redraw = RedrawController(terminal)

    with terminal.raw_mode():
        redraw.render(prompt.render(terminal.columns))
        try:
            while not prompt.done:
                key = await terminal.read_key()
                if prompt.handle_key(key) and not prompt.done:
                    redraw.render(prompt.render(terminal.columns))
        except KeyboardInterrupt:
            redraw.clear()
            raise
        redraw.finish(prompt.render(terminal.columns))

    logger.debug("Text prompt %r answered (%d chars)", message, len(prompt.value))
    return prompt.value
