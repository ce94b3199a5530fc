"""Single-choice select prompt."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from reenter.tui.defaults import get_prompt_defaults
from reenter.tui.keybindings import PromptKeybindingsManager, get_prompt_keybindings
from reenter.tui.redraw import RedrawController
from reenter.tui.render import render_select
from reenter.tui.state import Choice, PromptStatus, SelectState
from reenter.tui.terminal import ProcessTerminal, Terminal
from reenter.tui.text_input import text_input_prompt

logger = logging.getLogger(__name__)

OTHER_VALUE = "__other__"

ChoiceLike = Choice | Mapping[str, Any]


class SelectPrompt:
    """Key handling for a select prompt, independent of any terminal.

    Up/Down move the focus and wrap around both ends; Enter confirms. Once
    confirmed the prompt ignores every further key.
    """

    def __init__(
        self,
        message: str,
        choices: Sequence[ChoiceLike],
        *,
        page_size: int | None = None,
        keybindings: PromptKeybindingsManager | None = None,
    ) -> None:
        if not choices:
            raise ValueError("select prompt needs at least one choice")
        self.message = message
        self.choices = tuple(Choice.coerce(c) for c in choices)
        self.page_size = page_size or get_prompt_defaults().page_size
        self.state = SelectState()
        self._keybindings = keybindings

    @property
    def done(self) -> bool:
        return self.state.status is PromptStatus.DONE

    @property
    def active(self) -> Choice:
        return self.choices[self.state.active_index]

    @property
    def value(self) -> Any:
        if not self.done:
            raise RuntimeError("select prompt has not been answered")
        return self.active.value

    def move(self, offset: int) -> None:
        self.state.active_index = (self.state.active_index + offset) % len(self.choices)

    def handle_key(self, data: str) -> bool:
        """Apply one key sequence. Returns ``True`` when the frame changed.

        Raises ``KeyboardInterrupt`` on Ctrl-C.
        """
        if self.done:
            return False

        kb = self._keybindings or get_prompt_keybindings()

        if kb.matches(data, "interrupt"):
            raise KeyboardInterrupt
        if kb.matches(data, "selectConfirm"):
            self.state.status = PromptStatus.DONE
            return True
        if kb.matches(data, "selectUp"):
            self.move(-1)
            return True
        if kb.matches(data, "selectDown"):
            self.move(1)
            return True
        return False

    def render(self, columns: int | None = None) -> str:
        return render_select(self.message, self.choices, self.state, self.page_size, columns)


async def select_prompt(
    message: str,
    choices: Sequence[ChoiceLike],
    *,
    terminal: Terminal | None = None,
    page_size: int | None = None,
) -> Any:
    """Let the user pick one of *choices* and return its value.

    The cursor is hidden while the list is shown. Raises ``ValueError`` for
    an empty choice list before touching the terminal, and
    ``KeyboardInterrupt`` on Ctrl-C after the terminal has been restored.
    """
    prompt = SelectPrompt(message, choices, page_size=page_size)
    terminal = terminal or ProcessTerminal()
    redraw = RedrawController(terminal)

    with terminal.raw_mode(hide_cursor=True):
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

    logger.debug("Select prompt %r answered with %r", message, prompt.active.title)
    return prompt.value


async def select_with_other(
    message: str,
    choices: Sequence[ChoiceLike],
    *,
    other_message: str = "Describe it:",
    terminal: Terminal | None = None,
    page_size: int | None = None,
) -> Any:
    """A select prompt with a trailing "Other" choice.

    Picking "Other" opens a text prompt and returns whatever was typed;
    any other pick returns that choice's value.
    """
    coerced = [Choice.coerce(c) for c in choices]
    if any(c.value == OTHER_VALUE for c in coerced):
        raise ValueError(f"{OTHER_VALUE!r} is reserved for the Other choice")

    selected = await select_prompt(
        message,
        [*coerced, Choice(title="Other", value=OTHER_VALUE)],
        terminal=terminal,
        page_size=page_size,
    )
    if selected == OTHER_VALUE:
        return await text_input_prompt(other_message, terminal=terminal)
    return selected
