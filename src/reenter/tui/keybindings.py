"""Prompt keybindings manager."""

from __future__ import annotations

from typing import Literal

from reenter.tui.keys import Key, KeyId, matches_key

PromptAction = Literal[
    # Select prompt
    "selectUp",
    "selectDown",
    "selectConfirm",
    # Free-text prompt
    "deleteCharBackward",
    "submit",
    # Both
    "interrupt",
]

PromptKeybindingsConfig = dict[PromptAction, KeyId | list[KeyId]]

DEFAULT_PROMPT_KEYBINDINGS: dict[PromptAction, KeyId | list[KeyId]] = {
    "selectUp": Key.up,
    "selectDown": Key.down,
    "selectConfirm": Key.enter,
    "deleteCharBackward": Key.backspace,
    "submit": Key.enter,
    "interrupt": Key.ctrl("c"),
}


class PromptKeybindingsManager:
    """Maps prompt actions to the keys that trigger them."""

    def __init__(self, config: PromptKeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[PromptAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: PromptKeybindingsConfig) -> None:
        self._action_to_keys.clear()

        for action, keys in DEFAULT_PROMPT_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # User config replaces the defaults per action
        for action, keys in config.items():
            if action not in DEFAULT_PROMPT_KEYBINDINGS:
                continue
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # Ctrl-C always interrupts, whatever the config says
        if Key.ctrl("c") not in self._action_to_keys["interrupt"]:
            self._action_to_keys["interrupt"].append(Key.ctrl("c"))

    def matches(self, data: str, action: PromptAction) -> bool:
        """Check if input matches a specific action."""
        return any(matches_key(data, key) for key in self._action_to_keys.get(action, []))

    def get_keys(self, action: PromptAction) -> list[KeyId]:
        return self._action_to_keys.get(action, [])

    def set_config(self, config: PromptKeybindingsConfig) -> None:
        self._build_maps(config)


_global_prompt_keybindings: PromptKeybindingsManager | None = None


def get_prompt_keybindings() -> PromptKeybindingsManager:
    global _global_prompt_keybindings
    if _global_prompt_keybindings is None:
        _global_prompt_keybindings = PromptKeybindingsManager()
    return _global_prompt_keybindings


def set_prompt_keybindings(manager: PromptKeybindingsManager) -> None:
    global _global_prompt_keybindings
    _global_prompt_keybindings = manager
