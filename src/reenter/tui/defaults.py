"""Process-wide defaults for prompts and overlays."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_PAGE_SIZE = 7
DEFAULT_TICK_INTERVAL = 0.4


@dataclass
class PromptDefaults:
    page_size: int = DEFAULT_PAGE_SIZE
    tick_interval: float = DEFAULT_TICK_INTERVAL


_global_prompt_defaults: PromptDefaults | None = None


def get_prompt_defaults() -> PromptDefaults:
    global _global_prompt_defaults
    if _global_prompt_defaults is None:
        _global_prompt_defaults = PromptDefaults()
    return _global_prompt_defaults


def set_prompt_defaults(defaults: PromptDefaults) -> None:
    global _global_prompt_defaults
    _global_prompt_defaults = defaults
