"""Interactive terminal prompts and progress overlays."""

from reenter.tui.defaults import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_TICK_INTERVAL,
    PromptDefaults,
    get_prompt_defaults,
    set_prompt_defaults,
)
from reenter.tui.keybindings import (
    DEFAULT_PROMPT_KEYBINDINGS,
    PromptAction,
    PromptKeybindingsConfig,
    PromptKeybindingsManager,
    get_prompt_keybindings,
    set_prompt_keybindings,
)
from reenter.tui.keys import Key, KeyId, matches_key, parse_key, split_sequences
from reenter.tui.overlay import (
    ContentBlock,
    FinalMessage,
    MessageUsage,
    OverlayState,
    ProgressOverlay,
    StreamLike,
    with_spinner,
    with_streaming_overlay,
)
from reenter.tui.redraw import RedrawController, frame_extent
from reenter.tui.render import (
    format_elapsed,
    page_window,
    render_completion,
    render_progress,
    render_select,
    render_text_input,
)
from reenter.tui.select import OTHER_VALUE, SelectPrompt, select_prompt, select_with_other
from reenter.tui.state import Choice, PromptStatus, SelectState, TextInputState
from reenter.tui.terminal import ProcessTerminal, Terminal
from reenter.tui.text_input import TextInputPrompt, text_input_prompt
from reenter.tui.utils import format_text_block, truncate_to_width, visible_width, with_margin

__all__ = [
    # Defaults
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_TICK_INTERVAL",
    "PromptDefaults",
    "get_prompt_defaults",
    "set_prompt_defaults",
    # Keybindings
    "DEFAULT_PROMPT_KEYBINDINGS",
    "PromptAction",
    "PromptKeybindingsConfig",
    "PromptKeybindingsManager",
    "get_prompt_keybindings",
    "set_prompt_keybindings",
    # Keys
    "Key",
    "KeyId",
    "matches_key",
    "parse_key",
    "split_sequences",
    # Overlay
    "ContentBlock",
    "FinalMessage",
    "MessageUsage",
    "OverlayState",
    "ProgressOverlay",
    "StreamLike",
    "with_spinner",
    "with_streaming_overlay",
    # Rendering
    "RedrawController",
    "format_elapsed",
    "frame_extent",
    "page_window",
    "render_completion",
    "render_progress",
    "render_select",
    "render_text_input",
    # Prompts
    "OTHER_VALUE",
    "Choice",
    "PromptStatus",
    "SelectPrompt",
    "SelectState",
    "TextInputPrompt",
    "TextInputState",
    "select_prompt",
    "select_with_other",
    "text_input_prompt",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # Utilities
    "format_text_block",
    "truncate_to_width",
    "visible_width",
    "with_margin",
]
