"""State objects owned by a single prompt invocation."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


class PromptStatus(Enum):
    IDLE = "idle"
    DONE = "done"


@dataclass(frozen=True)
class Choice:
    """One selectable option.

    ``description`` is shown inline, dimmed, only while the choice is focused.
    """

    title: str
    value: Any
    description: str | None = None

    @classmethod
    def coerce(cls, item: Choice | Mapping[str, Any]) -> Choice:
        """Accept either a ``Choice`` or a ``{"title", "value", "description"}`` mapping."""
        if isinstance(item, Choice):
            return item
        return cls(
            title=item["title"],
            value=item["value"],
            description=item.get("description"),
        )


@dataclass
class SelectState:
    active_index: int = 0
    status: PromptStatus = PromptStatus.IDLE


@dataclass
class TextInputState:
    buffer: str = ""
    status: PromptStatus = PromptStatus.IDLE
