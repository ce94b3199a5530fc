"""Anthropic client helpers: client creation, streaming adapter, JSON parsing."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import Any, TypeVar

import anthropic
from pydantic import BaseModel

from reenter.tui.overlay import ContentBlock, FinalMessage, MessageUsage

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

JSON_SYSTEM_PROMPT = (
    "You are a JSON API. You only respond with raw JSON. "
    "No markdown, no explanation, no prose. Just JSON."
)

_FENCE_START_RE = re.compile(r"^```(?:json)?\n?")
_FENCE_END_RE = re.compile(r"\n?```$")


def create_client(api_key: str | None = None) -> anthropic.AsyncAnthropic:
    """One client per run, shared by every model call."""
    if api_key:
        return anthropic.AsyncAnthropic(api_key=api_key)
    return anthropic.AsyncAnthropic()


def _to_final_message(message: Any) -> FinalMessage:
    return FinalMessage(
        usage=MessageUsage(
            input_tokens=message.usage.input_tokens or 0,
            output_tokens=message.usage.output_tokens or 0,
        ),
        content=[
            ContentBlock(type=block.type, text=getattr(block, "text", None))
            for block in message.content
        ],
    )


class MessageStream:
    """Adapts ``client.messages.stream(...)`` to the overlay's stream interface.

    Nothing is sent until ``final_message()`` is awaited; text callbacks
    fire as deltas arrive.
    """

    def __init__(self, client: anthropic.AsyncAnthropic, **params: Any) -> None:
        self._client = client
        self._params = params
        self._callbacks: list[Callable[[str], None]] = []

    def on_text(self, callback: Callable[[str], None]) -> None:
        self._callbacks.append(callback)

    async def final_message(self) -> FinalMessage:
        logger.debug("Streaming from %s", self._params.get("model"))
        async with self._client.messages.stream(**self._params) as stream:
            async for event in stream:
                if event.type == "content_block_delta" and event.delta.type == "text_delta":
                    for callback in self._callbacks:
                        callback(event.delta.text)
            message = await stream.get_final_message()
        return _to_final_message(message)


def response_text(message: Any) -> str:
    """Text of the first content block, which must be a text block."""
    content = message.content
    if not content or content[0].type != "text":
        raise ValueError("Expected text response from AI")
    return content[0].text


def strip_fences(text: str) -> str:
    return _FENCE_END_RE.sub("", _FENCE_START_RE.sub("", text.strip())).strip()


def parse_json(model: type[ModelT], text: str) -> ModelT:
    """Validate model output against *model*, tolerating a markdown code fence.

    Raises ``pydantic.ValidationError`` for malformed JSON or a schema mismatch.
    """
    return model.model_validate_json(strip_fences(text))
