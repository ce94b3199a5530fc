"""Stand-in for the parts of ``anthropic.AsyncAnthropic`` the app calls.

Responses are queued up front; every call records its keyword arguments.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any


def text_message(text: str, input_tokens: int = 10, output_tokens: int = 5) -> SimpleNamespace:
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=text)],
        usage=SimpleNamespace(input_tokens=input_tokens, output_tokens=output_tokens),
    )


def text_delta(text: str) -> SimpleNamespace:
    return SimpleNamespace(
        type="content_block_delta",
        index=0,
        delta=SimpleNamespace(type="text_delta", text=text),
    )


class FakeSDKStream:
    def __init__(self, chunks: list[str], final: SimpleNamespace) -> None:
        self._events = [SimpleNamespace(type="message_start"), *(text_delta(c) for c in chunks)]
        self._final = final

    async def __aenter__(self) -> FakeSDKStream:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        return None

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for event in self._events:
            yield event

    async def get_final_message(self) -> SimpleNamespace:
        return self._final


class FakeMessages:
    def __init__(self) -> None:
        self.created: list[SimpleNamespace] = []
        self.streamed: list[tuple[list[str], SimpleNamespace]] = []
        self.create_calls: list[dict[str, Any]] = []
        self.stream_calls: list[dict[str, Any]] = []

    async def create(self, **params: Any) -> SimpleNamespace:
        self.create_calls.append(params)
        return self.created.pop(0)

    def stream(self, **params: Any) -> FakeSDKStream:
        self.stream_calls.append(params)
        chunks, final = self.streamed.pop(0)
        return FakeSDKStream(chunks, final)


class FakeAnthropic:
    def __init__(self) -> None:
        self.messages = FakeMessages()

    def queue_create(self, text: str) -> None:
        self.messages.created.append(text_message(text))

    def queue_stream(self, text: str, *, input_tokens: int = 40, output_tokens: int = 20) -> None:
        # Deliver the text in a few chunks, the way the API does.
        chunks = [text[i : i + 16] for i in range(0, len(text), 16)]
        self.messages.streamed.append((chunks, text_message(text, input_tokens, output_tokens)))
