"""The four fixed modes offered after the project summary."""

from __future__ import annotations

from reenter.types import AppMode

MODES: list[AppMode] = [
    AppMode(
        title="Browse",
        description="understand it like it was built yesterday",
        value="browse",
    ),
    AppMode(
        title="Run",
        description="see it running live on your machine",
        value="run",
    ),
    AppMode(
        title="MVP",
        description="find the fastest path to real users",
        value="mvp",
    ),
    AppMode(
        title="Ship",
        description="clean it up and take it all the way",
        value="ship",
    ),
]


def get_mode(value: str) -> AppMode:
    for mode in MODES:
        if mode.value == value:
            return mode
    raise ValueError(f"Unknown mode: {value}")
