"""Schemas for model responses, plus the fixed mode record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel

SessionMode = Literal["run", "browse", "mvp", "ship"]

# --- Model response schemas ---


class Analysis(BaseModel):
    """One- or two-sentence plain english description of the project."""

    summary: str


class Steps(BaseModel):
    steps: list[str]


class Question(BaseModel):
    id: str
    text: str
    type: Literal["select"]
    options: list[str]


class BriefingResponse(BaseModel):
    presentation: str
    question: Question


class SynthesisResponse(BaseModel):
    synthesis: str


class Orientation(BaseModel):
    orientation: str


# --- Modes ---


@dataclass(frozen=True)
class AppMode:
    """A menu entry. Modes are fixed; they never depend on the project."""

    title: str
    description: str
    value: SessionMode
