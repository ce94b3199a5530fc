"""Session state shared by every phase of a run.

Each phase reads what earlier phases left here and records what it learned.
The structure is plain dataclasses so it can be serialised with
``Session.to_dict()`` when sessions start being saved.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Any, Literal

from reenter.types import AppMode, Question, SessionMode

HistoryType = Literal["ai", "user", "check", "system"]


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class SessionMeta:
    started_at: str
    mode: SessionMode
    project_path: str
    project_name: str


@dataclass
class ProjectInfo:
    structure: str | None = None
    key_files: str | None = None
    summary: str | None = None


@dataclass
class Plan:
    chosen_mode: AppMode | None = None
    steps: list[str] = field(default_factory=list)
    current_step: int = 0
    completed_steps: list[int] = field(default_factory=list)


@dataclass
class Briefing:
    presentation: str | None = None
    questions: list[Question] = field(default_factory=list)
    answers: dict[str, str] = field(default_factory=dict)
    synthesis: str | None = None


@dataclass
class HistoryEntry:
    type: HistoryType
    content: str
    at: str


@dataclass
class CheckEntry:
    command: str
    output: str
    conclusion: str
    at: str


@dataclass
class Session:
    meta: SessionMeta
    project: ProjectInfo = field(default_factory=ProjectInfo)
    plan: Plan = field(default_factory=Plan)
    briefing: Briefing = field(default_factory=Briefing)
    history: list[HistoryEntry] = field(default_factory=list)
    checks: list[CheckEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        # Questions are pydantic models; asdict leaves them as-is.
        data["briefing"]["questions"] = [q.model_dump() for q in self.briefing.questions]
        return data


def create_session(project_path: str, mode: SessionMode) -> Session:
    name = PurePath(project_path).name or project_path
    return Session(
        meta=SessionMeta(
            started_at=_now(),
            mode=mode,
            project_path=project_path,
            project_name=name,
        )
    )


def log_history(session: Session, type: HistoryType, content: str) -> None:
    session.history.append(HistoryEntry(type=type, content=content, at=_now()))


def log_check(session: Session, command: str, output: str, conclusion: str) -> None:
    session.checks.append(
        CheckEntry(command=command, output=output, conclusion=conclusion, at=_now())
    )
