from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Role(StrEnum):
    USER = "user"
    ASSISTANT = "assistant"
    ERROR = "error"


@dataclass(frozen=True)
class MessageRecord:
    session_id: str
    timestamp: int
    role: Role
    content: str
    model: str
    id: int | None = None


@dataclass(frozen=True)
class SessionView:
    session_id: str
    records: tuple[MessageRecord, ...]

    @property
    def started_at(self) -> int:
        return self.records[0].timestamp


@dataclass(frozen=True)
class Snapshot:
    live_history: list[dict]
    model: str
    written_at: str | None = None
