"""Domain models for lunch sessions and their choices."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

INITIAL_VERSION = 0


class SessionStatus(StrEnum):
    """Lifecycle status of a session. CLOSED is terminal."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


@dataclass(frozen=True)
class SessionRecord:
    """Represents a persisted lunch session."""

    id: UUID
    created_by: str
    status: SessionStatus
    chosen_option: str | None
    created_at: datetime
    version: int = INITIAL_VERSION

    @property
    def is_closed(self) -> bool:
        return self.status == SessionStatus.CLOSED


@dataclass(frozen=True)
class ChoiceRecord:
    """A single option submitted to a session."""

    id: int
    session_id: UUID
    option: str
    submitted_by: str


@dataclass(frozen=True)
class SessionDetail:
    """Session with its choices in submission order."""

    session: SessionRecord
    choices: list[ChoiceRecord]
