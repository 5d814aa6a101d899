"""Choice registry: submission rules for session options."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from lunch_picker.domain.errors import (
    BlankOptionError,
    DuplicateChoiceError,
    SessionClosedError,
    SessionNotFoundError,
)
from lunch_picker.domain.sessions import ChoiceRecord

if TYPE_CHECKING:
    from lunch_picker.services.sessions import SessionRepository

_logger = logging.getLogger(__name__)


class ChoiceRepository(Protocol):
    """Persistence interface for submitted choices."""

    def list_choices(self, session_id: UUID) -> list[ChoiceRecord]:
        """Return the session's choices ordered by id."""

    def exists_case_insensitive(self, session_id: UUID, option: str) -> bool:
        """Return whether the option is already in the session, ignoring case."""

    def append_choice(
        self, session_id: UUID, option: str, submitted_by: str
    ) -> ChoiceRecord:
        """Append a choice with the next id.

        Raises DuplicateChoiceError if a case-insensitive match was stored
        concurrently.
        """


@dataclass
class ChoiceService:
    """Accepts option submissions for open sessions."""

    session_repository: "SessionRepository"
    choice_repository: ChoiceRepository

    def submit(self, session_id: UUID, option: str, submitted_by: str) -> ChoiceRecord:
        """Add an option to an open session."""
        session = self.session_repository.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        if session.is_closed:
            raise SessionClosedError(session_id)

        trimmed = option.strip()
        if not trimmed:
            raise BlankOptionError()
        if self.choice_repository.exists_case_insensitive(session_id, trimmed):
            raise DuplicateChoiceError(trimmed)

        choice = self.choice_repository.append_choice(
            session_id, trimmed, submitted_by
        )
        _logger.info(
            "Choice submitted: session=%s option=%s user=%s",
            session_id,
            trimmed,
            submitted_by,
        )
        return choice

    def list_choices(self, session_id: UUID) -> list[ChoiceRecord]:
        """Return a session's choices in submission order."""
        if self.session_repository.get_session(session_id) is None:
            raise SessionNotFoundError(session_id)
        return self.choice_repository.list_choices(session_id)
