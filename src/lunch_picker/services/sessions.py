"""Session lifecycle: creation and lookup."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from lunch_picker.domain.errors import ForbiddenError, SessionNotFoundError
from lunch_picker.domain.sessions import (
    INITIAL_VERSION,
    SessionDetail,
    SessionRecord,
    SessionStatus,
)
from lunch_picker.services.choices import ChoiceRepository
from lunch_picker.services.users import UserDirectory

_logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    """Persistence interface for lunch sessions."""

    def create_session(self, session: SessionRecord) -> SessionRecord:
        """Persist a new session and return it."""

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        """Return a session by id, if present."""

    def save_session(
        self, session: SessionRecord, expected_version: int
    ) -> SessionRecord:
        """Store the session if its version still equals expected_version."""


@dataclass
class SessionService:
    """Creates sessions and reads them back with their choices."""

    session_repository: SessionRepository
    choice_repository: ChoiceRepository
    user_directory: UserDirectory

    def create_session(self, username: str) -> SessionRecord:
        """Open a new session on behalf of a known user."""
        if not self.user_directory.exists(username):
            raise ForbiddenError(
                f"User '{username}' is not authorized to create sessions"
            )
        session = self.session_repository.create_session(
            SessionRecord(
                id=uuid4(),
                created_by=username,
                status=SessionStatus.OPEN,
                chosen_option=None,
                created_at=datetime.now(tz=UTC),
                version=INITIAL_VERSION,
            )
        )
        _logger.info("Session created: session=%s user=%s", session.id, username)
        return session

    def get_session(self, session_id: UUID) -> SessionDetail:
        """Return a session with its choices in submission order."""
        session = self.session_repository.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return SessionDetail(
            session=session,
            choices=self.choice_repository.list_choices(session_id),
        )
