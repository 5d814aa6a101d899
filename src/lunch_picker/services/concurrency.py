"""Optimistic concurrency control for session writes."""

import logging
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from lunch_picker.domain.errors import StaleWriteError
from lunch_picker.domain.sessions import SessionRecord

_logger = logging.getLogger(__name__)


class VersionConflictError(Exception):
    """Raised by a repository when the stored version no longer matches."""

    def __init__(self, session_id: UUID, expected_version: int) -> None:
        super().__init__(
            f"Session {session_id} is no longer at version {expected_version}"
        )
        self.session_id = session_id
        self.expected_version = expected_version


class VersionedSessionStore(Protocol):
    """Compare-and-swap write contract for sessions."""

    def save_session(
        self, session: SessionRecord, expected_version: int
    ) -> SessionRecord:
        """Store the session if the current version equals expected_version.

        On success the stored version becomes ``expected_version + 1`` and the
        stored record is returned. On mismatch nothing is written and
        ``VersionConflictError`` is raised.
        """


@dataclass
class ConcurrencyGuard:
    """Applies session changes only against the version they were read at."""

    store: VersionedSessionStore

    def commit(self, session: SessionRecord, **changes: object) -> SessionRecord:
        """Write ``changes`` on top of ``session`` or raise StaleWriteError."""
        updated = replace(session, **changes)
        try:
            return self.store.save_session(updated, expected_version=session.version)
        except VersionConflictError as exc:
            _logger.warning(
                "Concurrent modification detected: session=%s version=%s",
                session.id,
                session.version,
            )
            raise StaleWriteError(session.id) from exc
