"""Supabase-backed session repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from lunch_picker.domain.sessions import SessionRecord, SessionStatus
from lunch_picker.services.concurrency import VersionConflictError
from lunch_picker.services.sessions import SessionRepository

_COLUMNS = "id, created_by, status, chosen_option, created_at, version"


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for lunch sessions."""

    client: Client

    def create_session(self, session: SessionRecord) -> SessionRecord:
        """Insert a session row and return it."""
        response = (
            self.client.table("lunch_sessions")
            .insert(
                {
                    "id": str(session.id),
                    "created_by": session.created_by,
                    "status": session.status.value,
                    "chosen_option": session.chosen_option,
                    "created_at": session.created_at.isoformat(),
                    "version": session.version,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create session")
        return _parse_session(response.data[0])

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        """Return a session by id, if present."""
        response = (
            self.client.table("lunch_sessions")
            .select(_COLUMNS)
            .eq("id", str(session_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_session(response.data[0])

    def save_session(
        self, session: SessionRecord, expected_version: int
    ) -> SessionRecord:
        """Update the row only while its version still equals expected_version."""
        response = (
            self.client.table("lunch_sessions")
            .update(
                {
                    "status": session.status.value,
                    "chosen_option": session.chosen_option,
                    "version": expected_version + 1,
                }
            )
            .eq("id", str(session.id))
            .eq("version", expected_version)
            .execute()
        )
        if not response.data:
            raise VersionConflictError(session.id, expected_version)
        return _parse_session(response.data[0])


def _parse_session(row: dict[str, object]) -> SessionRecord:
    return SessionRecord(
        id=UUID(str(row["id"])),
        created_by=str(row["created_by"]),
        status=SessionStatus(row["status"]),
        chosen_option=row.get("chosen_option"),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        version=int(row["version"]),
    )
