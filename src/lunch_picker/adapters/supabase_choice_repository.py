"""Supabase-backed choice repository."""

from dataclasses import dataclass
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from lunch_picker.domain.errors import DuplicateChoiceError
from lunch_picker.domain.sessions import ChoiceRecord
from lunch_picker.services.choices import ChoiceRepository

_UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseChoiceRepository(ChoiceRepository):
    """Supabase implementation for session choices.

    The ``session_choices`` table is expected to carry a bigserial ``id`` and a
    generated ``option_key`` column equal to ``lower(option)``, with a unique
    index on ``(session_id, option_key)``.
    """

    client: Client

    def list_choices(self, session_id: UUID) -> list[ChoiceRecord]:
        """Return a session's choices ordered by id."""
        response = (
            self.client.table("session_choices")
            .select("id, session_id, option, submitted_by")
            .eq("session_id", str(session_id))
            .order("id")
            .execute()
        )
        return [_parse_choice(row) for row in response.data or []]

    def exists_case_insensitive(self, session_id: UUID, option: str) -> bool:
        """Return whether an option matching case-insensitively exists."""
        response = (
            self.client.table("session_choices")
            .select("id")
            .eq("session_id", str(session_id))
            .eq("option_key", _option_key(option))
            .limit(1)
            .execute()
        )
        return bool(response.data)

    def append_choice(
        self, session_id: UUID, option: str, submitted_by: str
    ) -> ChoiceRecord:
        """Insert a choice row and return it."""
        try:
            response = (
                self.client.table("session_choices")
                .insert(
                    {
                        "session_id": str(session_id),
                        "option": option,
                        "submitted_by": submitted_by,
                    }
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise DuplicateChoiceError(option) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to create choice")
        return _parse_choice(response.data[0])


def _option_key(option: str) -> str:
    """Return the comparison key matching the generated option_key column."""
    return option.lower()


def _parse_choice(row: dict[str, object]) -> ChoiceRecord:
    return ChoiceRecord(
        id=int(row["id"]),
        session_id=UUID(str(row["session_id"])),
        option=str(row["option"]),
        submitted_by=str(row["submitted_by"]),
    )
