"""Error taxonomy for session operations.

Every error is scoped to one operation on one session. ``kind`` is stable and
is what the API layer maps to response codes; conflicts also carry a
``reason`` so callers can tell them apart.
"""

from uuid import UUID


class LunchPickerError(Exception):
    """Base class for errors returned to callers of the core operations."""

    kind = "error"
    reason: str | None = None


class SessionNotFoundError(LunchPickerError):
    """Raised when a session id does not exist."""

    kind = "not_found"

    def __init__(self, session_id: UUID) -> None:
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id


class ForbiddenError(LunchPickerError):
    """Raised when a user may not perform the requested action."""

    kind = "forbidden"


class BlankOptionError(LunchPickerError):
    """Raised when a submitted option is empty after trimming."""

    kind = "validation"

    def __init__(self) -> None:
        super().__init__("Option cannot be blank")


class ConflictError(LunchPickerError):
    """Raised when the request conflicts with the current session state."""

    kind = "conflict"


class DuplicateChoiceError(ConflictError):
    reason = "duplicate"

    def __init__(self, option: str) -> None:
        super().__init__(f"'{option}' has already been submitted in this session")
        self.option = option


class SessionClosedError(ConflictError):
    reason = "closed"

    def __init__(self, session_id: UUID) -> None:
        super().__init__(
            f"Session {session_id} is closed. No further submissions allowed."
        )
        self.session_id = session_id


class NoChoicesError(ConflictError):
    reason = "empty"

    def __init__(self, session_id: UUID) -> None:
        super().__init__(f"No options have been submitted to session {session_id}")
        self.session_id = session_id


class StaleWriteError(ConflictError):
    """Raised when an optimistic write lost a race with another writer."""

    reason = "concurrent modification"

    def __init__(self, session_id: UUID) -> None:
        super().__init__(
            f"Session {session_id} was modified by another request. Please try again."
        )
        self.session_id = session_id
