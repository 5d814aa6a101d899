"""Random pick that closes a session."""

import logging
import random
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from lunch_picker.domain.errors import (
    ForbiddenError,
    NoChoicesError,
    SessionNotFoundError,
)
from lunch_picker.domain.sessions import SessionStatus
from lunch_picker.services.choices import ChoiceRepository
from lunch_picker.services.concurrency import ConcurrencyGuard
from lunch_picker.services.sessions import SessionRepository

_logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Uniform integer source."""

    def randrange(self, stop: int) -> int:
        """Return an integer in [0, stop)."""


@dataclass
class PickService:
    """Closes a session by drawing one of its choices at random.

    Only the first submitter may pick while the session is open. Once closed,
    every caller gets the stored result back without a new draw or write.
    Concurrent pickers race at the versioned write; losers get a
    StaleWriteError and converge on the stored result when they retry.
    """

    session_repository: SessionRepository
    choice_repository: ChoiceRepository
    guard: ConcurrencyGuard
    random_source: RandomSource = field(default_factory=random.SystemRandom)

    def pick(self, session_id: UUID, requesting_user: str) -> str:
        """Return the chosen option, closing the session if still open."""
        session = self.session_repository.get_session(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        if session.is_closed:
            if session.chosen_option is None:
                raise RuntimeError(f"Closed session {session_id} has no chosen option")
            _logger.debug(
                "Session already closed: session=%s chosen=%s",
                session_id,
                session.chosen_option,
            )
            return session.chosen_option

        choices = self.choice_repository.list_choices(session_id)
        if not choices:
            raise NoChoicesError(session_id)

        first_submitter = choices[0].submitted_by
        if requesting_user != first_submitter:
            raise ForbiddenError(
                f"Only the first submitter ({first_submitter}) can pick"
            )

        drawn = choices[self.random_source.randrange(len(choices))]
        self.guard.commit(
            session,
            status=SessionStatus.CLOSED,
            chosen_option=drawn.option,
        )
        _logger.info(
            "Session closed: session=%s chosen=%s", session_id, drawn.option
        )
        return drawn.option
