"""Shared test fixtures."""

import threading
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from uuid import UUID

import pytest

from lunch_picker.config import Settings
from lunch_picker.containers import AppContainer
from lunch_picker.domain.errors import DuplicateChoiceError
from lunch_picker.domain.sessions import ChoiceRecord, SessionRecord
from lunch_picker.services.choices import ChoiceRepository, ChoiceService
from lunch_picker.services.concurrency import ConcurrencyGuard, VersionConflictError
from lunch_picker.services.picks import PickService
from lunch_picker.services.sessions import SessionRepository, SessionService
from lunch_picker.services.users import UserDirectory, UserService


@dataclass
class InMemoryUserDirectory(UserDirectory):
    """In-memory user directory for tests."""

    usernames: set[str] = field(default_factory=set)

    def exists(self, username: str) -> bool:
        return username in self.usernames

    def list_usernames(self) -> list[str]:
        return sorted(self.usernames)

    def add_usernames(self, usernames: Iterable[str]) -> None:
        self.usernames.update(usernames)


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository with an atomic version check."""

    sessions: dict[UUID, SessionRecord] = field(default_factory=dict)
    writes: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def create_session(self, session: SessionRecord) -> SessionRecord:
        with self._lock:
            self.sessions[session.id] = session
        return session

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        with self._lock:
            return self.sessions.get(session_id)

    def save_session(
        self, session: SessionRecord, expected_version: int
    ) -> SessionRecord:
        with self._lock:
            current = self.sessions.get(session.id)
            if current is None or current.version != expected_version:
                raise VersionConflictError(session.id, expected_version)
            stored = replace(session, version=expected_version + 1)
            self.sessions[session.id] = stored
            self.writes += 1
            return stored


@dataclass
class InMemoryChoiceRepository(ChoiceRepository):
    """In-memory choice repository enforcing case-insensitive uniqueness."""

    choices: list[ChoiceRecord] = field(default_factory=list)
    _next_id: int = 1
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def list_choices(self, session_id: UUID) -> list[ChoiceRecord]:
        with self._lock:
            return sorted(
                (choice for choice in self.choices if choice.session_id == session_id),
                key=lambda choice: choice.id,
            )

    def exists_case_insensitive(self, session_id: UUID, option: str) -> bool:
        with self._lock:
            return self._exists(session_id, option)

    def append_choice(
        self, session_id: UUID, option: str, submitted_by: str
    ) -> ChoiceRecord:
        with self._lock:
            if self._exists(session_id, option):
                raise DuplicateChoiceError(option)
            choice = ChoiceRecord(
                id=self._next_id,
                session_id=session_id,
                option=option,
                submitted_by=submitted_by,
            )
            self._next_id += 1
            self.choices.append(choice)
            return choice

    def _exists(self, session_id: UUID, option: str) -> bool:
        folded = option.lower()
        return any(
            choice.session_id == session_id and choice.option.lower() == folded
            for choice in self.choices
        )


@dataclass
class FixedRandom:
    """Random source that always returns the same index."""

    index: int = 0
    calls: list[int] = field(default_factory=list)

    def randrange(self, stop: int) -> int:
        self.calls.append(stop)
        return self.index


@dataclass
class Services:
    """Services wired against in-memory repositories."""

    users: InMemoryUserDirectory
    session_repository: InMemorySessionRepository
    choice_repository: InMemoryChoiceRepository
    random_source: FixedRandom
    sessions: SessionService
    choices: ChoiceService
    picks: PickService


def build_services(random_source: FixedRandom | None = None) -> Services:
    users = InMemoryUserDirectory(usernames={"alice", "bob"})
    session_repository = InMemorySessionRepository()
    choice_repository = InMemoryChoiceRepository()
    resolved_random = random_source or FixedRandom()
    return Services(
        users=users,
        session_repository=session_repository,
        choice_repository=choice_repository,
        random_source=resolved_random,
        sessions=SessionService(
            session_repository=session_repository,
            choice_repository=choice_repository,
            user_directory=users,
        ),
        choices=ChoiceService(
            session_repository=session_repository,
            choice_repository=choice_repository,
        ),
        picks=PickService(
            session_repository=session_repository,
            choice_repository=choice_repository,
            guard=ConcurrencyGuard(session_repository),
            random_source=resolved_random,
        ),
    )


@pytest.fixture
def services() -> Services:
    return build_services()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def container(settings: Settings, services: Services) -> AppContainer:
    return AppContainer(
        settings=settings,
        user_service=UserService(services.users),
        session_service=services.sessions,
        choice_service=services.choices,
        pick_service=services.picks,
    )
