"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from lunch_picker.adapters.supabase_choice_repository import SupabaseChoiceRepository
from lunch_picker.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from lunch_picker.adapters.supabase_user_repository import SupabaseUserRepository
from lunch_picker.config import Settings
from lunch_picker.services.choices import ChoiceService
from lunch_picker.services.concurrency import ConcurrencyGuard
from lunch_picker.services.picks import PickService
from lunch_picker.services.sessions import SessionService
from lunch_picker.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    session_service: SessionService
    choice_service: ChoiceService
    pick_service: PickService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    session_repository = SupabaseSessionRepository(supabase_client)
    choice_repository = SupabaseChoiceRepository(supabase_client)
    return AppContainer(
        settings=resolved_settings,
        user_service=UserService(user_repository),
        session_service=SessionService(
            session_repository=session_repository,
            choice_repository=choice_repository,
            user_directory=user_repository,
        ),
        choice_service=ChoiceService(
            session_repository=session_repository,
            choice_repository=choice_repository,
        ),
        pick_service=PickService(
            session_repository=session_repository,
            choice_repository=choice_repository,
            guard=ConcurrencyGuard(session_repository),
        ),
    )
