"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, Query, Request, status
from fastapi.responses import JSONResponse

from lunch_picker.api.models import (
    ErrorResponse,
    PickResponse,
    RestaurantChoiceResponse,
    SessionResponse,
    SubmitRestaurantRequest,
    UserResponse,
)
from lunch_picker.app_logging import configure_logging
from lunch_picker.containers import AppContainer
from lunch_picker.domain.errors import LunchPickerError

_STATUS_BY_KIND = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "forbidden": status.HTTP_403_FORBIDDEN,
    "validation": status.HTTP_400_BAD_REQUEST,
    "conflict": status.HTTP_409_CONFLICT,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        csv_path = state_container.settings.users_csv_path
        if csv_path:
            try:
                state_container.user_service.import_csv(csv_path)
            except Exception:
                logger.exception("Failed to import users from %s", csv_path)
        yield

    app = FastAPI(title="Lunch Picker", lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(LunchPickerError)
    async def handle_domain_error(
        request: Request, exc: LunchPickerError
    ) -> JSONResponse:
        payload = ErrorResponse(error=exc.kind, reason=exc.reason, message=str(exc))
        return JSONResponse(
            status_code=_STATUS_BY_KIND.get(
                exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR
            ),
            content=payload.model_dump(),
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/users")
    def list_users(request: Request) -> list[UserResponse]:
        """Return users allowed to create sessions."""
        state_container: AppContainer = request.app.state.container
        return [
            UserResponse(username=user.username)
            for user in state_container.user_service.list_users()
        ]

    @app.post("/api/sessions", status_code=status.HTTP_201_CREATED)
    def create_session(
        request: Request, user: str = Query(min_length=1)
    ) -> SessionResponse:
        """Open a new session for a known user."""
        state_container: AppContainer = request.app.state.container
        session = state_container.session_service.create_session(user)
        return SessionResponse.from_record(session)

    @app.get("/api/sessions/{session_id}")
    def get_session(session_id: UUID, request: Request) -> SessionResponse:
        """Return a session with its submitted restaurants."""
        state_container: AppContainer = request.app.state.container
        detail = state_container.session_service.get_session(session_id)
        return SessionResponse.from_detail(detail)

    @app.post(
        "/api/sessions/{session_id}/restaurants",
        status_code=status.HTTP_201_CREATED,
    )
    def submit_restaurant(
        session_id: UUID, body: SubmitRestaurantRequest, request: Request
    ) -> RestaurantChoiceResponse:
        """Submit a restaurant to an open session."""
        state_container: AppContainer = request.app.state.container
        choice = state_container.choice_service.submit(
            session_id, body.restaurant, body.user
        )
        return RestaurantChoiceResponse.from_record(choice)

    @app.post("/api/sessions/{session_id}/pick")
    def pick_restaurant(
        session_id: UUID, request: Request, user: str = Query(min_length=1)
    ) -> PickResponse:
        """Pick a random restaurant and close the session."""
        state_container: AppContainer = request.app.state.container
        chosen = state_container.pick_service.pick(session_id, user)
        return PickResponse(chosen_restaurant=chosen)

    return app
