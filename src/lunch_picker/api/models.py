"""Pydantic models for the sessions API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lunch_picker.domain.sessions import ChoiceRecord, SessionDetail, SessionRecord


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SubmitRestaurantRequest(BaseModel):
    """Body for submitting a restaurant to a session."""

    restaurant: str
    user: str = Field(min_length=1)


class UserResponse(_CamelModel):
    username: str


class RestaurantChoiceResponse(_CamelModel):
    """A submitted restaurant."""

    id: int
    restaurant: str
    submitted_by: str

    @classmethod
    def from_record(cls, choice: ChoiceRecord) -> "RestaurantChoiceResponse":
        return cls(
            id=choice.id,
            restaurant=choice.option,
            submitted_by=choice.submitted_by,
        )


class SessionResponse(_CamelModel):
    """Session with its submitted restaurants."""

    id: UUID
    created_by: str
    status: str
    chosen_restaurant: str | None
    created_at: datetime
    restaurants: list[RestaurantChoiceResponse]

    @classmethod
    def from_record(
        cls, session: SessionRecord, choices: list[ChoiceRecord] | None = None
    ) -> "SessionResponse":
        return cls(
            id=session.id,
            created_by=session.created_by,
            status=session.status.value,
            chosen_restaurant=session.chosen_option,
            created_at=session.created_at,
            restaurants=[
                RestaurantChoiceResponse.from_record(choice)
                for choice in choices or []
            ],
        )

    @classmethod
    def from_detail(cls, detail: SessionDetail) -> "SessionResponse":
        return cls.from_record(detail.session, detail.choices)


class PickResponse(_CamelModel):
    chosen_restaurant: str


class ErrorResponse(BaseModel):
    """Error payload for domain errors."""

    error: str
    reason: str | None = None
    message: str
