"""Pydantic schemas for Events.

The wire format is camelCase (``registrationDeadline``, ``isApproved``, ...);
request bodies also accept the snake_case field names.
"""
from __future__ import annotations
import datetime as dt
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.models.event import ModerationState, PendingAction


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _distance_as_text(value):
    # "42.195" and 42.195 are both common; store the text form
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class EventCreate(_CamelModel):
    name: str = Field(min_length=1, max_length=255)
    date: dt.date
    location: Optional[str] = None
    distance: Optional[str] = None
    organizer: Optional[str] = None
    registration_deadline: Optional[dt.date] = None
    registration_link: Optional[str] = None

    @field_validator("distance", mode="before")
    @classmethod
    def _distance_text(cls, value):
        return _distance_as_text(value)


class EventUpdate(_CamelModel):
    """Partial field set proposed for an existing event."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    date: Optional[dt.date] = None
    location: Optional[str] = None
    distance: Optional[str] = None
    organizer: Optional[str] = None
    registration_deadline: Optional[dt.date] = None
    registration_link: Optional[str] = None

    @field_validator("distance", mode="before")
    @classmethod
    def _distance_text(cls, value):
        return _distance_as_text(value)

    @field_validator("name", "date")
    @classmethod
    def _required_columns_not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value

    @model_validator(mode="after")
    def _at_least_one_field(self) -> "EventUpdate":
        if not self.model_fields_set:
            raise ValueError("an update must propose at least one field")
        return self


class EventOut(_CamelModel):
    id: str
    name: str
    date: dt.date
    location: Optional[str] = None
    distance: Optional[str] = None
    organizer: Optional[str] = None
    registration_deadline: Optional[dt.date] = None
    registration_link: Optional[str] = None
    is_approved: bool
    pending_action: Optional[PendingAction] = None
    pending_data: Optional[dict[str, Any]] = None
    state: Optional[ModerationState] = None
    created_at: dt.datetime
    updated_at: dt.datetime
    requested_at: Optional[dt.datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MessageOut(BaseModel):
    message: str
    id: Optional[str] = None
