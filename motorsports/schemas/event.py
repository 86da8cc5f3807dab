"""Event schemas for request/response validation."""
from datetime import datetime, timezone
from typing import Optional

from pydantic import field_validator, model_validator

from motorsports.models.event import EventStatus, EventType
from motorsports.schemas.common import CamelModel, NonEmptyStr, RequestModel, check_choice, check_optional_choice

DATE_RANGE_ERROR = "endDate must be on or after startDate"


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes (including ones read back from SQLite) as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class EventCreate(RequestModel):
    """Schema for creating an event."""
    name: NonEmptyStr
    type: str
    venue: NonEmptyStr
    location: NonEmptyStr
    start_date: datetime
    end_date: datetime
    status: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("type")
    @classmethod
    def valid_type(cls, v: str) -> str:
        return check_choice(v, EventType, "type")

    @field_validator("status")
    @classmethod
    def valid_status(cls, v: Optional[str]) -> Optional[str]:
        return check_optional_choice(v, EventStatus, "status")

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v: datetime) -> datetime:
        return as_utc(v)

    @model_validator(mode="after")
    def end_not_before_start(self):
        if self.end_date < self.start_date:
            raise ValueError(DATE_RANGE_ERROR)
        return self


class EventUpdate(RequestModel):
    """Schema for updating an event. The date range is checked against stored values."""
    name: Optional[NonEmptyStr] = None
    type: Optional[str] = None
    venue: Optional[NonEmptyStr] = None
    location: Optional[NonEmptyStr] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("type")
    @classmethod
    def valid_type(cls, v: Optional[str]) -> Optional[str]:
        return check_optional_choice(v, EventType, "type")

    @field_validator("status")
    @classmethod
    def valid_status(cls, v: Optional[str]) -> Optional[str]:
        return check_optional_choice(v, EventStatus, "status")

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)


class EventBrief(CamelModel):
    id: str
    name: str
    type: str
    venue: str
    location: str
    start_date: datetime


class EventSummary(EventBrief):
    end_date: datetime


class EventResponse(EventSummary):
    """Schema for event response."""
    status: str
    description: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
