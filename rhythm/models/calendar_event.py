"""
Calendar event (time block) models.

Events carry wall-clock start times with no date: a non-persistent event is
"today's plan" by convention and is purged on the next day rollover.
"""

from __future__ import annotations

from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from rhythm.models.enums import EventKind

MIN_EVENT_DURATION = 1
MAX_EVENT_DURATION = 600


def generate_event_id() -> str:
    return uuid4().hex


class CalendarEventBase(BaseModel):
    """Fields shared across create/read."""

    title: str = Field("", description="Last-known display title")
    start_hour: int = Field(..., ge=0, le=23)
    start_minute: int = Field(..., ge=0, le=59)
    duration_minutes: int = Field(30, ge=MIN_EVENT_DURATION, le=MAX_EVENT_DURATION)
    kind: EventKind = EventKind.PLAIN
    linked_item_id: Optional[str] = None
    persistent: bool = False

    @property
    def start_total_minutes(self) -> int:
        return self.start_hour * 60 + self.start_minute


class CalendarEventCreate(CalendarEventBase):
    """Create a new calendar event. The id is generated when omitted."""

    id: Optional[str] = None


class CalendarEventUpdate(BaseModel):
    """Partial update; only fields explicitly set are applied."""

    title: Optional[str] = None
    start_hour: Optional[int] = Field(None, ge=0, le=23)
    start_minute: Optional[int] = Field(None, ge=0, le=59)
    duration_minutes: Optional[int] = Field(
        None, ge=MIN_EVENT_DURATION, le=MAX_EVENT_DURATION
    )
    kind: Optional[EventKind] = None
    linked_item_id: Optional[str] = None
    persistent: Optional[bool] = None


class CalendarEvent(CalendarEventBase):
    """Calendar event with identity."""

    id: str = Field(default_factory=generate_event_id)
