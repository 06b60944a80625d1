"""
Schedule grid models.

GridConfig describes the visible calendar surface; the remaining models are
render-time values produced by grid geometry.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

HOURS_PER_DAY = 24
MINUTES_PER_DAY = HOURS_PER_DAY * 60


class TimeOfDay(BaseModel):
    """Wall-clock (hour, minute) pair."""

    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(..., ge=0, le=59)

    @property
    def total_minutes(self) -> int:
        return self.hour * 60 + self.minute

    @classmethod
    def from_total_minutes(cls, total: int) -> "TimeOfDay":
        total = max(0, min(total, MINUTES_PER_DAY - 1))
        return cls(hour=total // 60, minute=total % 60)


class GridConfig(BaseModel):
    """Visible window and pixel scale of the schedule surface."""

    start_hour: int = Field(9, ge=0, le=23)
    visible_hours: int = Field(8, ge=1, le=HOURS_PER_DAY)
    hour_height: float = Field(64.0, gt=0)
    top_padding: float = Field(6.0, ge=0)

    @model_validator(mode="after")
    def _fit_within_day(self) -> "GridConfig":
        # Hours past midnight are never drawn.
        if self.start_hour + self.visible_hours > HOURS_PER_DAY:
            self.visible_hours = HOURS_PER_DAY - self.start_hour
        return self

    @property
    def end_hour(self) -> int:
        """Exclusive end of the visible window."""
        return self.start_hour + self.visible_hours

    @property
    def usable_height(self) -> float:
        return self.visible_hours * self.hour_height

    def contains_hour(self, hour: int) -> bool:
        return self.start_hour <= hour < self.end_hour


class BlockStyle(BaseModel):
    """Pixel placement of an event block."""

    top: float
    height: float
    compact: bool = False


class DragPreview(BaseModel):
    """Live preview rectangle and floating time label during a drag."""

    time: TimeOfDay
    top: float
    height: float
    label: str
    duration_minutes: int


class GridLine(BaseModel):
    time: TimeOfDay
    offset: float
    is_hour: bool
