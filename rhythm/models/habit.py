"""
Habit models.

`done` is today's check state; `history` is a capped trailing window used
for the 7-day streak display.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class HabitHistoryEntry(BaseModel):
    date: str = Field(..., description="ISO date YYYY-MM-DD")
    done: bool = False


class Habit(BaseModel):
    id: str
    name: str = Field(..., max_length=500)
    desc: str = ""
    done: bool = False
    history: list[HabitHistoryEntry] = Field(default_factory=list)
