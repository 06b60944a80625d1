"""
Drag payload tagged union.

Payloads are decoded once at the drop boundary with decode_drag_source();
handlers only ever see the typed variants.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

DEFAULT_TASK_DURATION = 30
DEFAULT_HABIT_DURATION = 15


class TaskDragSource(BaseModel):
    kind: Literal["task"] = "task"
    task_id: str
    duration: Optional[int] = Field(None, ge=1, le=600)


class HabitDragSource(BaseModel):
    kind: Literal["habit"] = "habit"
    habit_id: str


class RepositionDragSource(BaseModel):
    kind: Literal["reposition"] = "reposition"
    event_id: str


AnyDragSource = Union[TaskDragSource, HabitDragSource, RepositionDragSource]

DragSource = Annotated[AnyDragSource, Field(discriminator="kind")]

_drag_source_adapter: TypeAdapter[AnyDragSource] = TypeAdapter(DragSource)


def decode_drag_source(payload: Any) -> AnyDragSource:
    """
    Decode a raw payload (dict or JSON string) into a drag source.

    Raises:
        pydantic.ValidationError: unknown kind or missing identifier
    """
    if isinstance(payload, (str, bytes)):
        return _drag_source_adapter.validate_json(payload)
    return _drag_source_adapter.validate_python(payload)
