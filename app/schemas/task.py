"""Pydantic schemas for task request/response validation."""

from datetime import datetime
from typing import Annotated, Literal, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic.alias_generators import to_camel

from app.models.task import MIN_PRIORITY, MAX_PRIORITY

TaskColor = Literal["default", "red", "yellow", "green", "blue", "purple"]


def _non_blank(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be empty")
    return value


TaskTitle = Annotated[str, AfterValidator(_non_blank)]
# pas de coercition: true, "2" ou 2.0 sont refusés
TaskPriority = Annotated[StrictInt, Field(ge=MIN_PRIORITY, le=MAX_PRIORITY)]


class TaskCreate(BaseModel):
    """Schema for creating a task. Unknown keys are ignored."""

    title: TaskTitle
    description: Optional[str] = None
    priority: TaskPriority = MIN_PRIORITY
    color: TaskColor = "default"


class TaskUpdate(BaseModel):
    """Partial patch. Only the keys present in the body are applied."""

    title: Optional[TaskTitle] = None
    description: Optional[str] = None
    completed: Optional[bool] = None
    priority: Optional[TaskPriority] = None
    color: Optional[TaskColor] = None

    @field_validator("title", "completed", "priority", "color", mode="before")
    @classmethod
    def reject_null(cls, value):
        # description est la seule colonne nullable
        if value is None:
            raise ValueError("may not be null")
        return value


class TaskResponse(BaseModel):
    id: int
    user_id: int
    title: str
    description: Optional[str]
    completed: bool
    priority: int
    color: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)
