"""Pydantic schemas for chart YAML data validation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from .models import TaskType


class TaskSchema(BaseModel):
    """Schema for one task entry."""

    name: str = ""
    type: TaskType = TaskType.TASK
    start: str | None = None
    end: str | None = None
    parent: str | None = None
    requires: list[str] = Field(default_factory=list)

    @field_validator("start", "end", mode="before")
    @classmethod
    def coerce_date_to_string(cls, v: Any) -> str | None:
        """Convert date objects (unquoted YAML dates) to string."""
        if v is None or v == "":
            return None
        return str(v)

    @field_validator("requires", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> list[str]:
        """Ensure value is a list."""
        if v is None:
            return []
        if isinstance(v, list):
            return [str(item) for item in v]  # type: ignore[misc]
        return [str(v)]


class ChartSchema(BaseModel):
    """Schema for the entire chart YAML file."""

    tasks: dict[str, TaskSchema] = Field(default_factory=dict)

    @field_validator("tasks", mode="before")
    @classmethod
    def allow_empty_tasks(cls, v: Any) -> Any:
        """An empty `tasks:` key loads as None."""
        return {} if v is None else v
