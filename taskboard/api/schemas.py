"""Pydantic models for the board API.

Wire names are camelCase (``successPercent``, ``taskId``, ``orderedIds``);
attributes are snake_case.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from taskboard.domain.entities import CommentEntity, TaskEntity
from taskboard.domain.enums import TaskStatus


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TaskCreate(_CamelModel):
    id: int
    category: str
    name: str
    success_percent: int
    importance: int
    timeline: str
    status: TaskStatus
    order: int = 0

    def to_entity(self) -> TaskEntity:
        return TaskEntity(
            id=self.id,
            category=self.category,
            name=self.name,
            success_percent=self.success_percent,
            importance=self.importance,
            timeline=self.timeline,
            status=self.status,
            order=self.order,
        )


class TaskPatch(_CamelModel):
    category: str | None = None
    name: str | None = None
    success_percent: int | None = None
    importance: int | None = None
    timeline: str | None = None
    status: TaskStatus | None = None
    order: int | None = None

    def fields(self) -> dict:
        return self.model_dump(exclude_unset=True, by_alias=True, mode="json")


class OrderEntry(_CamelModel):
    id: int
    order: int


class OrderUpdate(_CamelModel):
    status: TaskStatus
    ordered_ids: list[OrderEntry]


class CommentCreate(_CamelModel):
    id: int
    task_id: int
    author: str
    message: str
    date: str

    def to_entity(self) -> CommentEntity:
        return CommentEntity(
            id=self.id,
            task_id=self.task_id,
            author=self.author,
            message=self.message,
            date=self.date,
        )
