from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .enums import TaskStatus

TASK_FIELDS: dict[str, str] = {
    "id": "id",
    "category": "category",
    "name": "name",
    "success_percent": "successPercent",
    "importance": "importance",
    "timeline": "timeline",
    "status": "status",
    "order": "order",
}


@dataclass(frozen=True)
class TaskEntity:
    id: int
    category: str
    name: str
    success_percent: int
    importance: int
    timeline: str
    status: TaskStatus
    order: int

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> TaskEntity:
        return cls(
            id=int(record["id"]),
            category=str(record.get("category", "")),
            name=str(record.get("name", "")),
            success_percent=int(record.get("successPercent", 0)),
            importance=int(record.get("importance", 1)),
            timeline=str(record.get("timeline", "")),
            status=TaskStatus(record.get("status", TaskStatus.TODO.value)),
            order=int(record.get("order", 0)),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "category": self.category,
            "name": self.name,
            "successPercent": self.success_percent,
            "importance": self.importance,
            "timeline": self.timeline,
            "status": self.status.value,
            "order": self.order,
        }


@dataclass(frozen=True)
class CommentEntity:
    id: int
    task_id: int
    author: str
    message: str
    date: str

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> CommentEntity:
        return cls(
            id=int(record["id"]),
            task_id=int(record["taskId"]),
            author=str(record.get("author", "")),
            message=str(record.get("message", "")),
            date=str(record.get("date", "")),
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "taskId": self.task_id,
            "author": self.author,
            "message": self.message,
            "date": self.date,
        }


@dataclass(frozen=True)
class CardRef:
    """Identity of a draggable card, or of a column's empty drop zone when
    ``task_id`` is ``None``."""

    column: TaskStatus
    task_id: int | None = None


@dataclass(frozen=True)
class DragGesture:
    source: CardRef
    target: CardRef
