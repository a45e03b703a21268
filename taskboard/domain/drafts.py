"""Form values for new tasks and comments.

A draft holds raw user input. Nothing leaves the form until ``is_valid`` holds
for the whole object; the board refuses invalid drafts outright.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date

from .entities import CommentEntity, TaskEntity
from .enums import MAX_IMPORTANCE, MAX_PERCENT, MIN_IMPORTANCE, MIN_PERCENT, TaskStatus


def _is_finite(value: float | int | None) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def format_timeline(days: float) -> str:
    if float(days).is_integer():
        return f"{int(days)} days"
    return f"{days} days"


@dataclass(frozen=True)
class CommentDraft:
    task_id: int
    author: str
    message: str

    @property
    def is_valid(self) -> bool:
        return bool(self.message.strip())

    def to_comment(self, comment_id: int, today: date | None = None) -> CommentEntity:
        day = today or date.today()
        return CommentEntity(
            id=comment_id,
            task_id=self.task_id,
            author=self.author,
            message=self.message,
            date=day.isoformat(),
        )


@dataclass(frozen=True)
class TaskDraft:
    category: str = ""
    name: str = ""
    success_percent: float | None = None
    importance: float | None = None
    timeline_days: float | None = None
    initial_comment: str = ""

    def errors(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if not self.category.strip():
            errors["category"] = "Category is required"
        if not self.name.strip():
            errors["name"] = "Name is required"
        if not (_is_finite(self.success_percent) and MIN_PERCENT <= self.success_percent <= MAX_PERCENT):
            errors["success_percent"] = f"Must be between {MIN_PERCENT} and {MAX_PERCENT}"
        if not (
            _is_finite(self.importance)
            and float(self.importance).is_integer()
            and MIN_IMPORTANCE <= self.importance <= MAX_IMPORTANCE
        ):
            errors["importance"] = f"Must be a whole number between {MIN_IMPORTANCE} and {MAX_IMPORTANCE}"
        if not (_is_finite(self.timeline_days) and self.timeline_days >= 1):
            errors["timeline_days"] = "At least 1 day"
        return errors

    @property
    def is_valid(self) -> bool:
        return not self.errors()

    def to_task(self, status: TaskStatus, task_id: int, order: int = 0) -> TaskEntity:
        return TaskEntity(
            id=task_id,
            category=self.category,
            name=self.name,
            success_percent=int(self.success_percent),
            importance=int(self.importance),
            timeline=format_timeline(self.timeline_days),
            status=status,
            order=order,
        )

    def initial_comment_draft(self, task_id: int, author: str) -> CommentDraft | None:
        if not self.initial_comment.strip():
            return None
        return CommentDraft(task_id=task_id, author=author, message=self.initial_comment)
