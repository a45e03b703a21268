from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from taskboard.domain.entities import TASK_FIELDS, CommentEntity, TaskEntity
from taskboard.domain.enums import TaskStatus
from taskboard.infra.repository import CommentRepository, TaskRepository


class TaskService:
    def __init__(self, repo: TaskRepository) -> None:
        self._repo = repo

    def list_tasks(self, status: TaskStatus | str | None = None) -> list[TaskEntity]:
        return self._repo.list_tasks(status)

    def get_task(self, task_id: int) -> TaskEntity | None:
        return self._repo.get_task(task_id)

    def create_task(self, task: TaskEntity) -> TaskEntity:
        return self._repo.create_task(task)

    def update_task(self, task_id: int, fields: Mapping[str, Any]) -> TaskEntity | None:
        return self._repo.update_task(task_id, self._normalize_fields(fields))

    def delete_task(self, task_id: int) -> None:
        self._repo.delete_task(task_id)

    def reorder_column(self, status: TaskStatus | str, ordered_ids: list[Mapping[str, int]]) -> None:
        orders = {int(item["id"]): int(item["order"]) for item in ordered_ids}
        self._repo.reorder_column(self._normalize_value(status), orders)

    def _normalize_fields(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        # Accept attribute names as well as record keys; ``id`` is never patched.
        normalized = {}
        for key, value in fields.items():
            record_key = TASK_FIELDS.get(key, key)
            if record_key == "id":
                continue
            normalized[record_key] = self._normalize_value(value)
        return normalized

    @staticmethod
    def _normalize_value(value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value


class CommentService:
    def __init__(self, repo: CommentRepository) -> None:
        self._repo = repo

    def list_comments(self, task_id: int) -> list[CommentEntity]:
        return self._repo.list_comments(task_id)

    def create_comment(self, comment: CommentEntity) -> CommentEntity:
        return self._repo.create_comment(comment)
