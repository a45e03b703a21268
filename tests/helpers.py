from __future__ import annotations

from concurrent.futures import Executor, Future
from typing import Any, Mapping

from taskboard.domain.entities import CommentEntity, TaskEntity
from taskboard.domain.enums import TaskStatus


class ImmediateExecutor(Executor):
    """Runs submitted work inline so fire-and-forget calls are observable."""

    def submit(self, fn, /, *args, **kwargs) -> Future:
        future: Future = Future()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:  # noqa: BLE001
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future


class FakeGateway:
    def __init__(self) -> None:
        self.tasks: list[TaskEntity] = []
        self.comments: list[CommentEntity] = []
        self.calls: list[tuple] = []
        self.fail_on: set[str] = set()

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, *args))
        if name in self.fail_on:
            raise ConnectionError(f"{name} unavailable")

    def list_tasks(self, status: TaskStatus | None = None) -> list[TaskEntity]:
        self._record("list_tasks", status)
        return [t for t in self.tasks if status is None or t.status == status]

    def create_task(self, task: TaskEntity) -> TaskEntity:
        self._record("create_task", task)
        self.tasks.append(task)
        return task

    def patch_task(self, task_id: int, fields: Mapping[str, Any]) -> TaskEntity | None:
        self._record("patch_task", task_id, dict(fields))
        return next((t for t in self.tasks if t.id == task_id), None)

    def delete_task(self, task_id: int) -> None:
        self._record("delete_task", task_id)
        self.tasks = [t for t in self.tasks if t.id != task_id]

    def persist_order(self, status: TaskStatus, ordered_ids: list[dict[str, int]]) -> None:
        self._record("persist_order", status, ordered_ids)

    def list_comments(self, task_id: int) -> list[CommentEntity]:
        self._record("list_comments", task_id)
        return [c for c in self.comments if c.task_id == task_id]

    def create_comment(self, comment: CommentEntity) -> CommentEntity:
        self._record("create_comment", comment)
        self.comments.append(comment)
        return comment

    def calls_named(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]


def make_task(task_id: int, status: TaskStatus = TaskStatus.TODO, order: int = 0, **overrides) -> TaskEntity:
    values = {
        "id": task_id,
        "category": "Work",
        "name": f"Task {task_id}",
        "success_percent": 0,
        "importance": 3,
        "timeline": "3 days",
        "status": status,
        "order": order,
    }
    values.update(overrides)
    return TaskEntity(**values)
