from __future__ import annotations

import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, Mapping, Protocol

from taskboard.domain.entities import CommentEntity, TaskEntity
from taskboard.domain.enums import TaskStatus

from .reordering import FieldPatch, OrderWrite, PersistCall, StatusPatch
from .task_service import CommentService, TaskService

logger = logging.getLogger(__name__)


class BoardGateway(Protocol):
    def list_tasks(self, status: TaskStatus | None = None) -> list[TaskEntity]:
        ...

    def create_task(self, task: TaskEntity) -> TaskEntity:
        ...

    def patch_task(self, task_id: int, fields: Mapping[str, Any]) -> TaskEntity | None:
        ...

    def delete_task(self, task_id: int) -> None:
        ...

    def persist_order(self, status: TaskStatus, ordered_ids: list[dict[str, int]]) -> None:
        ...

    def list_comments(self, task_id: int) -> list[CommentEntity]:
        ...

    def create_comment(self, comment: CommentEntity) -> CommentEntity:
        ...


class LocalGateway:
    """Talks to the services in-process; used when no API server is configured."""

    def __init__(self, tasks: TaskService, comments: CommentService) -> None:
        self._tasks = tasks
        self._comments = comments

    def list_tasks(self, status: TaskStatus | None = None) -> list[TaskEntity]:
        return self._tasks.list_tasks(status)

    def create_task(self, task: TaskEntity) -> TaskEntity:
        return self._tasks.create_task(task)

    def patch_task(self, task_id: int, fields: Mapping[str, Any]) -> TaskEntity | None:
        return self._tasks.update_task(task_id, fields)

    def delete_task(self, task_id: int) -> None:
        self._tasks.delete_task(task_id)

    def persist_order(self, status: TaskStatus, ordered_ids: list[dict[str, int]]) -> None:
        self._tasks.reorder_column(status, ordered_ids)

    def list_comments(self, task_id: int) -> list[CommentEntity]:
        return self._comments.list_comments(task_id)

    def create_comment(self, comment: CommentEntity) -> CommentEntity:
        return self._comments.create_comment(comment)


class PersistenceDispatcher:
    """Fire-and-forget delivery of persistence calls.

    Calls are submitted to the executor and never awaited. The calls of one
    plan run as a single job, in plan order. A failed call is logged and
    skipped: no retry, no rollback of the optimistic state that triggered it.
    """

    def __init__(self, gateway: BoardGateway, executor: Executor | None = None) -> None:
        self.gateway = gateway
        self._executor = executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="persist")

    def dispatch(self, calls: list[PersistCall]) -> Future | None:
        if not calls:
            return None
        steps = [(self._runner_for(call), call.describe()) for call in calls]
        return self._executor.submit(self._run_in_order, steps)

    def submit(self, fn: Callable[[], Any], description: str) -> Future:
        future = self._executor.submit(fn)
        future.add_done_callback(lambda f: self._log_failure(f, description))
        return future

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    @staticmethod
    def _run_in_order(steps: list[tuple[Callable[[], Any], str]]) -> None:
        for runner, description in steps:
            try:
                runner()
            except Exception as exc:  # noqa: BLE001
                logger.error("Persistence call failed: %s: %s", description, exc, exc_info=exc)

    def _runner_for(self, call: PersistCall) -> Callable[[], Any]:
        if isinstance(call, OrderWrite):
            return lambda: self.gateway.persist_order(call.status, call.ordered_ids)
        if isinstance(call, (StatusPatch, FieldPatch)):
            return lambda: self._patch(call.task_id, call.fields)
        raise TypeError(f"Unsupported persistence call: {call!r}")

    def _patch(self, task_id: int, fields: Mapping[str, Any]) -> TaskEntity:
        updated = self.gateway.patch_task(task_id, fields)
        if updated is None:
            raise LookupError(f"Task {task_id} not found in store")
        return updated

    @staticmethod
    def _log_failure(future: Future, description: str) -> None:
        if future.cancelled():
            logger.warning("Persistence call cancelled: %s", description)
            return
        exc = future.exception()
        if exc is not None:
            logger.error("Persistence call failed: %s: %s", description, exc, exc_info=exc)
