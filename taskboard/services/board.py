"""In-memory board: four ordered columns kept in sync with the store.

Columns are sorted by ``order`` once when loaded. After that every mutation
goes through a plan from :mod:`taskboard.services.reordering` (or an explicit
add/delete) and is applied locally before its persistence calls are
dispatched. Nothing is re-sorted and nothing is rolled back.
"""
from __future__ import annotations

import logging
import time
from datetime import date
from enum import StrEnum
from typing import Callable

from taskboard.domain.drafts import CommentDraft, TaskDraft
from taskboard.domain.entities import CardRef, CommentEntity, DragGesture, TaskEntity
from taskboard.domain.enums import TaskStatus
from taskboard.domain.errors import DraftInvalidError, TaskSaveError

from .gateway import BoardGateway, PersistenceDispatcher
from .reordering import MovePlan, locate, plan_increment, plan_move

logger = logging.getLogger(__name__)


class CardState(StrEnum):
    RESTING = "resting"
    DRAGGING = "dragging"
    DELETE_CONFIRM = "delete_confirm"


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


class BoardModel:
    def __init__(
        self,
        gateway: BoardGateway,
        dispatcher: PersistenceDispatcher | None = None,
        author: str = "Current User",
        clock: Callable[[], int] = _now_millis,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.gateway = gateway
        self.dispatcher = dispatcher or PersistenceDispatcher(gateway)
        self.author = author
        self._clock = clock
        self._today = today
        self._last_id = 0
        self._columns: dict[TaskStatus, list[TaskEntity]] = {status: [] for status in TaskStatus}
        self._comments: dict[int, list[CommentEntity]] = {}
        self._listeners: list[Callable[[], None]] = []
        self.active_task: TaskEntity | None = None
        self.pending_delete: int | None = None

    # -------------------- observation --------------------
    @property
    def columns(self) -> dict[TaskStatus, list[TaskEntity]]:
        return {status: list(tasks) for status, tasks in self._columns.items()}

    def column(self, status: TaskStatus) -> list[TaskEntity]:
        return list(self._columns[status])

    def find(self, task_id: int) -> TaskEntity | None:
        found = locate(self._columns, task_id)
        if found is None:
            return None
        status, index = found
        return self._columns[status][index]

    def state_of(self, task_id: int) -> CardState:
        if self.active_task is not None and self.active_task.id == task_id:
            return CardState.DRAGGING
        if self.pending_delete == task_id:
            return CardState.DELETE_CONFIRM
        return CardState.RESTING

    def subscribe(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener()

    # -------------------- loading --------------------
    def load(self) -> bool:
        grouped: dict[TaskStatus, list[TaskEntity]] = {}
        try:
            for status in TaskStatus:
                grouped[status] = sorted(self.gateway.list_tasks(status), key=lambda t: t.order)
        except Exception:  # noqa: BLE001
            logger.exception("Could not load the board")
            return False

        self._columns = grouped
        self._notify()
        return True

    # -------------------- drag & drop --------------------
    def begin_drag(self, ref: CardRef) -> TaskEntity | None:
        tasks = self._columns.get(ref.column, [])
        self.active_task = next((t for t in tasks if t.id == ref.task_id), None)
        return self.active_task

    def end_drag(self, target: CardRef | None) -> MovePlan | None:
        active = self.active_task
        self.active_task = None
        if active is None or target is None:
            self._notify()
            return None
        return self.move(DragGesture(source=CardRef(active.status, active.id), target=target))

    def move(self, gesture: DragGesture) -> MovePlan | None:
        plan = plan_move(self._columns, gesture)
        if plan is None:
            self._notify()
            return None
        self._commit(plan)
        return plan

    def increment_percent(self, task_id: int, delta: int) -> MovePlan | None:
        plan = plan_increment(self._columns, task_id, delta)
        if plan is None:
            return None
        self._commit(plan)
        return plan

    def _commit(self, plan: MovePlan) -> None:
        self._columns.update(plan.columns)
        self._notify()
        self.dispatcher.dispatch(plan.calls)

    # -------------------- delete --------------------
    def request_delete(self, task_id: int) -> bool:
        if self.find(task_id) is None:
            return False
        self.pending_delete = task_id
        self._notify()
        return True

    def cancel_delete(self) -> None:
        self.pending_delete = None
        self._notify()

    def confirm_delete(self) -> TaskEntity | None:
        task_id = self.pending_delete
        self.pending_delete = None
        if task_id is None:
            return None

        found = locate(self._columns, task_id)
        if found is None:
            self._notify()
            return None
        status, index = found
        column = list(self._columns[status])
        removed = column.pop(index)
        self._columns[status] = column
        self._notify()

        self.dispatcher.submit(lambda: self.gateway.delete_task(task_id), f"delete task {task_id}")
        return removed

    # -------------------- create --------------------
    def next_id(self) -> int:
        self._last_id = max(self._clock(), self._last_id + 1)
        return self._last_id

    def add_task(self, status: TaskStatus, draft: TaskDraft) -> TaskEntity:
        """Create a task from a validated draft.

        The task is shown at the top of its column immediately. The optional
        initial comment is posted without waiting; the task save itself is
        awaited and a failure raises :class:`TaskSaveError` without undoing
        either side effect.
        """
        errors = draft.errors()
        if errors:
            raise DraftInvalidError(errors)

        task = draft.to_task(status, self.next_id(), order=0)
        self._columns[status] = [task, *self._columns[status]]
        self._notify()

        comment_draft = draft.initial_comment_draft(task.id, self.author)
        if comment_draft is not None:
            self._post_comment(comment_draft)

        try:
            self.gateway.create_task(task)
        except Exception as exc:  # noqa: BLE001
            logger.error("Task %s could not be saved: %s", task.id, exc)
            raise TaskSaveError(task.id, exc) from exc
        return task

    # -------------------- comments --------------------
    def load_comments(self, task_id: int) -> list[CommentEntity]:
        try:
            self._comments[task_id] = self.gateway.list_comments(task_id)
        except Exception:  # noqa: BLE001
            logger.exception("Could not load comments for task %s", task_id)
        return self.comments_for(task_id)

    def comments_for(self, task_id: int) -> list[CommentEntity]:
        return list(self._comments.get(task_id, []))

    def add_comment(self, task_id: int, message: str, author: str | None = None) -> CommentEntity | None:
        draft = CommentDraft(task_id=task_id, author=author or self.author, message=message)
        if not draft.is_valid:
            return None
        comment = self._post_comment(draft)
        self._notify()
        return comment

    def _post_comment(self, draft: CommentDraft) -> CommentEntity:
        comment = draft.to_comment(self.next_id(), self._today())
        self._comments[draft.task_id] = [*self._comments.get(draft.task_id, []), comment]
        self.dispatcher.submit(
            lambda: self.gateway.create_comment(comment),
            f"create comment {comment.id} on task {comment.task_id}",
        )
        return comment
