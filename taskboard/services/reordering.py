"""Turns board gestures into new column contents plus the persistence calls
that bring the store in line with them.

Planning is pure: input columns are never mutated and every changed task is
a new ``TaskEntity``. Applying a plan (optimistically) and dispatching its
calls is the board model's job.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Sequence

from taskboard.domain.entities import DragGesture, TaskEntity
from taskboard.domain.enums import MAX_PERCENT, MIN_PERCENT, TaskStatus

logger = logging.getLogger(__name__)

Columns = Mapping[TaskStatus, Sequence[TaskEntity]]


@dataclass(frozen=True)
class OrderWrite:
    """Bulk order write for one column; each task's order is its position."""

    status: TaskStatus
    task_ids: tuple[int, ...]

    @property
    def ordered_ids(self) -> list[dict[str, int]]:
        return [{"id": task_id, "order": index} for index, task_id in enumerate(self.task_ids)]

    def describe(self) -> str:
        return f"order write for {self.status.value} ({len(self.task_ids)} tasks)"


@dataclass(frozen=True)
class StatusPatch:
    """Moves a task to another column at its new position.

    Sent before the order writes so the column write already sees the task
    under its new status.
    """

    task_id: int
    status: TaskStatus
    order: int

    @property
    def fields(self) -> dict[str, Any]:
        return {"status": self.status.value, "order": self.order}

    def describe(self) -> str:
        return f"status patch for task {self.task_id} -> {self.status.value}@{self.order}"


@dataclass(frozen=True)
class FieldPatch:
    task_id: int
    fields: dict[str, Any]

    def describe(self) -> str:
        return f"patch for task {self.task_id} ({', '.join(sorted(self.fields))})"


PersistCall = OrderWrite | StatusPatch | FieldPatch


@dataclass(frozen=True)
class MovePlan:
    task: TaskEntity
    columns: dict[TaskStatus, list[TaskEntity]]
    calls: list[PersistCall] = field(default_factory=list)

    @property
    def order_writes(self) -> list[OrderWrite]:
        return [call for call in self.calls if isinstance(call, OrderWrite)]


def renumber(tasks: Sequence[TaskEntity]) -> list[TaskEntity]:
    """Dense 0..n-1 ``order`` matching list position."""
    return [task if task.order == index else replace(task, order=index) for index, task in enumerate(tasks)]


def clamp_percent(value: int) -> int:
    return max(MIN_PERCENT, min(MAX_PERCENT, value))


def _index_of(tasks: Sequence[TaskEntity], task_id: int | None) -> int | None:
    if task_id is None:
        return None
    return next((i for i, task in enumerate(tasks) if task.id == task_id), None)


def locate(columns: Columns, task_id: int) -> tuple[TaskStatus, int] | None:
    for status, tasks in columns.items():
        index = _index_of(tasks, task_id)
        if index is not None:
            return status, index
    return None


def _relocate(
    columns: Columns,
    source_status: TaskStatus,
    source_index: int,
    target_status: TaskStatus,
    anchor_id: int | None,
    task_update: Mapping[str, Any] | None = None,
    at_head: bool = False,
) -> MovePlan:
    source = list(columns.get(source_status, ()))
    moved = source.pop(source_index)
    same_column = source_status == target_status
    dest = source if same_column else list(columns.get(target_status, ()))

    if at_head:
        insert_at = 0
    else:
        anchor_index = _index_of(dest, anchor_id)
        insert_at = len(dest) if anchor_index is None else anchor_index

    changes = dict(task_update or {})
    if not same_column:
        changes["status"] = target_status
    dest.insert(insert_at, replace(moved, **changes) if changes else moved)

    new_columns = {target_status: renumber(dest)}
    calls: list[PersistCall] = [OrderWrite(target_status, tuple(t.id for t in new_columns[target_status]))]
    if not same_column:
        new_columns[source_status] = renumber(source)
        calls.insert(0, StatusPatch(moved.id, target_status, insert_at))
        calls.append(OrderWrite(source_status, tuple(t.id for t in new_columns[source_status])))

    return MovePlan(task=new_columns[target_status][insert_at], columns=new_columns, calls=calls)


def plan_move(columns: Columns, gesture: DragGesture) -> MovePlan | None:
    source, target = gesture.source, gesture.target
    if source.column == target.column and source.task_id == target.task_id:
        return None

    source_index = _index_of(columns.get(source.column, ()), source.task_id)
    if source_index is None:
        logger.warning("Dragged task %s is not in the %s column", source.task_id, source.column.value)
        return None

    return _relocate(columns, source.column, source_index, target.column, target.task_id)


def plan_increment(columns: Columns, task_id: int, delta: int) -> MovePlan | None:
    """Bump ``success_percent`` by ``delta``; reaching 100 moves the task to the
    head of the done column."""
    found = locate(columns, task_id)
    if found is None:
        logger.warning("Task %s is not on the board", task_id)
        return None

    status, index = found
    task = columns[status][index]
    percent = clamp_percent(task.success_percent + delta)
    percent_changed = percent != task.success_percent
    patch = FieldPatch(task.id, {"successPercent": percent})

    if percent == MAX_PERCENT:
        if not percent_changed and status == TaskStatus.DONE and index == 0:
            return None
        plan = _relocate(
            columns,
            status,
            index,
            TaskStatus.DONE,
            anchor_id=None,
            task_update={"success_percent": percent},
            at_head=True,
        )
        if percent_changed:
            plan.calls.insert(0, patch)
        return plan

    if not percent_changed:
        return None

    updated = replace(task, success_percent=percent)
    column = list(columns[status])
    column[index] = updated
    return MovePlan(task=updated, columns={status: column}, calls=[patch])
