from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from taskboard.domain.entities import CommentEntity, TaskEntity
from taskboard.domain.enums import Resource, TaskStatus

from .store import Record, RecordStore

logger = logging.getLogger(__name__)


def _to_task(record: Record) -> TaskEntity | None:
    try:
        return TaskEntity.from_record(record)
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning("Skipping malformed task record %r: %s", record, exc)
        return None


def _to_comment(record: Record) -> CommentEntity | None:
    try:
        return CommentEntity.from_record(record)
    except (KeyError, TypeError, ValueError) as exc:
        logger.warning("Skipping malformed comment record %r: %s", record, exc)
        return None


def _status_of(record: Record) -> str | None:
    status = record.get("status")
    return str(status) if status is not None else None


class TaskRepository:
    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def _read(self) -> list[Record]:
        return self._store.read_all(Resource.TASKS.value)

    def _write(self, records: list[Record]) -> None:
        self._store.replace_all(Resource.TASKS.value, records)

    def list_tasks(self, status: TaskStatus | str | None = None) -> list[TaskEntity]:
        records = self._read()
        if status:
            records = [r for r in records if _status_of(r) == str(status)]
        tasks = (_to_task(r) for r in records)
        return [task for task in tasks if task is not None]

    def get_task(self, task_id: int) -> Optional[TaskEntity]:
        record = next((r for r in self._read() if r.get("id") == task_id), None)
        return _to_task(record) if record else None

    def create_task(self, task: TaskEntity) -> TaskEntity:
        records = self._read()
        records.append(task.to_record())
        self._write(records)
        return task

    def update_task(self, task_id: int, fields: Mapping[str, Any]) -> Optional[TaskEntity]:
        records = self._read()
        index = next((i for i, r in enumerate(records) if r.get("id") == task_id), None)
        if index is None:
            return None

        merged = {**records[index], **fields}
        task = _to_task(merged)
        if task is None:
            return None

        records[index] = merged
        self._write(records)
        return task

    def delete_task(self, task_id: int) -> None:
        records = self._read()
        remaining = [r for r in records if r.get("id") != task_id]
        if len(remaining) == len(records):
            return
        self._write(remaining)

    def reorder_column(self, status: TaskStatus | str, orders: Mapping[int, int]) -> None:
        records = self._read()
        status_key = str(status)
        column = [r for r in records if _status_of(r) == status_key]
        other = [r for r in records if _status_of(r) != status_key]

        for record in column:
            new_order = orders.get(record.get("id"))
            if new_order is not None:
                record["order"] = new_order
        column.sort(key=lambda r: r.get("order", 0))

        self._write(other + column)
        logger.debug("Reordered %s column (%d tasks)", status_key, len(column))


class CommentRepository:
    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def list_comments(self, task_id: int) -> list[CommentEntity]:
        records = self._store.read_all(Resource.COMMENTS.value)
        comments = (_to_comment(r) for r in records if r.get("taskId") == task_id)
        return [comment for comment in comments if comment is not None]

    def create_comment(self, comment: CommentEntity) -> CommentEntity:
        records = self._store.read_all(Resource.COMMENTS.value)
        records.append(comment.to_record())
        self._store.replace_all(Resource.COMMENTS.value, records)
        return comment
