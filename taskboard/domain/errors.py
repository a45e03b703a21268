from __future__ import annotations


class TaskBoardError(Exception):
    """Base exception for board operations."""


class DraftInvalidError(TaskBoardError):
    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        details = "; ".join(f"{field}: {message}" for field, message in errors.items())
        super().__init__(f"Task draft is invalid ({details})")


class TaskSaveError(TaskBoardError):
    """The primary save of a newly created task failed."""

    def __init__(self, task_id: int, cause: Exception):
        self.task_id = task_id
        self.cause = cause
        super().__init__(f"Task {task_id} could not be saved: {cause}")
