from __future__ import annotations

from enum import IntEnum, StrEnum


class TaskStatus(StrEnum):
    TODO = "todo"
    DOING = "doing"
    IN_REVIEW = "inreview"
    DONE = "done"


class Resource(StrEnum):
    TASKS = "tasks"
    COMMENTS = "comments"


class ImportanceLevel(IntEnum):
    MINIMAL = 1
    LOW = 2
    MEDIUM = 3
    HIGH = 4
    CRITICAL = 5


COLUMN_TITLES: dict[TaskStatus, str] = {
    TaskStatus.TODO: "Todo",
    TaskStatus.DOING: "Doing",
    TaskStatus.IN_REVIEW: "In Review",
    TaskStatus.DONE: "Done",
}

IMPORTANCE_COLORS: dict[int, str] = {
    ImportanceLevel.MINIMAL: "#ECF2FF",
    ImportanceLevel.LOW: "#BBFFA7",
    ImportanceLevel.MEDIUM: "#1161FF",
    ImportanceLevel.HIGH: "#A530FF",
    ImportanceLevel.CRITICAL: "#FF4E51",
}

MIN_PERCENT = 0
MAX_PERCENT = 100
MIN_IMPORTANCE = ImportanceLevel.MINIMAL.value
MAX_IMPORTANCE = ImportanceLevel.CRITICAL.value
