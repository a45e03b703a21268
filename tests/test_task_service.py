from __future__ import annotations

from taskboard.domain.entities import TaskEntity
from taskboard.domain.enums import TaskStatus
from taskboard.services.task_service import TaskService

from helpers import make_task


class FakeRepo:
    def __init__(self) -> None:
        self.tasks: list[TaskEntity] = []
        self.updates: list[tuple[int, dict]] = []
        self.reorders: list[tuple[str, dict[int, int]]] = []

    def list_tasks(self, status=None) -> list[TaskEntity]:
        return [t for t in self.tasks if status is None or t.status == status]

    def get_task(self, task_id: int) -> TaskEntity | None:
        return next((t for t in self.tasks if t.id == task_id), None)

    def create_task(self, task: TaskEntity) -> TaskEntity:
        self.tasks.append(task)
        return task

    def update_task(self, task_id: int, fields: dict) -> TaskEntity | None:
        self.updates.append((task_id, fields))
        return self.get_task(task_id)

    def delete_task(self, task_id: int) -> None:
        self.tasks = [t for t in self.tasks if t.id != task_id]

    def reorder_column(self, status: str, orders: dict[int, int]) -> None:
        self.reorders.append((status, orders))


def test_update_accepts_attribute_names_and_enums() -> None:
    repo = FakeRepo()
    service = TaskService(repo)
    repo.create_task(make_task(1))

    service.update_task(1, {"success_percent": 70, "status": TaskStatus.IN_REVIEW, "id": 99})

    assert repo.updates == [(1, {"successPercent": 70, "status": "inreview"})]


def test_reorder_column_builds_order_mapping() -> None:
    repo = FakeRepo()
    service = TaskService(repo)

    service.reorder_column(TaskStatus.DOING, [{"id": 4, "order": 0}, {"id": 2, "order": 1}])

    assert repo.reorders == [("doing", {4: 0, 2: 1})]
