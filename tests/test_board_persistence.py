"""Board model wired to the real services and JSON store."""
from __future__ import annotations

from datetime import date

import pytest

from taskboard.domain.entities import CardRef, DragGesture
from taskboard.domain.enums import TaskStatus
from taskboard.infra.repository import CommentRepository, TaskRepository
from taskboard.services.board import BoardModel
from taskboard.services.gateway import LocalGateway, PersistenceDispatcher
from taskboard.services.task_service import CommentService, TaskService

from helpers import make_task

TODO = TaskStatus.TODO
DOING = TaskStatus.DOING
DONE = TaskStatus.DONE


@pytest.fixture(name="local_gateway")
def fixture_local_gateway(store):
    return LocalGateway(TaskService(TaskRepository(store)), CommentService(CommentRepository(store)))


def _seed(task_repo, *tasks) -> None:
    for task in tasks:
        task_repo.create_task(task)


def _stored(task_repo, status: TaskStatus) -> list[tuple[int, int]]:
    tasks = sorted(task_repo.list_tasks(status), key=lambda t: t.order)
    return [(t.id, t.order) for t in tasks]


def _shown(model: BoardModel, status: TaskStatus) -> list[tuple[int, int]]:
    return [(t.id, t.order) for t in model.column(status)]


def _model(gateway, executor=None) -> BoardModel:
    return BoardModel(gateway, PersistenceDispatcher(gateway, executor), today=lambda: date(2025, 5, 17))


def test_reorder_within_todo_is_persisted(local_gateway, task_repo, executor) -> None:
    _seed(task_repo, make_task(1, TODO, 0), make_task(2, TODO, 1))
    model = _model(local_gateway, executor)
    model.load()

    model.move(DragGesture(CardRef(TODO, 2), CardRef(TODO, 1)))

    assert _stored(task_repo, TODO) == [(2, 0), (1, 1)]


def test_move_into_empty_column_is_persisted(local_gateway, task_repo, executor) -> None:
    _seed(task_repo, make_task(1, TODO, 0))
    model = _model(local_gateway, executor)
    model.load()

    model.move(DragGesture(CardRef(TODO, 1), CardRef(DOING)))

    assert _stored(task_repo, TODO) == []
    assert _stored(task_repo, DOING) == [(1, 0)]
    assert task_repo.get_task(1).status == DOING


def test_move_before_anchor_in_other_column_keeps_store_dense(local_gateway, task_repo, executor) -> None:
    _seed(task_repo, make_task(1, TODO, 0), make_task(2, TODO, 1), make_task(3, DOING, 0))
    model = _model(local_gateway, executor)
    model.load()

    model.move(DragGesture(CardRef(TODO, 2), CardRef(DOING, 3)))

    assert _shown(model, DOING) == [(2, 0), (3, 1)]
    assert _stored(task_repo, DOING) == [(2, 0), (3, 1)]
    assert _stored(task_repo, TODO) == [(1, 0)]


def test_increment_to_100_is_persisted_at_head_of_done(local_gateway, task_repo, executor) -> None:
    _seed(
        task_repo,
        make_task(1, DOING, 0, success_percent=95),
        make_task(2, DOING, 1),
        make_task(7, DONE, 0, success_percent=100),
    )
    model = _model(local_gateway, executor)
    model.load()

    model.increment_percent(1, 10)

    assert _stored(task_repo, DONE) == [(1, 0), (7, 1)]
    assert _stored(task_repo, DOING) == [(2, 0)]
    assert task_repo.get_task(1).success_percent == 100


def test_back_to_back_gestures_on_default_executor_match_the_board(local_gateway, task_repo) -> None:
    _seed(task_repo, make_task(1, TODO, 0))
    _seed(task_repo, *(make_task(100 + i, DONE, i) for i in range(30)))
    model = _model(local_gateway)
    model.load()

    for _ in range(20):
        model.move(DragGesture(CardRef(TODO, 1), CardRef(DOING)))
        model.move(DragGesture(CardRef(DOING, 1), CardRef(TODO)))
    model.move(DragGesture(CardRef(TODO, 1), CardRef(DOING)))
    model.dispatcher.shutdown(wait=True)

    for status in TaskStatus:
        assert _stored(task_repo, status) == _shown(model, status)
    assert task_repo.get_task(1).status == DOING
