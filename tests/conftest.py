from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from taskboard.api.app import create_app
from taskboard.infra.repository import CommentRepository, TaskRepository
from taskboard.infra.store import JsonFileRecordStore

from helpers import FakeGateway, ImmediateExecutor


@pytest.fixture(name="executor")
def fixture_executor():
    return ImmediateExecutor()


@pytest.fixture(name="gateway")
def fixture_gateway():
    return FakeGateway()


@pytest.fixture(name="store")
def fixture_store(tmp_path):
    return JsonFileRecordStore(tmp_path / "data")


@pytest.fixture(name="task_repo")
def fixture_task_repo(store):
    return TaskRepository(store)


@pytest.fixture(name="comment_repo")
def fixture_comment_repo(store):
    return CommentRepository(store)


@pytest.fixture(name="client")
def fixture_client(store):
    with TestClient(create_app(store)) as c:
        yield c
