"""Tests for the board API using TestClient."""

from __future__ import annotations

from fastapi.testclient import TestClient

from taskboard.api.app import create_app


def _task(task_id: int, status: str = "todo", order: int = 0, **overrides) -> dict:
    body = {
        "id": task_id,
        "category": "Work",
        "name": f"Task {task_id}",
        "successPercent": 10,
        "importance": 2,
        "timeline": "4 days",
        "status": status,
        "order": order,
    }
    body.update(overrides)
    return body


def test_health(client: TestClient):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "service": "taskboard", "store": "json"}


def test_create_and_list_tasks(client: TestClient):
    resp = client.post("/api/tasks", json=_task(1, "doing"))
    assert resp.status_code == 201
    assert resp.json() == _task(1, "doing")

    client.post("/api/tasks", json=_task(2, "todo"))

    assert [t["id"] for t in client.get("/api/tasks").json()] == [1, 2]
    assert client.get("/api/tasks", params={"status": "doing"}).json() == [_task(1, "doing")]


def test_list_with_unknown_status_is_empty(client: TestClient):
    client.post("/api/tasks", json=_task(1))

    resp = client.get("/api/tasks", params={"status": "later"})

    assert resp.status_code == 200
    assert resp.json() == []


def test_patch_merges_fields(client: TestClient):
    client.post("/api/tasks", json=_task(1))

    resp = client.patch("/api/tasks", params={"id": 1}, json={"status": "inreview", "successPercent": 80})

    assert resp.status_code == 200
    assert resp.json() == _task(1, "inreview", successPercent=80)


def test_put_is_accepted_for_patch(client: TestClient):
    client.post("/api/tasks", json=_task(1))

    resp = client.put("/api/tasks", params={"id": 1}, json={"name": "Renamed"})

    assert resp.status_code == 200
    assert resp.json()["name"] == "Renamed"


def test_patch_unknown_task_is_404_and_store_unchanged(client: TestClient):
    client.post("/api/tasks", json=_task(1))

    resp = client.patch("/api/tasks", params={"id": 2}, json={"name": "Ghost"})

    assert resp.status_code == 404
    assert resp.json() == {"error": "Task not found"}
    assert client.get("/api/tasks").json() == [_task(1)]


def test_patch_without_id_is_400(client: TestClient):
    resp = client.patch("/api/tasks", json={"name": "x"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing id parameter"}


def test_delete_task(client: TestClient):
    client.post("/api/tasks", json=_task(1))
    client.post("/api/tasks", json=_task(2, order=1))

    resp = client.delete("/api/tasks", params={"id": 1})

    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert [t["id"] for t in client.get("/api/tasks").json()] == [2]


def test_delete_unknown_task_succeeds(client: TestClient):
    client.post("/api/tasks", json=_task(1))

    resp = client.delete("/api/tasks", params={"id": 99})

    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert client.get("/api/tasks").json() == [_task(1)]


def test_delete_without_id_is_400(client: TestClient):
    resp = client.delete("/api/tasks")
    assert resp.status_code == 400


def test_order_endpoint_updates_one_column(client: TestClient):
    client.post("/api/tasks", json=_task(1, "todo", 0))
    client.post("/api/tasks", json=_task(2, "todo", 1))
    client.post("/api/tasks", json=_task(3, "done", 0))

    resp = client.put(
        "/api/tasks/order",
        json={"status": "todo", "orderedIds": [{"id": 2, "order": 0}, {"id": 1, "order": 1}]},
    )

    assert resp.status_code == 200
    assert resp.json() == {"ok": True}
    todo = client.get("/api/tasks", params={"status": "todo"}).json()
    assert [(t["id"], t["order"]) for t in todo] == [(2, 0), (1, 1)]
    assert client.get("/api/tasks", params={"status": "done"}).json() == [_task(3, "done", 0)]


def test_comments_round_trip(client: TestClient):
    comment = {"id": 5, "taskId": 1, "author": "Me", "message": "Hi", "date": "2025-03-01"}

    resp = client.post("/api/tasks/comments", json=comment)
    assert resp.status_code == 201
    assert resp.json() == comment

    client.post("/api/tasks/comments", json={**comment, "id": 6, "taskId": 2})

    assert client.get("/api/tasks/comments", params={"taskId": 1}).json() == [comment]


def test_comments_without_valid_task_id_are_empty(client: TestClient):
    client.post(
        "/api/tasks/comments",
        json={"id": 5, "taskId": 1, "author": "Me", "message": "Hi", "date": "2025-03-01"},
    )

    assert client.get("/api/tasks/comments").json() == []
    assert client.get("/api/tasks/comments", params={"taskId": "abc"}).json() == []


def test_malformed_stored_task_does_not_break_listing(client: TestClient, store):
    store.replace_all("tasks", [{"id": 1, "status": "archived"}, _task(2)])

    resp = client.get("/api/tasks")

    assert resp.status_code == 200
    assert resp.json() == [_task(2)]


def test_storage_failure_is_500():
    class BrokenStore:
        backend = "broken"

        def read_all(self, resource):
            return []

        def replace_all(self, resource, records):
            raise OSError("read-only file system")

    with TestClient(create_app(BrokenStore())) as client:
        resp = client.post("/api/tasks", json=_task(1))

    assert resp.status_code == 500
    assert resp.json() == {"error": "Storage failure"}
