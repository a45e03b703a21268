"""HTTP gateway for a board served by ``taskboard-server``."""
from __future__ import annotations

from typing import Any, Mapping

import httpx

from taskboard.domain.entities import CommentEntity, TaskEntity
from taskboard.domain.enums import TaskStatus


class BoardApiError(Exception):
    """Base exception for board API errors."""

    def __init__(self, message: str, status_code: int | None = None, response: Any = None):
        self.message = message
        self.status_code = status_code
        self.response = response
        super().__init__(self.message)


class BoardNotFoundError(BoardApiError):
    """The addressed task does not exist."""


class HttpGateway:
    """Board gateway over the JSON API.

    Usage:
        gateway = HttpGateway("http://127.0.0.1:8000")
        todo = gateway.list_tasks(TaskStatus.TODO)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise BoardApiError(f"{method} {path} failed: {exc}") from exc

        if response.status_code == 404:
            raise BoardNotFoundError(
                f"{method} {path} -> 404", status_code=404, response=_safe_json(response)
            )
        if response.is_error:
            raise BoardApiError(
                f"{method} {path} -> {response.status_code}: {response.text}",
                status_code=response.status_code,
                response=_safe_json(response),
            )
        return _safe_json(response)

    def list_tasks(self, status: TaskStatus | None = None) -> list[TaskEntity]:
        params = {"status": status.value} if status else None
        data = self._request("GET", "/api/tasks", params=params)
        return [TaskEntity.from_record(item) for item in data or []]

    def create_task(self, task: TaskEntity) -> TaskEntity:
        data = self._request("POST", "/api/tasks", json=task.to_record())
        return TaskEntity.from_record(data)

    def patch_task(self, task_id: int, fields: Mapping[str, Any]) -> TaskEntity | None:
        try:
            data = self._request("PATCH", "/api/tasks", params={"id": task_id}, json=dict(fields))
        except BoardNotFoundError:
            return None
        return TaskEntity.from_record(data)

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", "/api/tasks", params={"id": task_id})

    def persist_order(self, status: TaskStatus, ordered_ids: list[dict[str, int]]) -> None:
        self._request(
            "PUT",
            "/api/tasks/order",
            json={"status": status.value, "orderedIds": ordered_ids},
        )

    def list_comments(self, task_id: int) -> list[CommentEntity]:
        data = self._request("GET", "/api/tasks/comments", params={"taskId": task_id})
        return [CommentEntity.from_record(item) for item in data or []]

    def create_comment(self, comment: CommentEntity) -> CommentEntity:
        data = self._request("POST", "/api/tasks/comments", json=comment.to_record())
        return CommentEntity.from_record(data)


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
