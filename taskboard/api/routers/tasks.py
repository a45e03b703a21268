"""Task and comment routes.

Tasks are addressed with an ``id`` query parameter rather than a path
segment, matching the board client.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from taskboard.services.task_service import CommentService, TaskService

from ..deps import get_comment_service, get_task_service
from ..schemas import CommentCreate, OrderUpdate, TaskCreate, TaskPatch

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def _missing_id() -> JSONResponse:
    return JSONResponse({"error": "Missing id parameter"}, status_code=400)


@router.get("")
def list_tasks(
    status: str | None = None,
    service: TaskService = Depends(get_task_service),
):
    return [task.to_record() for task in service.list_tasks(status)]


@router.post("", status_code=201)
def create_task(
    data: TaskCreate,
    service: TaskService = Depends(get_task_service),
):
    task = service.create_task(data.to_entity())
    logger.info("Created task %s in %s", task.id, task.status.value)
    return task.to_record()


@router.api_route("", methods=["PATCH", "PUT"])
def update_task(
    data: TaskPatch,
    task_id: int | None = Query(default=None, alias="id"),
    service: TaskService = Depends(get_task_service),
):
    if task_id is None:
        return _missing_id()
    task = service.update_task(task_id, data.fields())
    if task is None:
        return JSONResponse({"error": "Task not found"}, status_code=404)
    return task.to_record()


@router.delete("")
def delete_task(
    task_id: int | None = Query(default=None, alias="id"),
    service: TaskService = Depends(get_task_service),
):
    if task_id is None:
        return _missing_id()
    service.delete_task(task_id)
    return {"success": True}


@router.put("/order")
def reorder_tasks(
    data: OrderUpdate,
    service: TaskService = Depends(get_task_service),
):
    service.reorder_column(data.status, [entry.model_dump() for entry in data.ordered_ids])
    return {"ok": True}


@router.get("/comments")
def list_comments(
    task_id: str | None = Query(default=None, alias="taskId"),
    service: CommentService = Depends(get_comment_service),
):
    try:
        parsed = int(task_id) if task_id is not None else None
    except ValueError:
        parsed = None
    if parsed is None:
        return []
    return [comment.to_record() for comment in service.list_comments(parsed)]


@router.post("/comments", status_code=201)
def create_comment(
    data: CommentCreate,
    service: CommentService = Depends(get_comment_service),
):
    return service.create_comment(data.to_entity()).to_record()
