"""FastAPI dependencies resolving the services held on ``app.state``."""

from __future__ import annotations

from fastapi import Request

from taskboard.services.task_service import CommentService, TaskService


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


def get_comment_service(request: Request) -> CommentService:
    return request.app.state.comment_service
