"""FastAPI application serving the board's JSON API."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from taskboard.config import SETTINGS
from taskboard.infra.repository import CommentRepository, TaskRepository
from taskboard.infra.store import RecordStore, build_store
from taskboard.services.task_service import CommentService, TaskService

from .routers import health, tasks

logger = logging.getLogger(__name__)


async def _storage_failure(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Storage failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"error": "Storage failure"}, status_code=500)


def create_app(store: RecordStore | None = None) -> FastAPI:
    store = store if store is not None else build_store(SETTINGS)

    app = FastAPI(title="TaskBoard")
    app.state.store = store
    app.state.task_service = TaskService(TaskRepository(store))
    app.state.comment_service = CommentService(CommentRepository(store))

    app.add_exception_handler(OSError, _storage_failure)
    app.add_exception_handler(SQLAlchemyError, _storage_failure)

    app.include_router(health.router)
    app.include_router(tasks.router)
    return app
