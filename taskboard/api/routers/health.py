"""Health route for the board API."""

from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
def health_check(request: Request):
    store = request.app.state.store
    return {"status": "healthy", "service": "taskboard", "store": getattr(store, "backend", "custom")}
