from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

STORE_BACKENDS = ("json", "sqlalchemy")


def _resolve_project_root() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


PROJECT_ROOT = _resolve_project_root()


def load_env() -> None:
    env_name = os.getenv("APP_ENV", "development")
    candidates = [Path.cwd(), PROJECT_ROOT]
    for base in candidates:
        env_path = base / ".env"
        if env_path.exists():
            load_dotenv(env_path)
            break

    for base in candidates:
        env_specific = base / f".env.{env_name}"
        if env_specific.exists():
            load_dotenv(env_specific, override=True)
            break


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    store_backend: str = "json"
    database_url: str = ""
    log_level: str = "INFO"
    log_dir: str = "logs"
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    api_base_url: str | None = None
    comment_author: str = "Current User"
    http_timeout: float = 10.0


def _resolve_data_dir(raw: str) -> Path:
    path = Path(raw)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path


load_env()

DATA_DIR = _resolve_data_dir(os.getenv("DATA_DIR", "data").strip() or "data")

STORE_BACKEND = os.getenv("STORE_BACKEND", "json").strip().lower() or "json"
if STORE_BACKEND not in STORE_BACKENDS:
    raise RuntimeError(
        f"STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}, got {STORE_BACKEND!r}."
    )

SETTINGS = Settings(
    data_dir=DATA_DIR,
    store_backend=STORE_BACKEND,
    database_url=os.getenv("DATABASE_URL", "").strip() or f"sqlite:///{DATA_DIR / 'taskboard.db'}",
    log_level=os.getenv("LOG_LEVEL", "INFO"),
    log_dir=os.getenv("LOG_DIR", "logs"),
    api_host=os.getenv("API_HOST", "127.0.0.1"),
    api_port=int(os.getenv("API_PORT", "8000")),
    api_base_url=os.getenv("API_BASE_URL", "").strip() or None,
    comment_author=os.getenv("COMMENT_AUTHOR", "Current User"),
    http_timeout=float(os.getenv("HTTP_TIMEOUT", "10")),
)
