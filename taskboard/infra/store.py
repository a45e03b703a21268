"""Whole-collection record stores.

Every resource ("tasks", "comments") is an ordered list of flat records. A
store only knows two operations: read the whole list and replace the whole
list. Callers rely on records they did not touch surviving a replace
unchanged.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .models import RecordModel

logger = logging.getLogger(__name__)

Record = dict[str, Any]


class RecordStore(Protocol):
    def read_all(self, resource: str) -> list[Record]:
        ...

    def replace_all(self, resource: str, records: list[Record]) -> None:
        ...


class JsonFileRecordStore:
    """One pretty-printed JSON array document per resource under ``data_dir``."""

    backend = "json"

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)

    def path_for(self, resource: str) -> Path:
        return self.data_dir / f"{resource}.json"

    def read_all(self, resource: str) -> list[Record]:
        path = self.path_for(resource)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except UnicodeDecodeError as exc:
            logger.error("%s is corrupt (%s), treating it as empty", path, exc)
            return []
        except OSError:
            logger.exception("Could not read %s, treating it as empty", path)
            return []

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.error("%s is corrupt (%s), treating it as empty. Content: %r", path, exc, raw[:500])
            return []

        if not isinstance(data, list):
            logger.error("%s does not hold a JSON array, treating it as empty", path)
            return []
        return [record for record in data if isinstance(record, dict)]

    def replace_all(self, resource: str, records: list[Record]) -> None:
        """Write the collection through a temp file and an atomic rename."""
        dest = self.path_for(resource)
        dest.parent.mkdir(parents=True, exist_ok=True)

        payload = json.dumps(records, indent=2, ensure_ascii=False)
        fd = None
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=f"{dest.name}.tmp.", dir=str(dest.parent))
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                fd = None
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, dest)
            tmp_path = None
        finally:
            if fd is not None:
                try:
                    os.close(fd)
                except OSError:
                    pass
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass


class SqlRecordStore:
    """Records kept as JSON payload rows, one row per record, ordered by position."""

    backend = "sqlalchemy"

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def read_all(self, resource: str) -> list[Record]:
        try:
            with self._session_factory() as session:
                stmt = (
                    select(RecordModel.payload)
                    .where(RecordModel.resource == resource)
                    .order_by(RecordModel.position.asc())
                )
                return [dict(payload) for payload in session.scalars(stmt) if isinstance(payload, dict)]
        except SQLAlchemyError:
            logger.exception("Could not read %s records, treating them as empty", resource)
            return []

    def replace_all(self, resource: str, records: list[Record]) -> None:
        with self._session_factory() as session:
            session.execute(delete(RecordModel).where(RecordModel.resource == resource))
            session.add_all(
                RecordModel(resource=resource, position=position, payload=dict(record))
                for position, record in enumerate(records)
            )
            session.commit()


def build_store(settings) -> JsonFileRecordStore | SqlRecordStore:
    if settings.store_backend == "sqlalchemy":
        from .db import create_db_engine, create_session_factory, init_db

        engine = create_db_engine(settings.database_url)
        init_db(engine)
        return SqlRecordStore(create_session_factory(engine))
    return JsonFileRecordStore(settings.data_dir)
