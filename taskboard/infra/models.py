from __future__ import annotations

from sqlalchemy import JSON, Column, Integer, String, UniqueConstraint

from .db import Base


class RecordModel(Base):
    __tablename__ = "records"
    __table_args__ = (UniqueConstraint("resource", "position", name="uq_records_resource_position"),)

    id = Column(Integer, primary_key=True)
    resource = Column(String(40), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    payload = Column(JSON, nullable=False)
