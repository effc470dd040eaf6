from __future__ import annotations

import math
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone

import structlog
from pydantic import ValidationError
from sqlalchemy import desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mixlog.models.enums import MixType
from mixlog.models.mix import MixRecord
from mixlog.schemas.mix import MixFields, MixPage, MixRecordOut

log = structlog.get_logger(__name__)

class StoreError(Exception):
    """Record store failure (database, access, missing record)."""

class RecordNotFound(StoreError):
    pass

@contextmanager
def _wrap_db_errors(op: str):
    try:
        yield
    except SQLAlchemyError as e:
        log.error("store_error", op=op, exc_type=type(e).__name__, exc=str(e))
        raise StoreError(f"Record store {op} failed") from e

def _to_out(rec: MixRecord) -> MixRecordOut:
    try:
        return MixRecordOut.model_validate(rec)
    except ValidationError as e:
        log.error("store_malformed_record", id=rec.id, errors=e.error_count())
        raise StoreError(f"Stored mix record {rec.id} is malformed") from e

@dataclass
class MixStore:
    """Mix records of a single owner.

    Other owners' records behave as if they did not exist.
    """
    session: Session
    owner_id: str

    def _get(self, record_id: str) -> MixRecord:
        rec = self.session.execute(
            select(MixRecord).where(MixRecord.id == record_id, MixRecord.created_by == self.owner_id)
        ).scalar_one_or_none()
        if rec is None:
            raise RecordNotFound(f"Mix record {record_id} not found")
        return rec

    def list(self, page: int = 1, page_size: int = 25, mix_type: MixType | None = None) -> MixPage:
        if page < 1 or page_size < 1:
            raise ValueError("page and page_size must be positive")
        conds = [MixRecord.created_by == self.owner_id]
        if mix_type:
            conds.append(MixRecord.mix_type == MixType(mix_type))
        with _wrap_db_errors("list"):
            total = self.session.execute(select(func.count(MixRecord.id)).where(*conds)).scalar_one()
            rows = self.session.execute(
                select(MixRecord)
                .where(*conds)
                .order_by(desc(MixRecord.timestamp), MixRecord.id.asc())
                .offset((page - 1) * page_size)
                .limit(page_size)
            ).scalars().all()
        return MixPage(
            records=[_to_out(r) for r in rows],
            total_count=total,
            total_pages=math.ceil(total / page_size),
            page=page,
            page_size=page_size,
        )

    def get(self, record_id: str) -> MixRecordOut:
        with _wrap_db_errors("get"):
            rec = self._get(record_id)
        return _to_out(rec)

    def create(self, fields: MixFields) -> MixRecordOut:
        now = datetime.now(timezone.utc)
        rec = MixRecord(
            mix_type=fields.mix_type,
            measurements=fields.measurements.to_document(),
            created_by=self.owner_id,
            timestamp=now,
            last_modified=now,
        )
        with _wrap_db_errors("create"):
            self.session.add(rec)
            self.session.flush()
        log.info("mix_created", id=rec.id, mix_type=rec.mix_type.value, owner=self.owner_id)
        return _to_out(rec)

    def update(self, record_id: str, fields: MixFields) -> MixRecordOut:
        with _wrap_db_errors("update"):
            rec = self._get(record_id)
            rec.mix_type = fields.mix_type
            rec.measurements = fields.measurements.to_document()
            rec.last_modified = datetime.now(timezone.utc)
            self.session.flush()
        log.info("mix_updated", id=rec.id, mix_type=rec.mix_type.value, owner=self.owner_id)
        return _to_out(rec)

    def delete(self, record_id: str) -> bool:
        with _wrap_db_errors("delete"):
            rec = self._get(record_id)
            self.session.delete(rec)
            self.session.flush()
        log.info("mix_deleted", id=record_id, owner=self.owner_id)
        return True
