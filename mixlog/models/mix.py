from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, Enum, Index, String, func
from sqlalchemy.types import TypeDecorator
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from mixlog.db.base import Base
from mixlog.models.enums import MixType

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

def _new_id() -> str:
    return str(uuid.uuid4())

class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetimes on every backend (SQLite drops tzinfo)."""
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

class MixRecord(Base):
    __tablename__ = "mix_data"
    __table_args__ = (
        Index("idx_mix_data_created_by", "created_by"),
        Index("idx_mix_data_timestamp", "timestamp"),
        Index("idx_mix_data_mix_type", "mix_type"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    timestamp: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=_utcnow)
    mix_type: Mapped[MixType] = mapped_column(
        Enum(MixType, name="mix_type_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    # cement, aggregate, sand, water, plastizer, birta?, colorType, colorQuantity, products
    measurements: Mapped[dict] = mapped_column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=dict)
    created_by: Mapped[str] = mapped_column(String(255), nullable=False)
    last_modified: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, default=_utcnow)

    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), server_default=func.now(), nullable=True)

    def __repr__(self) -> str:
        return f"<MixRecord id={self.id} mix_type={self.mix_type} created_by={self.created_by}>"
