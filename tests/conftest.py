from __future__ import annotations

from contextlib import contextmanager

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mixlog.db.base import Base
from mixlog.models.mix import MixRecord
from mixlog.schemas.mix import MixInput

@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine, tables=[MixRecord.__table__])
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)
    engine.dispose()

@pytest.fixture()
def sqlite_session(session_factory):
    with session_factory() as session:
        yield session

@pytest.fixture()
def client(session_factory, monkeypatch):
    from fastapi.testclient import TestClient
    import apps.api.main as api_main
    from mixlog.core.config import settings

    @contextmanager
    def _scope():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    monkeypatch.setattr(api_main, "session_scope", _scope)
    monkeypatch.setattr(settings, "api_auth_enabled", False)
    with TestClient(api_main.app) as c:
        yield c

@pytest.fixture()
def interlock_input() -> MixInput:
    return MixInput(
        mix_type="interlock", cement=350, aggregate=1200, sand=800, water=175, plastizer=5,
        color_type="Red", color_quantity=25,
        products=[{"type": "Block Interlock", "quantity": 100}, {"type": "Garden", "quantity": 50}],
    )

@pytest.fixture()
def boards_input() -> MixInput:
    return MixInput(
        mix_type="boards/tiir", cement=400, aggregate=1100, sand=750, water=200, plastizer=8, birta=50,
        color_type="White", color_quantity=30,
        products=[{"type": "Tiir", "quantity": 200}, {"type": "Boards", "quantity": 150}],
    )
