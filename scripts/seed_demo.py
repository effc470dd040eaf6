#!/usr/bin/env python
from __future__ import annotations

import argparse
from mixlog.core.config import settings
from mixlog.db.base import Base
from mixlog.db.session import engine, session_scope
from mixlog.schemas.mix import MixInput
from mixlog.services.store import MixStore
from mixlog.services.validation import normalize

DEMO_MIXES = [
    MixInput(
        mix_type="interlock", cement=350, aggregate=1200, sand=800, water=175, plastizer=5,
        color_type="Red", color_quantity=25,
        products=[{"type": "Block Interlock", "quantity": 100}, {"type": "Garden", "quantity": 50}],
    ),
    MixInput(
        mix_type="boards/tiir", cement=400, aggregate=1100, sand=750, water=200, plastizer=8, birta=50,
        color_type="White", color_quantity=30,
        products=[{"type": "Tiir", "quantity": 200}, {"type": "Boards", "quantity": 150}],
    ),
]

def main():
    p = argparse.ArgumentParser(description="Seed demo mix records for an owner.")
    p.add_argument("--owner", type=str, default=settings.default_owner_id, help="Owner id")
    p.add_argument("--create-tables", action="store_true", help="Create tables without alembic (dev SQLite)")
    args = p.parse_args()

    if args.create_tables:
        Base.metadata.create_all(engine)

    with session_scope() as session:
        store = MixStore(session, args.owner)
        if store.list(page=1, page_size=1).total_count:
            print(f"Owner {args.owner} already has records, skipping.")
            return
        for mix in DEMO_MIXES:
            rec = store.create(normalize(mix))
            print(f"Created mix id={rec.id} mix_type={rec.mix_type.value}")

    print("Seed done.")

if __name__ == "__main__":
    main()
