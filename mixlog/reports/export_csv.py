from __future__ import annotations

import csv
from datetime import date, datetime, timezone
from io import StringIO
from zoneinfo import ZoneInfo

from mixlog.schemas.mix import MixRecordOut

HEADER = ["ID", "Timestamp", "Mix Type", "Color Type", "Color Quantity", "Cement", "Aggregate", "Sand", "Water", "Plastizer", "Birta"]

def format_timestamp(ts: datetime, tz: str) -> str:
    # stored naive timestamps are UTC
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    local = ts.astimezone(ZoneInfo(tz))
    hour = local.hour % 12 or 12
    ampm = "AM" if local.hour < 12 else "PM"
    return f"{local.month}/{local.day}/{local.year}, {hour}:{local.minute:02d}:{local.second:02d} {ampm}"

def format_number(v: float | None) -> str:
    if v is None:
        return ""
    v = float(v)
    return str(int(v)) if v.is_integer() else repr(v)

def mixes_to_csv(records: list[MixRecordOut], *, tz: str) -> str:
    bio = StringIO()
    w = csv.writer(bio, lineterminator="\n")
    w.writerow(HEADER)
    for r in records:
        m = r.measurements
        w.writerow([
            r.id,
            format_timestamp(r.timestamp, tz),
            r.mix_type.value,
            m.color_type.value,
            format_number(m.color_quantity),
            format_number(m.cement),
            format_number(m.aggregate),
            format_number(m.sand),
            format_number(m.water),
            format_number(m.plastizer),
            format_number(m.birta),
        ])
    return bio.getvalue()

def csv_filename(today: date) -> str:
    return f"mix-data-{today.isoformat()}.csv"
