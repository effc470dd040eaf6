from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from mixlog.models.enums import ColorType
from mixlog.schemas.mix import MixRecordOut, Product

def _products(record: MixRecordOut) -> list[Product]:
    measurements = getattr(record, "measurements", None)
    return list(getattr(measurements, "products", None) or [])

def _color(record: MixRecordOut) -> str:
    color = getattr(getattr(record, "measurements", None), "color_type", None) or ColorType.NoColor
    return ColorType(color).value

def _key(value) -> str:
    return getattr(value, "value", value)

def aggregate_by_mix_type(records: Iterable[MixRecordOut]) -> dict[str, dict[str, float]]:
    out: dict[str, dict[str, float]] = {}
    for r in records:
        for p in _products(r):
            bucket = out.setdefault(_key(r.mix_type), {})
            bucket[p.type] = bucket.get(p.type, 0) + p.quantity
    return out

def aggregate_by_color(records: Iterable[MixRecordOut]) -> dict[str, dict[str, dict[str, float]]]:
    out: dict[str, dict[str, dict[str, float]]] = {}
    for r in records:
        for p in _products(r):
            bucket = out.setdefault(_color(r), {}).setdefault(_key(r.mix_type), {})
            bucket[p.type] = bucket.get(p.type, 0) + p.quantity
    return out

def aggregate_by_product_type(records: Iterable[MixRecordOut]) -> dict[str, dict[str, float]]:
    out: dict[str, dict[str, float]] = {}
    for r in records:
        color = _color(r)
        for p in _products(r):
            bucket = out.setdefault(p.type, {})
            bucket[color] = bucket.get(color, 0) + p.quantity
    return out

def grand_total(grouped: Mapping | float) -> float:
    """Sum of every leaf quantity in a (nested) grouping."""
    if isinstance(grouped, Mapping):
        return sum((grand_total(v) for v in grouped.values()), 0)
    return grouped

def group_totals(grouped: Mapping) -> dict[str, float]:
    return {k: grand_total(v) for k, v in grouped.items()}

@dataclass
class ProductSummary:
    by_mix_type: dict[str, dict[str, float]] = field(default_factory=dict)
    by_color: dict[str, dict[str, dict[str, float]]] = field(default_factory=dict)
    by_product_type: dict[str, dict[str, float]] = field(default_factory=dict)
    records_count: int = 0

    @property
    def mix_type_totals(self) -> dict[str, float]:
        return group_totals(self.by_mix_type)

    @property
    def color_totals(self) -> dict[str, float]:
        return group_totals(self.by_color)

    @property
    def product_totals(self) -> dict[str, float]:
        return group_totals(self.by_product_type)

    @property
    def grand_total(self) -> float:
        return grand_total(self.by_mix_type)

def summarize(records: Iterable[MixRecordOut]) -> ProductSummary:
    records = list(records)
    return ProductSummary(
        by_mix_type=aggregate_by_mix_type(records),
        by_color=aggregate_by_color(records),
        by_product_type=aggregate_by_product_type(records),
        records_count=len(records),
    )
