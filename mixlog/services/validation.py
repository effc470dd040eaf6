from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mixlog.models.enums import PALETTE, ColorType, MixType, vocabulary_for
from mixlog.schemas.mix import Measurements, MixFields, MixInput, Product

MEASUREMENT_MAX = 9999.99
BIRTA_MAX = 9999
QUANTITY_MAX = 9999

BASE_FIELDS = ("cement", "aggregate", "sand", "water", "plastizer", "color_quantity")

_COLOR_VALUES = {c.value for c in PALETTE} | {ColorType.NoColor.value}

@dataclass
class ValidationResult:
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(self, path: str, message: str) -> None:
        self.errors.setdefault(path, []).append(message)

_NOT_A_NUMBER = object()

def as_number(value: Any):
    """Form value as float, None when blank, or ``_NOT_A_NUMBER``."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool):
        return _NOT_A_NUMBER
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return _NOT_A_NUMBER
    return _NOT_A_NUMBER

def _check_range(result: ValidationResult, path: str, raw: Any, upper: float) -> None:
    value = as_number(raw)
    if value is None:
        result.add(path, "Required")
    elif value is _NOT_A_NUMBER:
        result.add(path, "Must be a number")
    elif not 0 <= value:
        result.add(path, "Must be positive")
    elif not value <= upper:
        result.add(path, f"Must be at most {upper}")

def _parse_mix_type(raw: str) -> MixType | None:
    try:
        return MixType(raw)
    except ValueError:
        return None

def validate(candidate: MixInput) -> ValidationResult:
    """Check a mix form payload against the entry rules.

    Every rule runs; the result maps each offending field path to its messages
    so all of them can be highlighted at once. An empty ``color_type`` is valid
    and becomes ``No Color`` in :func:`normalize`.
    """
    result = ValidationResult()

    for name in BASE_FIELDS:
        _check_range(result, name, getattr(candidate, name), MEASUREMENT_MAX)

    mix_type = _parse_mix_type(candidate.mix_type)
    if mix_type is None:
        result.add("mix_type", "Invalid mix type")

    if mix_type == MixType.BoardsTiir:
        if as_number(candidate.birta) is None:
            result.add("birta", "Birta is required for boards/tiir mix type")
        else:
            _check_range(result, "birta", candidate.birta, BIRTA_MAX)

    color = candidate.color_type or ""
    if color != "" and color not in _COLOR_VALUES:
        result.add("color_type", "Invalid color type")

    products = candidate.products or []
    if not products:
        result.add("products", "At least one product is required")

    for i, product in enumerate(products):
        if not product.type:
            result.add(f"products.{i}.type", "Product type is required")
        _check_range(result, f"products.{i}.quantity", product.quantity, QUANTITY_MAX)

    if mix_type is not None:
        allowed = vocabulary_for(mix_type)
        if any(p.type and p.type not in allowed for p in products):
            result.add("products", "Invalid product type for selected mix type")

    types = [p.type for p in products if p.type]
    if len(types) != len(set(types)):
        result.add("products", "Cannot select the same product type twice")

    return result

def normalize(candidate: MixInput) -> MixFields:
    """Turn accepted form input into the block stored on create/update."""
    result = validate(candidate)
    if not result.ok:
        raise ValueError(f"Cannot normalize invalid mix input: {sorted(result.errors)}")

    mix_type = MixType(candidate.mix_type)
    return MixFields(
        mix_type=mix_type,
        measurements=Measurements(
            cement=as_number(candidate.cement),
            aggregate=as_number(candidate.aggregate),
            sand=as_number(candidate.sand),
            water=as_number(candidate.water),
            plastizer=as_number(candidate.plastizer),
            # interlock records never carry birta
            birta=as_number(candidate.birta) if mix_type == MixType.BoardsTiir else None,
            color_type=ColorType(candidate.color_type or ColorType.NoColor),
            color_quantity=as_number(candidate.color_quantity),
            products=[Product(type=p.type, quantity=as_number(p.quantity)) for p in candidate.products],
        ),
    )
