from __future__ import annotations

from datetime import datetime
from typing import Any
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from mixlog.models.enums import ColorType, MixType

# Keys of the persisted measurements document that differ from field names
_DOCUMENT_KEYS = {"color_type": "colorType", "color_quantity": "colorQuantity"}

class ProductIn(BaseModel):
    type: str | None = ""
    quantity: Any = None

class MixInput(BaseModel):
    """Raw entry/edit form payload.

    Numbers are taken as sent (strings included) so that
    :func:`mixlog.services.validation.validate` reports type and rule
    violations together. A null ``color_type`` means no colour.
    """
    mix_type: str = MixType.Interlock.value
    cement: Any = None
    aggregate: Any = None
    sand: Any = None
    water: Any = None
    plastizer: Any = None
    birta: Any = None
    color_type: str | None = ""
    color_quantity: Any = None
    products: list[ProductIn] | None = None

class Product(BaseModel):
    type: str
    quantity: float = 0

class Measurements(BaseModel):
    cement: float = 0
    aggregate: float = 0
    sand: float = 0
    water: float = 0
    plastizer: float = 0
    birta: float | None = None
    color_type: ColorType = Field(default=ColorType.NoColor, validation_alias=AliasChoices("color_type", "colorType"))
    color_quantity: float = Field(default=0, validation_alias=AliasChoices("color_quantity", "colorQuantity"))
    products: list[Product] | None = None

    @field_validator("color_type", mode="before")
    @classmethod
    def _empty_color(cls, v):
        return v or ColorType.NoColor

    def to_document(self) -> dict:
        doc = self.model_dump(mode="json", exclude_none=True)
        return {_DOCUMENT_KEYS.get(k, k): v for k, v in doc.items()}

class MixFields(BaseModel):
    """Normalized record block handed to the store on create/update."""
    mix_type: MixType
    measurements: Measurements

class MixRecordOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    timestamp: datetime
    mix_type: MixType
    measurements: Measurements
    created_by: str
    last_modified: datetime

class MixPage(BaseModel):
    records: list[MixRecordOut]
    total_count: int
    total_pages: int
    page: int = 1
    page_size: int = 25

class SummaryResponse(BaseModel):
    by_mix_type: dict[str, dict[str, float]] = Field(default_factory=dict)
    by_color: dict[str, dict[str, dict[str, float]]] = Field(default_factory=dict)
    by_product_type: dict[str, dict[str, float]] = Field(default_factory=dict)
    mix_type_totals: dict[str, float] = Field(default_factory=dict)
    color_totals: dict[str, float] = Field(default_factory=dict)
    product_totals: dict[str, float] = Field(default_factory=dict)
    grand_total: float = 0
    records_count: int = 0

class Vocabulary(BaseModel):
    mix_types: list[str]
    colors: list[str]
    products: dict[str, list[str]]
