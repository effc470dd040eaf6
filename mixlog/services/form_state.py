from __future__ import annotations

from pydantic import BaseModel, Field

from mixlog.models.enums import MixType, vocabulary_for
from mixlog.schemas.mix import MixInput, ProductIn

class MixDraft(BaseModel):
    """Editable state of the mix entry/edit form."""
    mix_type: MixType = MixType.Interlock
    cement: float = 0
    aggregate: float = 0
    sand: float = 0
    water: float = 0
    plastizer: float = 0
    birta: float | None = None
    color_type: str = ""
    color_quantity: float = 0
    products: list[ProductIn] = Field(default_factory=list)

    @classmethod
    def for_mix_type(cls, mix_type: MixType) -> "MixDraft":
        return cls(mix_type=MixType(mix_type))

    def to_input(self) -> MixInput:
        return MixInput(**{**self.model_dump(exclude={"mix_type"}), "mix_type": self.mix_type.value})

def switch_mix_type(draft: MixDraft, mix_type: MixType) -> MixDraft:
    # product vocabularies are disjoint, so the whole block starts over
    mix_type = MixType(mix_type)
    if draft.mix_type == mix_type:
        return draft
    return MixDraft.for_mix_type(mix_type)

def available_product_types(draft: MixDraft) -> list[str]:
    used = {p.type for p in draft.products if p.type}
    return [t for t in vocabulary_for(draft.mix_type) if t not in used]

class SwitchMixTypeRequest(BaseModel):
    draft: MixDraft
    mix_type: MixType

class DraftResponse(BaseModel):
    draft: MixDraft
    available_products: list[str]

def draft_response(draft: MixDraft) -> DraftResponse:
    return DraftResponse(draft=draft, available_products=available_product_types(draft))
