from __future__ import annotations

from mixlog.models.enums import MixType
from mixlog.schemas.mix import ProductIn
from mixlog.services.form_state import MixDraft, available_product_types, switch_mix_type
from mixlog.services.validation import validate

def test_default_draft():
    d = MixDraft()
    assert d.mix_type == MixType.Interlock
    assert d.color_type == ""
    assert d.products == []
    assert d.birta is None

def test_switch_to_other_type_resets_block():
    d = MixDraft(cement=300, color_type="Red", products=[ProductIn(type="Garden", quantity=5)])
    switched = switch_mix_type(d, MixType.BoardsTiir)
    assert switched == MixDraft.for_mix_type(MixType.BoardsTiir)
    assert switched.products == []
    assert switched.color_type == ""
    assert switched.cement == 0

def test_switch_to_same_type_keeps_draft():
    d = MixDraft(color_type="Red", products=[ProductIn(type="Garden", quantity=5)])
    assert switch_mix_type(d, "interlock") is d

def test_available_product_types_hides_selected():
    d = MixDraft(products=[ProductIn(type="Garden", quantity=1), ProductIn(type="", quantity=0)])
    available = available_product_types(d)
    assert "Garden" not in available
    assert len(available) == 5

def test_fresh_draft_needs_products_and_birta():
    errors = validate(MixDraft.for_mix_type(MixType.BoardsTiir).to_input()).errors
    assert set(errors) == {"birta", "products"}
