from __future__ import annotations
from enum import Enum

class MixType(str, Enum):
    Interlock = "interlock"
    BoardsTiir = "boards/tiir"

class ColorType(str, Enum):
    NoColor = "No Color"
    Red = "Red"
    PureRed = "Pure Red"
    White = "White"
    Black = "Black"
    Yellow = "Yellow"

# Selectable colours; NoColor is only ever produced by normalization
PALETTE: tuple[ColorType, ...] = tuple(c for c in ColorType if c is not ColorType.NoColor)

class InterlockProduct(str, Enum):
    BlockInterlock = "Block Interlock"
    BuuorInterlock = "Buuor Interlock"
    DaimondInterlock = "Daimond Interlock"
    TiibaTalyaaniInterlock = "Tiiba Talyaani Interlock"
    YorkShirInterlock = "York Shir Interlock"
    Garden = "Garden"

class BoardsTiirProduct(str, Enum):
    Tiir = "Tiir"
    Boards = "Boards"

PRODUCT_VOCABULARY: dict[MixType, type[Enum]] = {
    MixType.Interlock: InterlockProduct,
    MixType.BoardsTiir: BoardsTiirProduct,
}

def vocabulary_for(mix_type: MixType) -> tuple[str, ...]:
    """Product type values permitted for ``mix_type``."""
    return tuple(p.value for p in PRODUCT_VOCABULARY[MixType(mix_type)])
