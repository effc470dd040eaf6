from mixlog.models.enums import MixType, ColorType, InterlockProduct, BoardsTiirProduct, PALETTE, vocabulary_for

from mixlog.models.mix import MixRecord
