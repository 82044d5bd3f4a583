"""Unit conversion and quantity pricing."""

from .calculator import price_for_quantity
from .units import (
    LIQUID_PRESETS,
    PIECE_PRESETS,
    SOLID_PRESETS,
    PresetQuantity,
    convert,
    convertible_units,
    preset_quantities,
    unit_label,
)

__all__ = [
    "convert",
    "convertible_units",
    "unit_label",
    "preset_quantities",
    "PresetQuantity",
    "LIQUID_PRESETS",
    "SOLID_PRESETS",
    "PIECE_PRESETS",
    "price_for_quantity",
]
