"""Volume/weight unit conversion for dairy products."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..models import UNITS

# Base units are ml and gm; dairy liquids and solids are taken at 1 g/ml.
_UNIT_FACTORS: dict[str, int] = {
    "ml": 1,
    "gm": 1,
    "L": 1000,
    "kg": 1000,
}

_LIQUID_UNITS = ("ml", "L")
_SOLID_UNITS = ("gm", "kg")

# Display labels for summaries; an empty label means no suffix.
_UNIT_LABELS: dict[str, str] = {
    "piece": "pcs",
    "ml": "",
}


@dataclass(frozen=True)
class PresetQuantity:
    """A ready-made quantity choice such as "500 ml"."""

    label: str
    quantity: Decimal
    unit: str


def _presets(*entries: tuple[str, str, str]) -> tuple[PresetQuantity, ...]:
    return tuple(PresetQuantity(label, Decimal(qty), unit) for label, qty, unit in entries)


LIQUID_PRESETS = _presets(
    ("100 ml", "100", "ml"),
    ("200 ml", "200", "ml"),
    ("250 ml", "250", "ml"),
    ("500 ml", "500", "ml"),
    ("1 L", "1", "L"),
    ("1.5 L", "1.5", "L"),
    ("2 L", "2", "L"),
)

SOLID_PRESETS = _presets(
    ("100 gm", "100", "gm"),
    ("200 gm", "200", "gm"),
    ("250 gm", "250", "gm"),
    ("500 gm", "500", "gm"),
    ("1 kg", "1", "kg"),
    ("1.5 kg", "1.5", "kg"),
    ("2 kg", "2", "kg"),
)

PIECE_PRESETS = _presets(
    ("1 piece", "1", "piece"),
    ("2 pieces", "2", "piece"),
    ("5 pieces", "5", "piece"),
    ("10 pieces", "10", "piece"),
)


def convert(value, from_unit: str, to_unit: str):
    """Convert a quantity between units.

    Args:
        value: Amount in ``from_unit`` (int, float or Decimal).
        from_unit: One of ml, L, gm, kg, piece.
        to_unit: One of ml, L, gm, kg, piece.

    Returns:
        The amount expressed in ``to_unit``. Conversions involving "piece"
        (or an unknown unit) return ``value`` unchanged.
    """
    if from_unit == to_unit:
        return value

    # piece is a count, not a mass or volume
    if from_unit == "piece" or to_unit == "piece":
        return value

    from_factor = _UNIT_FACTORS.get(from_unit)
    to_factor = _UNIT_FACTORS.get(to_unit)
    if from_factor is None or to_factor is None:
        return value

    return value * from_factor / to_factor


def convertible_units(unit: str) -> tuple[str, ...]:
    """Return the units a quantity may be entered in for a product of ``unit``."""
    if unit == "piece":
        return ("piece",)
    return tuple(u for u in UNITS if u != "piece")


def unit_label(unit: str | None) -> str:
    """Return the summary label for a unit; ``None`` means the product is gone."""
    if unit is None:
        return "units"
    return _UNIT_LABELS.get(unit, unit)


def preset_quantities(unit: str) -> tuple[PresetQuantity, ...]:
    """Return the preset quantity choices matching a product's unit family."""
    if unit in _LIQUID_UNITS:
        return LIQUID_PRESETS
    if unit in _SOLID_UNITS:
        return SOLID_PRESETS
    if unit == "piece":
        return PIECE_PRESETS
    return ()
