"""Global element metadata: canonical names, aliases, colors & abbreviations.

Provides:
  ELEMENTS: the fixed element set, in display order
  ELEMENT_ALIASES: labels used by the creature generator -> canonical name
  ELEMENT_COLORS_HEX: mapping element -> hex color string (#RRGGBB)
  ELEMENT_ABBREVIATIONS: mapping element -> 3-letter abbreviation (upper)
  helpers for normalizing element names and rich markup output.
"""
from __future__ import annotations
from typing import Dict, Tuple

from genmon.core.errors import ValidationError

ELEMENTS: Tuple[str, ...] = (
    "fire", "water", "grass", "electric", "rock",
    "psychic", "normal", "dark", "fighting", "bug",
)

# The generator emits Chinese in-game labels
ELEMENT_ALIASES: Dict[str, str] = {
    "火": "fire",
    "水": "water",
    "草": "grass",
    "电": "electric",
    "岩": "rock",
    "超能": "psychic",
    "普通": "normal",
    "暗": "dark",
    "格斗": "fighting",
    "虫": "bug",
}

ELEMENT_COLORS_HEX: Dict[str, str] = {
    "fire": "#EE8130",
    "water": "#6390F0",
    "grass": "#7AC74C",
    "electric": "#F7D02C",
    "rock": "#B6A136",
    "psychic": "#F95587",
    "normal": "#A8A77A",
    "dark": "#705746",
    "fighting": "#C22E28",
    "bug": "#A6B91A",
}

ELEMENT_ABBREVIATIONS: Dict[str, str] = {
    "fire": "FIR",
    "water": "WTR",
    "grass": "GRS",
    "electric": "ELE",
    "rock": "RCK",
    "psychic": "PSY",
    "normal": "NRM",
    "dark": "DRK",
    "fighting": "FGT",
    "bug": "BUG",
}

ABBREVIATION_ELEMENTS: Dict[str, str] = {abbr: e for e, abbr in ELEMENT_ABBREVIATIONS.items()}


def normalize_element(value: str) -> str:
    """Return the canonical element name for ``value``.

    Accepts canonical names in any case, generator labels and abbreviations.
    """
    raw = str(value).strip()
    if raw in ELEMENT_ALIASES:
        return ELEMENT_ALIASES[raw]
    low = raw.lower()
    if low in ELEMENTS:
        return low
    up = raw.upper()
    if up in ABBREVIATION_ELEMENTS:
        return ABBREVIATION_ELEMENTS[up]
    raise ValidationError(f"Unknown element '{value}'")

def element_abbreviation(element: str) -> str:
    return ELEMENT_ABBREVIATIONS.get(element.lower(), element[:3].upper())

def format_element(element: str) -> str:
    """Rich markup for an element tag, e.g. ``[#EE8130]FIR[/]``."""
    hex_val = ELEMENT_COLORS_HEX.get(element.lower())
    abbr = element_abbreviation(element)
    if not hex_val:
        return abbr
    return f"[{hex_val}]{abbr}[/]"

__all__ = [
    'ELEMENTS','ELEMENT_ALIASES','ELEMENT_COLORS_HEX','ELEMENT_ABBREVIATIONS','ABBREVIATION_ELEMENTS',
    'normalize_element','element_abbreviation','format_element'
]
