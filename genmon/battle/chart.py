"""Element effectiveness chart.

Sparse and asymmetric: only listed pairs differ from neutral (1.0).
"""
from __future__ import annotations
from typing import Dict

_TYPE_CHART: Dict[str, Dict[str, float]] = {
    "fire":    {"grass": 2.0, "water": 0.5, "rock": 0.5, "bug": 2.0},
    "water":   {"fire": 2.0, "electric": 0.5, "grass": 0.5, "rock": 2.0},
    "grass":   {"water": 2.0, "fire": 0.5, "electric": 0.5, "rock": 2.0},
    "electric":{"water": 2.0, "grass": 0.5, "rock": 0.5},
    "rock":    {"fire": 2.0, "electric": 2.0, "grass": 0.5, "fighting": 0.5},
    "psychic": {"fighting": 2.0, "dark": 0.0},
    "dark":    {"psychic": 2.0, "fighting": 0.5},
    "fighting":{"normal": 2.0, "rock": 2.0, "dark": 2.0, "psychic": 0.5},
    "normal":  {"rock": 0.5},
    "bug":     {"grass": 2.0, "psychic": 2.0, "fighting": 0.5, "fire": 0.5},
}

IMMUNE = "immune"
RESISTED = "resisted"
NEUTRAL = "neutral"
SUPER = "super"


def effectiveness(attack_element: str, defend_element: str) -> float:
    return _TYPE_CHART.get(attack_element, {}).get(defend_element, 1.0)

def effectiveness_tier(multiplier: float) -> str:
    if multiplier == 0:
        return IMMUNE
    if multiplier < 1:
        return RESISTED
    if multiplier > 1:
        return SUPER
    return NEUTRAL

def effectiveness_message(multiplier: float, target_name: str = "the target") -> str:
    tier = effectiveness_tier(multiplier)
    if tier == SUPER:
        return "It's super effective!"
    if tier == RESISTED:
        return "It's not very effective..."
    if tier == IMMUNE:
        return f"It doesn't affect {target_name}..."
    return ""

__all__ = [
    "effectiveness", "effectiveness_tier", "effectiveness_message",
    "IMMUNE", "RESISTED", "NEUTRAL", "SUPER",
]
