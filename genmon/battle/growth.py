"""Stat growth, the experience curve and level scaling.

Growth per level: max HP x1.04, every other stat x1.03, floored and clamped
to [1, STAT_CAP]. Current HP is left to the caller.
"""
from __future__ import annotations
import math
import random
from dataclasses import replace
from typing import Optional, Tuple

from .models import Creature, Stats, MIN_LEVEL, MAX_LEVEL, STAT_CAP

HP_GROWTH = 0.04
STAT_GROWTH = 0.03
EXP_PER_LEVEL = 80
WILD_LEVEL_OFFSET = 2


def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(int(level), MAX_LEVEL))

def _grow(value: int, rate: float) -> int:
    return min(STAT_CAP, max(1, math.floor(value * (1 + rate))))

def next_level_stats(stats: Stats) -> Stats:
    return Stats(
        max_hp=_grow(stats.max_hp, HP_GROWTH),
        current_hp=stats.current_hp,
        attack=_grow(stats.attack, STAT_GROWTH),
        defense=_grow(stats.defense, STAT_GROWTH),
        sp_attack=_grow(stats.sp_attack, STAT_GROWTH),
        sp_defense=_grow(stats.sp_defense, STAT_GROWTH),
        speed=_grow(stats.speed, STAT_GROWTH),
    )

def exp_required(level: int) -> int:
    """EXP needed to go from ``level`` to ``level + 1``."""
    return level * EXP_PER_LEVEL

def scale_to_level(creature: Creature, from_level: int, to_level: int) -> Creature:
    """Return a copy of ``creature`` grown from ``from_level`` to ``to_level``.

    Scaling down never shrinks stats; only the level field changes.
    """
    if to_level <= from_level:
        return replace(creature.copy(), level=to_level)
    stats = creature.stats.copy()
    for _ in range(from_level, to_level):
        stats = next_level_stats(stats)
    stats.current_hp = stats.max_hp
    return replace(creature.copy(), level=to_level, stats=stats)

def wild_level_range(lead_level: int) -> Tuple[int, int]:
    return (max(MIN_LEVEL, lead_level - WILD_LEVEL_OFFSET),
            min(MAX_LEVEL, lead_level + WILD_LEVEL_OFFSET))

def pick_wild_level(lead_level: int, rng: Optional[random.Random] = None) -> int:
    lo, hi = wild_level_range(lead_level)
    return (rng or random.Random()).randint(lo, hi)

__all__ = [
    "next_level_stats", "exp_required", "scale_to_level", "clamp_level",
    "wild_level_range", "pick_wild_level",
]
