"""Experience awards, contribution-weighted sharing & level-up handling.

- Award per win: floor(enemy_level * 12), x1.5 when the enemy was captured.
- Every creature that acted shares the award by weight:
      damage_dealt + turns_active * 5 + damage_taken * 0.5
  The last contributor absorbs rounding so shares always sum to the award.
- Level curve: level * 80 EXP to reach the next level (see growth.exp_required).
"""
from __future__ import annotations
from dataclasses import replace
from fractions import Fraction
import math
from typing import List, Sequence, Tuple

from .growth import exp_required, next_level_stats
from .ledger import ContributionRecord
from .models import Creature, MAX_LEVEL

EXP_PER_ENEMY_LEVEL = 12
CAPTURE_BONUS = Fraction(3, 2)
WEIGHT_TURNS = 5
WEIGHT_DAMAGE_TAKEN = Fraction(1, 2)


def compute_experience_award(enemy_level: int, was_captured: bool) -> int:
    base = enemy_level * EXP_PER_ENEMY_LEVEL
    return math.floor(base * CAPTURE_BONUS) if was_captured else base


def contribution_weight(record: ContributionRecord) -> Fraction:
    w = record.damage_dealt + record.turns_active * WEIGHT_TURNS + record.damage_taken * WEIGHT_DAMAGE_TAKEN
    return max(Fraction(0), Fraction(w))


def distribute(total_exp: int, contributions: Sequence[ContributionRecord]) -> List[Tuple[int, int]]:
    """Split ``total_exp`` across ``contributions``; returns (roster_index, exp) pairs."""
    if not contributions:
        return []
    weights = [contribution_weight(c) for c in contributions]
    weight_sum = sum(weights)
    shares: List[Tuple[int, int]] = []
    remaining = total_exp
    last = len(contributions) - 1
    for i, c in enumerate(contributions):
        if i == last:
            shares.append((c.roster_index, remaining))
            break
        if weight_sum <= 0:
            exp = total_exp // len(contributions)
        else:
            exp = math.floor(total_exp * weights[i] / weight_sum)
        shares.append((c.roster_index, exp))
        remaining -= exp
    return shares


def apply_experience(creature: Creature, gained: int) -> Tuple[Creature, int]:
    """Add EXP to a copy of ``creature`` and process every level-up it earns.

    HP is not topped up on level-up; it is only kept within the new max.
    """
    mon = creature.copy()
    mon.exp = mon.exp + gained
    level_ups = 0
    while mon.level < MAX_LEVEL:
        need = exp_required(mon.level)
        if mon.exp < need:
            break
        stats = next_level_stats(mon.stats)
        stats.current_hp = min(stats.current_hp, stats.max_hp)
        mon = replace(mon, level=mon.level + 1, exp=mon.exp - need, stats=stats)
        level_ups += 1
    if mon.exp < 0:
        mon.exp = 0
    return mon, level_ups

__all__ = [
    "compute_experience_award", "contribution_weight", "distribute", "apply_experience",
    "EXP_PER_ENEMY_LEVEL", "WEIGHT_TURNS", "WEIGHT_DAMAGE_TAKEN",
]
