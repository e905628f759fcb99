"""Damage resolution and HP bookkeeping.

``resolve_attack`` is the single damage formula used by both sides::

    damage = floor((((2*L/5 + 2) * power * atk/def) / 50 + 2) * eff * variance)

Special moves read sp_attack / sp_defense, physical moves attack / defense.
Creatures are expected to be normalized at ingestion
(see :func:`genmon.battle.models.normalize_creature`), so no stat fallbacks happen here.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional
import math
import random

from .chart import effectiveness, effectiveness_tier
from .models import Creature, Move

VARIANCE_MIN = 0.8
VARIANCE_MAX = 1.2

@dataclass(frozen=True)
class AttackResult:
    damage: int
    effectiveness: float
    category: str  # physical | special
    variance: float

    @property
    def tier(self) -> str:
        return effectiveness_tier(self.effectiveness)


def resolve_attack(attacker: Creature, defender: Creature, move: Move,
                   rng: Optional[random.Random] = None, *, variance: Optional[float] = None) -> AttackResult:
    eff = effectiveness(move.element, defender.element)
    category = move.category
    if category == "special":
        atk, dfn = attacker.stats.sp_attack, defender.stats.sp_defense
    else:
        atk, dfn = attacker.stats.attack, defender.stats.defense
    if variance is None:
        variance = (rng or random.Random()).uniform(VARIANCE_MIN, VARIANCE_MAX)
    base = (((2 * attacker.level / 5) + 2) * move.power * (atk / max(1, dfn))) / 50 + 2
    damage = max(0, math.floor(base * eff * variance))
    return AttackResult(damage=damage, effectiveness=eff, category=category, variance=variance)


class BattleCore:
    def __init__(self, rng: Optional[random.Random] = None, message_cb: Optional[Callable[[str], None]] = None):
        self.rng = rng or random.Random()
        self.message_cb = message_cb

    def _msg(self, text: str):
        if self.message_cb: self.message_cb(text)

    def resolve_attack(self, attacker: Creature, defender: Creature, move: Move) -> AttackResult:
        return resolve_attack(attacker, defender, move, self.rng)

    def apply_damage(self, target: Creature, amount: int) -> int:
        """Subtract ``amount`` HP (floored at 0); returns the HP actually lost."""
        old = target.stats.current_hp
        target.stats.current_hp = max(0, old - int(amount))
        if target.stats.current_hp <= 0:
            self._msg(f"{target.name} fainted!")
        return old - target.stats.current_hp

    def apply_heal(self, target: Creature, amount: int) -> int:
        """Restore up to ``amount`` HP (capped at max); returns the HP actually restored."""
        old = target.stats.current_hp
        target.stats.current_hp = min(target.stats.max_hp, old + int(amount))
        return target.stats.current_hp - old

__all__ = ["BattleCore", "AttackResult", "resolve_attack", "VARIANCE_MIN", "VARIANCE_MAX"]
