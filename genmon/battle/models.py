"""Creature, stat block and move records used by every battle module.

Records are plain dataclasses. Mutating helpers elsewhere return copies built
with :func:`dataclasses.replace` so a caller's roster is never changed behind
its back.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from genmon.core.errors import ValidationError
from genmon.core.types import normalize_element

MIN_LEVEL = 1
MAX_LEVEL = 100
STAT_CAP = 999

# Moves of these elements use sp_attack / sp_defense
SPECIAL_ELEMENTS = frozenset({"fire", "water", "grass", "electric", "psychic", "dark"})

@dataclass
class Stats:
    max_hp: int
    current_hp: int
    attack: int
    defense: int
    sp_attack: int
    sp_defense: int
    speed: int

    def copy(self) -> "Stats":
        return replace(self)

@dataclass(frozen=True)
class Move:
    name: str
    element: str
    power: int = 40
    accuracy: int = 100  # reserved; every attack currently hits

    @property
    def category(self) -> str:
        return "special" if self.element in SPECIAL_ELEMENTS else "physical"

@dataclass(frozen=True)
class Evolution:
    next_stage: str
    condition: str = ""

@dataclass
class Creature:
    id: str
    name: str
    element: str
    stats: Stats
    moves: List[Move]
    level: int = 1
    exp: int = 0
    evolution: Optional[Evolution] = None
    evolution_count: int = 0
    description: str = ""
    image_url: Optional[str] = None
    visual_prompt: Optional[str] = None
    model_url: Optional[str] = None
    # generator keys the engine does not interpret, kept for the save round-trip
    extra: Dict[str, Any] = field(default_factory=dict)

    def is_fainted(self) -> bool:
        return self.stats.current_hp <= 0

    def copy(self) -> "Creature":
        return replace(self, stats=self.stats.copy(), moves=list(self.moves), extra=dict(self.extra))


def _cap(value: int) -> int:
    return max(1, min(int(value), STAT_CAP))

def normalize_creature(creature: Creature) -> Creature:
    """Return a copy with every documented invariant enforced.

    Run once when a creature enters the engine: canonical element names,
    level in [MIN_LEVEL, MAX_LEVEL], non-negative exp and evolution count,
    stats in [1, STAT_CAP] and 0 <= current_hp <= max_hp.
    """
    if not creature.moves:
        raise ValidationError(f"Creature '{creature.name}' has no moves")
    s = creature.stats
    max_hp = _cap(s.max_hp)
    stats = Stats(
        max_hp=max_hp,
        current_hp=max(0, min(int(s.current_hp), max_hp)),
        attack=_cap(s.attack),
        defense=_cap(s.defense),
        sp_attack=_cap(s.sp_attack),
        sp_defense=_cap(s.sp_defense),
        speed=_cap(s.speed),
    )
    moves = [replace(m, element=normalize_element(m.element)) for m in creature.moves]
    return replace(
        creature,
        element=normalize_element(creature.element),
        level=max(MIN_LEVEL, min(int(creature.level), MAX_LEVEL)),
        exp=max(0, int(creature.exp)),
        evolution_count=max(0, int(creature.evolution_count)),
        stats=stats,
        moves=moves,
        extra=dict(creature.extra),
    )

__all__ = [
    "Stats", "Move", "Evolution", "Creature", "normalize_creature",
    "MIN_LEVEL", "MAX_LEVEL", "STAT_CAP", "SPECIAL_ELEMENTS",
]
