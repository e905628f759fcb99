"""Evolution gating.

A creature with an evolution target may evolve once every 10 levels:
the n-th evolution unlocks at level n * 10. The evolved form itself comes
from the external creature generator; this module only gates eligibility
and merges the new form with the creature's progress.
"""
from __future__ import annotations
from dataclasses import replace

from genmon.core.errors import ValidationError
from .models import Creature, normalize_creature

EVOLUTION_LEVEL_INTERVAL = 10


def next_evolution_level(creature: Creature) -> int:
    return (creature.evolution_count + 1) * EVOLUTION_LEVEL_INTERVAL


def can_evolve(creature: Creature) -> bool:
    if creature.evolution is None:
        return False
    return creature.level >= next_evolution_level(creature)


def apply_evolution(base: Creature, evolved_form: Creature) -> Creature:
    """Merge a generated ``evolved_form`` with ``base``'s progress.

    Keeps the base id and level, bumps the evolution count, resets EXP and
    restores HP to the new maximum.
    """
    if not can_evolve(base):
        raise ValidationError(
            f"{base.name} cannot evolve yet (needs level {next_evolution_level(base)}"
            f"{'' if base.evolution else ' and an evolution target'})"
        )
    mon = normalize_creature(evolved_form)
    stats = mon.stats.copy()
    stats.current_hp = stats.max_hp
    return replace(
        mon,
        id=base.id,
        level=base.level,
        exp=0,
        evolution_count=base.evolution_count + 1,
        stats=stats,
    )

__all__ = ["can_evolve", "next_evolution_level", "apply_evolution", "EVOLUTION_LEVEL_INTERVAL"]
