"""Enemy move selection.

Strategies return the index of the move to use. The encounter only relies on
the :class:`MoveStrategy` protocol, so smarter opponents can be swapped in.
"""
from __future__ import annotations
import random
from typing import Protocol

from .chart import effectiveness
from .models import Creature


class MoveStrategy(Protocol):
    def choose(self, user: Creature, foe: Creature, rng: random.Random) -> int: ...


class RandomMoveStrategy:
    """Uniform pick among the user's moves."""
    def choose(self, user: Creature, foe: Creature, rng: random.Random) -> int:
        return rng.randrange(len(user.moves))


class StrongestMoveStrategy:
    """Highest power x effectiveness; first move wins ties."""
    def choose(self, user: Creature, foe: Creature, rng: random.Random) -> int:
        best = 0
        best_score = -1.0
        for i, m in enumerate(user.moves):
            score = max(0, m.power) * effectiveness(m.element, foe.element)
            if score > best_score:
                best_score = score
                best = i
        return best


STRATEGIES = {
    "random": RandomMoveStrategy,
    "strongest": StrongestMoveStrategy,
}

def strategy_by_name(name: str) -> MoveStrategy:
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise ValueError(f"Unknown enemy strategy '{name}'") from None

__all__ = ["MoveStrategy", "RandomMoveStrategy", "StrongestMoveStrategy", "STRATEGIES", "strategy_by_name"]
