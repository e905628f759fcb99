# Ensure project root is on sys.path for tests
import sys, pathlib
root = pathlib.Path(__file__).resolve().parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

import pytest

from genmon.battle.models import Creature, Move, Stats


def make_mon(name="Testmon", element="normal", level=5, hp=100, atk=50, df=50, spa=None, spd=None,
             speed=30, moves=None, current_hp=None, **kw) -> Creature:
    stats = Stats(max_hp=hp, current_hp=hp if current_hp is None else current_hp, attack=atk, defense=df,
                  sp_attack=atk if spa is None else spa, sp_defense=df if spd is None else spd, speed=speed)
    moves = moves or [Move(name="Tackle", element="normal", power=40)]
    return Creature(id=kw.pop("id", name.lower()), name=name, element=element, stats=stats,
                    moves=moves, level=level, **kw)


@pytest.fixture
def mon():
    return make_mon


class FixedRng:
    """Stub RNG: fixed variance/roll, always picks move 0."""
    def __init__(self, roll=0.5, variance=1.0):
        self.roll = roll
        self.variance = variance
    def random(self): return self.roll
    def uniform(self, a, b): return self.variance
    def randrange(self, n): return 0
    def randint(self, a, b): return a


@pytest.fixture
def fixed_rng():
    return FixedRng
