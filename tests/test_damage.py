import math
import random
from conftest import make_mon
from genmon.battle.core import BattleCore, resolve_attack
from genmon.battle.models import Move

KARATE = Move(name="Karate Chop", element="fighting", power=40)
TACKLE = Move(name="Tackle", element="normal", power=40)


def test_neutral_formula_with_pinned_variance():
    attacker = make_mon(level=10, atk=60)
    defender = make_mon(df=50)
    res = resolve_attack(attacker, defender, TACKLE, variance=1.0)
    assert res.effectiveness == 1.0
    assert res.damage == math.floor(((2 * 10 / 5 + 2) * 40 * (60 / 50)) / 50 + 2)
    assert res.damage == 7


def test_super_effective_scenario():
    # (6 * 40 * 1.2 / 50 + 2) = 7.76, x2 = 15.52
    attacker = make_mon(level=10, atk=60, element="fighting")
    defender = make_mon(df=50, element="normal")
    res = resolve_attack(attacker, defender, KARATE, variance=1.0)
    assert res.effectiveness == 2.0
    assert res.tier == "super"
    assert res.category == "physical"
    assert res.damage == 15


def test_special_moves_use_special_stats():
    attacker = make_mon(level=10, atk=10, spa=80, element="fire")
    defender = make_mon(df=200, spd=40, element="grass")
    ember = Move(name="Ember", element="fire", power=40)
    res = resolve_attack(attacker, defender, ember, variance=1.0)
    assert res.category == "special"
    # 6 * 40 * 2 / 50 + 2 = 11.6, x2 = 23.2
    assert res.damage == 23


def test_immune_target_takes_nothing():
    attacker = make_mon(level=50, spa=300)
    defender = make_mon(element="dark")
    psybeam = Move(name="Psybeam", element="psychic", power=100)
    res = resolve_attack(attacker, defender, psybeam, variance=1.2)
    assert res.damage == 0
    assert res.tier == "immune"


def test_damage_never_negative_and_variance_in_range():
    rng = random.Random(5)
    attacker = make_mon(level=1, atk=1)
    defender = make_mon(df=999, element="rock")
    weak = Move(name="Poke", element="normal", power=1)
    for _ in range(200):
        res = resolve_attack(attacker, defender, weak, rng)
        assert isinstance(res.damage, int)
        assert res.damage >= 0
        assert 0.8 <= res.variance <= 1.2


def test_variance_changes_damage():
    rng = random.Random(12345)
    attacker = make_mon(level=30, atk=120)
    defender = make_mon(df=40)
    damages = {resolve_attack(attacker, defender, TACKLE, rng).damage for _ in range(100)}
    assert len(damages) > 1


def test_core_hp_helpers():
    log = []
    core = BattleCore(rng=random.Random(1), message_cb=log.append)
    mon = make_mon(name="Pebble", hp=50, current_hp=20)
    assert core.apply_heal(mon, 50) == 30
    assert mon.stats.current_hp == 50
    assert core.apply_damage(mon, 80) == 50
    assert mon.stats.current_hp == 0
    assert log == ["Pebble fainted!"]
