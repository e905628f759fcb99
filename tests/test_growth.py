import random
from conftest import make_mon
from genmon.battle.growth import (
    next_level_stats, exp_required, scale_to_level, wild_level_range, pick_wild_level, clamp_level,
)
from genmon.battle.models import Stats


def test_next_level_stats_rates():
    s = Stats(max_hp=100, current_hp=40, attack=50, defense=50, sp_attack=50, sp_defense=50, speed=30)
    n = next_level_stats(s)
    assert n.max_hp == 104
    assert n.attack == 51
    assert n.sp_defense == 51
    assert n.speed == 30
    # current HP is untouched
    assert n.current_hp == 40
    assert s.max_hp == 100


def test_next_level_stats_bounds():
    top = Stats(max_hp=999, current_hp=999, attack=999, defense=999, sp_attack=999, sp_defense=999, speed=999)
    assert next_level_stats(top) == top
    low = Stats(max_hp=1, current_hp=1, attack=0, defense=1, sp_attack=1, sp_defense=1, speed=1)
    n = next_level_stats(low)
    assert n.attack == 1
    assert n.max_hp == 1


def test_exp_required():
    assert exp_required(1) == 80
    assert exp_required(10) == 800
    assert exp_required(99) == 7920


def test_scale_up_tops_hp():
    mon = make_mon(level=5, hp=100, current_hp=10)
    scaled = scale_to_level(mon, 5, 7)
    assert scaled.level == 7
    assert scaled.stats.max_hp == 108
    assert scaled.stats.attack == 52
    assert scaled.stats.current_hp == 108
    assert mon.level == 5 and mon.stats.max_hp == 100


def test_scale_down_only_changes_level():
    mon = make_mon(level=10, hp=100, current_hp=10)
    scaled = scale_to_level(mon, 10, 3)
    assert scaled.level == 3
    assert scaled.stats == mon.stats


def test_wild_level_range():
    assert wild_level_range(1) == (1, 3)
    assert wild_level_range(50) == (48, 52)
    assert wild_level_range(100) == (98, 100)
    rng = random.Random(11)
    seen = {pick_wild_level(10, rng) for _ in range(200)}
    assert seen == {8, 9, 10, 11, 12}


def test_clamp_level():
    assert clamp_level(0) == 1
    assert clamp_level(250) == 100
    assert clamp_level(42) == 42
