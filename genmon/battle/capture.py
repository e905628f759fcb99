"""Capture mechanics.

The catch chance falls linearly with the target's remaining HP::

    chance = 1 - (current_hp / max_hp) * hp_factor

A roll succeeds only when strictly below the chance.
"""
from __future__ import annotations
from dataclasses import dataclass
import random

DEFAULT_HP_FACTOR = 0.8

@dataclass(frozen=True)
class CaptureResult:
    success: bool
    chance: float
    roll: float


def capture_chance(current_hp: int, max_hp: int, hp_factor: float = DEFAULT_HP_FACTOR) -> float:
    if max_hp <= 0:
        return 1.0
    ratio = max(0, min(current_hp, max_hp)) / max_hp
    return 1 - ratio * hp_factor


def attempt_capture(rng: random.Random, current_hp: int, max_hp: int,
                    hp_factor: float = DEFAULT_HP_FACTOR) -> CaptureResult:
    chance = capture_chance(current_hp, max_hp, hp_factor)
    roll = rng.random()
    return CaptureResult(roll < chance, chance, roll)

__all__ = ["attempt_capture", "capture_chance", "CaptureResult", "DEFAULT_HP_FACTOR"]
