"""Per-encounter contribution tracking.

Each roster index accumulates damage dealt, damage taken and turns spent on
the field. Only the active roster slot is credited for an event.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List

@dataclass
class ContributionRecord:
    roster_index: int
    damage_dealt: int = 0
    damage_taken: int = 0
    turns_active: int = 0

    @property
    def activity(self) -> int:
        return self.damage_dealt + self.damage_taken + self.turns_active


class ContributionLedger:
    def __init__(self, roster_indices: Iterable[int] = ()):
        self._records: Dict[int, ContributionRecord] = {}
        for idx in roster_indices:
            self._records[idx] = ContributionRecord(idx)

    def get(self, roster_index: int) -> ContributionRecord:
        rec = self._records.get(roster_index)
        if rec is None:
            rec = self._records[roster_index] = ContributionRecord(roster_index)
        return rec

    @staticmethod
    def _check(amount: int) -> int:
        if amount < 0:
            raise ValueError(f"Contribution amounts cannot be negative (got {amount})")
        return int(amount)

    def record_attack(self, roster_index: int, damage_dealt: int):
        self.get(roster_index).damage_dealt += self._check(damage_dealt)

    def record_defense(self, roster_index: int, damage_taken: int):
        self.get(roster_index).damage_taken += self._check(damage_taken)

    def record_turn(self, roster_index: int):
        self.get(roster_index).turns_active += 1

    def snapshot(self) -> List[ContributionRecord]:
        """Copies of every record with some activity, in roster order."""
        return [
            ContributionRecord(r.roster_index, r.damage_dealt, r.damage_taken, r.turns_active)
            for idx, r in sorted(self._records.items())
            if r.activity > 0
        ]

__all__ = ["ContributionLedger", "ContributionRecord"]
