"""Battle service: handle-based entry point for the rest of the game.

Callers start an encounter, get back an :class:`EncounterHandle`, and submit
actions against it until a terminal event carries the result payload.
Tunables (heal amount, capture factor, enemy strategy) come from
:class:`genmon.system.settings.Settings` unless rules are passed explicitly.
"""
from __future__ import annotations
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence, Union
import random

from genmon.core.errors import GenmonError, StaleHandleError
from genmon.core.logging import logger
from genmon.system.settings import Settings
from .ai import MoveStrategy, strategy_by_name
from .models import Creature
from .session import Action, BattleRules, Encounter, EncounterEvent, EncounterResult, Inventory

@dataclass(frozen=True)
class EncounterHandle:
    id: str
    opening: EncounterEvent

HandleLike = Union[EncounterHandle, str]


# Finished results kept for close(); oldest are evicted first
MAX_FINISHED_RESULTS = 64


class BattleService:
    def __init__(self, settings: Optional[Settings] = None, max_results: int = MAX_FINISHED_RESULTS):
        self._settings = settings
        self._encounters: Dict[str, Encounter] = {}
        self._results: "OrderedDict[str, EncounterResult]" = OrderedDict()
        self.max_results = max_results

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = Settings.load()
        return self._settings

    def start_encounter(self, roster: Sequence[Creature], enemy: Creature, *,
                        eligible: Optional[Sequence[int]] = None,
                        lead_index: Optional[int] = None,
                        inventory: Optional[Inventory] = None,
                        rng: Optional[random.Random] = None,
                        strategy: Optional[MoveStrategy] = None,
                        rules: Optional[BattleRules] = None,
                        consume_cb: Optional[Callable[[str], None]] = None) -> EncounterHandle:
        if rules is None:
            rules = self.settings.rules()
        if strategy is None:
            strategy = strategy_by_name(self.settings.data.enemy_strategy)
        enc = Encounter(roster, enemy, eligible=eligible, lead_index=lead_index, inventory=inventory,
                        rng=rng, strategy=strategy, rules=rules, consume_cb=consume_cb)
        self._encounters[enc.id] = enc
        logger.debug("EncounterStart", encounter=enc.id, enemy=enc.enemy.name, level=enc.enemy.level,
                     lead=enc.lead.name, enemy_first=enc.enemy_first)
        if enc.is_over():
            self._retire(enc)
        return EncounterHandle(enc.id, enc.opening)

    def get(self, handle: HandleLike) -> Encounter:
        key = handle.id if isinstance(handle, EncounterHandle) else handle
        enc = self._encounters.get(key)
        if enc is None:
            if key in self._results:
                raise StaleHandleError(key)
            raise StaleHandleError(key, "unknown or closed encounter")
        return enc

    def submit_action(self, handle: HandleLike, action: Action) -> EncounterEvent:
        enc = self.get(handle)
        try:
            event = enc.submit(action)
        except GenmonError as e:
            logger.warn("ActionRejected", encounter=enc.id, action=type(action).__name__, reason=str(e))
            raise
        if event.notice:
            logger.debug("ActionNoOp", encounter=enc.id, notice=event.notice)
        if enc.is_over():
            self._retire(enc)
        return event

    def close(self, handle: HandleLike) -> Optional[EncounterResult]:
        """Forget an encounter; returns its result (None if it never finished)."""
        key = handle.id if isinstance(handle, EncounterHandle) else handle
        if key in self._results:
            return self._results.pop(key)
        enc = self.get(key)
        del self._encounters[enc.id]
        return enc.result

    def _retire(self, enc: Encounter):
        """Drop a finished encounter, keeping only its result for close()."""
        res = enc.result
        self._encounters.pop(enc.id, None)
        if res is None:
            return
        logger.info("EncounterEnd", encounter=enc.id, outcome=res.outcome.value, captured=res.captured,
                    exp=res.experience_award, level_ups=sum(res.level_ups.values()))
        self._results[enc.id] = res
        while len(self._results) > self.max_results:
            dropped, _ = self._results.popitem(last=False)
            logger.debug("EncounterResultEvicted", encounter=dropped)

battle_service = BattleService()
