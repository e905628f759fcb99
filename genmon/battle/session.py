"""Encounter orchestration for single-active-creature battles.

An :class:`Encounter` owns copies of the player's roster and the enemy for
its lifetime. Each submitted player action is resolved, followed by exactly
one automatic enemy attack unless the action ended the encounter or was a
free switch. On a win the contribution ledger is handed to the progression
engine and the updated roster is reported in the :class:`EncounterResult`.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union
import random
import uuid

from genmon.core.errors import ExhaustedResourceError, InvalidActionError, StaleHandleError, ValidationError
from .ai import MoveStrategy, RandomMoveStrategy
from .capture import DEFAULT_HP_FACTOR, attempt_capture
from .chart import effectiveness_message
from .core import AttackResult, BattleCore
from .experience import apply_experience, compute_experience_award, distribute
from .ledger import ContributionLedger
from .models import Creature, Move, normalize_creature

DEFAULT_HEAL_AMOUNT = 50

POTION = "potion"
CAPTURE_DEVICE = "capture_device"


class BattleState(str, Enum):
    AWAITING_PLAYER_ACTION = "AWAITING_PLAYER_ACTION"
    RESOLVING_ACTION = "RESOLVING_ACTION"
    AWAITING_ENEMY_ACTION = "AWAITING_ENEMY_ACTION"
    TERMINAL_WIN = "TERMINAL_WIN"
    TERMINAL_LOSE = "TERMINAL_LOSE"
    TERMINAL_FLED = "TERMINAL_FLED"

    @property
    def terminal(self) -> bool:
        return self in (BattleState.TERMINAL_WIN, BattleState.TERMINAL_LOSE, BattleState.TERMINAL_FLED)


class Outcome(str, Enum):
    WIN = "win"
    LOSE = "lose"
    FLED = "fled"

_TERMINAL_STATES = {
    Outcome.WIN: BattleState.TERMINAL_WIN,
    Outcome.LOSE: BattleState.TERMINAL_LOSE,
    Outcome.FLED: BattleState.TERMINAL_FLED,
}

# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Attack:
    move_index: int

@dataclass(frozen=True)
class Heal:
    pass

@dataclass(frozen=True)
class Capture:
    pass

@dataclass(frozen=True)
class Switch:
    roster_index: int

@dataclass(frozen=True)
class Flee:
    pass

Action = Union[Attack, Heal, Capture, Switch, Flee]

# ---------------------------------------------------------------------------
# Inputs & reports
# ---------------------------------------------------------------------------
@dataclass
class Inventory:
    potions: int = 0
    capture_devices: int = 0

    def count(self, item: str) -> int:
        return self.potions if item == POTION else self.capture_devices

    def take(self, item: str):
        if self.count(item) <= 0:
            raise ExhaustedResourceError(item)
        if item == POTION:
            self.potions -= 1
        else:
            self.capture_devices -= 1

@dataclass(frozen=True)
class BattleRules:
    heal_amount: int = DEFAULT_HEAL_AMOUNT
    capture_hp_factor: float = DEFAULT_HP_FACTOR

@dataclass(frozen=True)
class AttackRecord:
    side: str  # player | enemy
    roster_index: int  # player's active slot when the attack happened
    move: str
    result: AttackResult
    target_hp: int

@dataclass
class EncounterResult:
    outcome: Outcome
    captured: bool = False
    experience_award: Optional[int] = None
    shares: List[Tuple[int, int]] = field(default_factory=list)
    level_ups: Dict[int, int] = field(default_factory=dict)
    roster: List[Creature] = field(default_factory=list)
    captured_creature: Optional[Creature] = None

@dataclass
class EncounterEvent:
    encounter_id: str
    state: BattleState
    messages: List[str] = field(default_factory=list)
    attacks: List[AttackRecord] = field(default_factory=list)
    consumed: Optional[str] = None
    notice: Optional[str] = None
    switched_to: Optional[int] = None
    result: Optional[EncounterResult] = None


class Encounter:
    def __init__(self, roster: Sequence[Creature], enemy: Creature, *,
                 eligible: Optional[Sequence[int]] = None,
                 lead_index: Optional[int] = None,
                 inventory: Optional[Inventory] = None,
                 rng: Optional[random.Random] = None,
                 strategy: Optional[MoveStrategy] = None,
                 rules: Optional[BattleRules] = None,
                 consume_cb: Optional[Callable[[str], None]] = None,
                 encounter_id: Optional[str] = None):
        self.id = encounter_id or uuid.uuid4().hex
        self.roster: List[Creature] = [normalize_creature(c) for c in roster]
        self.enemy = normalize_creature(enemy)
        if eligible is None:
            eligible = range(len(self.roster))
        self.eligible: List[int] = sorted(set(eligible))
        for idx in self.eligible:
            if not 0 <= idx < len(self.roster):
                raise ValidationError(f"Eligible index {idx} is outside the roster")
        inv = inventory or Inventory()
        self.inventory = Inventory(inv.potions, inv.capture_devices)
        self.strategy = strategy or RandomMoveStrategy()
        self.rules = rules or BattleRules()
        self.consume_cb = consume_cb
        self.ledger = ContributionLedger(self.eligible)
        self.log: List[str] = []
        self.result: Optional[EncounterResult] = None
        self._pending: List[str] = []
        self._attacks: List[AttackRecord] = []
        self.core = BattleCore(rng, message_cb=self._pending.append)

        if lead_index is not None and lead_index in self.eligible and not self.roster[lead_index].is_fainted():
            self.lead_index = lead_index
        else:
            first = self._next_healthy()
            if first is None:
                raise ValidationError("No eligible creature is able to battle")
            self.lead_index = first

        self.state = BattleState.AWAITING_PLAYER_ACTION
        self._msg(f"A wild {self.enemy.name} appeared!")
        self._msg(f"Go! {self.lead.name}!")
        self.enemy_first = self.enemy.stats.speed > self.lead.stats.speed
        switched_to: Optional[int] = None
        if self.enemy_first:
            switched_to = self._enemy_turn()
            if not self.is_over():
                self.state = BattleState.AWAITING_PLAYER_ACTION
        self.opening = self._event(switched_to=switched_to)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def lead(self) -> Creature:
        return self.roster[self.lead_index]

    def is_over(self) -> bool:
        return self.state.terminal

    def available_switches(self) -> List[int]:
        return [i for i in self.eligible if i != self.lead_index and not self.roster[i].is_fainted()]

    def _next_healthy(self) -> Optional[int]:
        for i in self.eligible:
            if not self.roster[i].is_fainted():
                return i
        return None

    # ------------------------------------------------------------------
    # Event plumbing
    # ------------------------------------------------------------------
    def _msg(self, text: str):
        self._pending.append(text)

    def _event(self, **extra) -> EncounterEvent:
        messages = list(self._pending)
        self.log.extend(messages)
        self._pending.clear()
        attacks = list(self._attacks)
        self._attacks.clear()
        return EncounterEvent(self.id, self.state, messages, attacks, result=self.result, **extra)

    # ------------------------------------------------------------------
    # Player actions
    # ------------------------------------------------------------------
    def submit(self, action: Action) -> EncounterEvent:
        if self.is_over():
            raise StaleHandleError(self.id)
        consumed: Optional[str] = None
        switched_to: Optional[int] = None
        if isinstance(action, Attack):
            move = self._player_move(action.move_index)
            self.state = BattleState.RESOLVING_ACTION
            self._player_attack(move)
        elif isinstance(action, Heal):
            try:
                self._consume(POTION)
            except ExhaustedResourceError as e:
                self._msg(f"{e}!")
                return self._event(notice=str(e))
            consumed = POTION
            self.state = BattleState.RESOLVING_ACTION
            restored = self.core.apply_heal(self.lead, self.rules.heal_amount)
            self._msg(f"You used a potion. {self.lead.name} recovered {restored} HP!")
        elif isinstance(action, Capture):
            try:
                self._consume(CAPTURE_DEVICE)
            except ExhaustedResourceError as e:
                self._msg(f"{e}!")
                return self._event(notice=str(e))
            consumed = CAPTURE_DEVICE
            self.state = BattleState.RESOLVING_ACTION
            self._capture()
        elif isinstance(action, Switch):
            self._switch(action.roster_index)
            return self._event(switched_to=action.roster_index)
        elif isinstance(action, Flee):
            self._msg("Got away safely!")
            self._finish(Outcome.FLED)
        else:
            raise InvalidActionError(f"Unknown action {action!r}")

        if not self.is_over():
            switched_to = self._enemy_turn()
        if not self.is_over():
            self.state = BattleState.AWAITING_PLAYER_ACTION
        return self._event(consumed=consumed, switched_to=switched_to)

    def _player_move(self, move_index: int) -> Move:
        moves = self.lead.moves
        if not 0 <= move_index < len(moves):
            raise InvalidActionError(f"{self.lead.name} has no move #{move_index}")
        return moves[move_index]

    def _player_attack(self, move: Move):
        lead = self.lead
        res = self.core.resolve_attack(lead, self.enemy, move)
        self._announce(lead.name, move, res, self.enemy.name)
        self.core.apply_damage(self.enemy, res.damage)
        self.ledger.record_attack(self.lead_index, res.damage)
        self._attacks.append(AttackRecord("player", self.lead_index, move.name, res, self.enemy.stats.current_hp))
        if self.enemy.is_fainted():
            self._finish(Outcome.WIN)

    def _capture(self):
        self._msg("You threw a capture device!")
        res = attempt_capture(self.core.rng, self.enemy.stats.current_hp, self.enemy.stats.max_hp,
                              self.rules.capture_hp_factor)
        if res.success:
            self._msg(f"Gotcha! {self.enemy.name} was caught!")
            self._finish(Outcome.WIN, captured=True)
        else:
            self._msg(f"Oh no! {self.enemy.name} broke free!")

    def _switch(self, roster_index: int):
        if roster_index not in self.eligible:
            raise InvalidActionError(f"Roster slot {roster_index} is not in this battle")
        if roster_index == self.lead_index:
            raise InvalidActionError(f"{self.lead.name} is already battling")
        if self.roster[roster_index].is_fainted():
            raise InvalidActionError(f"{self.roster[roster_index].name} has no energy left to battle")
        self.lead_index = roster_index
        self._msg(f"Go! {self.lead.name}!")

    def _consume(self, item: str):
        self.inventory.take(item)
        if self.consume_cb:
            self.consume_cb(item)

    # ------------------------------------------------------------------
    # Enemy reaction
    # ------------------------------------------------------------------
    def _enemy_turn(self) -> Optional[int]:
        """Resolve the enemy's attack; returns the forced switch target, if any."""
        self.state = BattleState.AWAITING_ENEMY_ACTION
        lead = self.lead
        move = self.enemy.moves[self.strategy.choose(self.enemy, lead, self.core.rng)]
        res = self.core.resolve_attack(self.enemy, lead, move)
        self._announce(f"Wild {self.enemy.name}", move, res, lead.name)
        self.core.apply_damage(lead, res.damage)
        self.ledger.record_defense(self.lead_index, res.damage)
        self.ledger.record_turn(self.lead_index)
        self._attacks.append(AttackRecord("enemy", self.lead_index, move.name, res, lead.stats.current_hp))
        if not lead.is_fainted():
            return None
        nxt = self._next_healthy()
        if nxt is None:
            self._finish(Outcome.LOSE)
            return None
        self.lead_index = nxt
        self._msg(f"Go! {self.lead.name}!")
        return nxt

    def _announce(self, user: str, move: Move, res: AttackResult, target: str):
        eff_txt = effectiveness_message(res.effectiveness, target)
        self._msg(f"{user} used {move.name}!" + (f" {eff_txt}" if eff_txt else ""))

    # ------------------------------------------------------------------
    # Termination
    # ------------------------------------------------------------------
    def _finish(self, outcome: Outcome, captured: bool = False):
        self.state = _TERMINAL_STATES[outcome]
        result = EncounterResult(outcome=outcome, captured=captured)
        if outcome == Outcome.WIN:
            award = compute_experience_award(self.enemy.level, captured)
            contributions = self.ledger.snapshot()
            shares = distribute(award, contributions) if contributions else [(self.lead_index, award)]
            for idx, exp in shares:
                mon, ups = apply_experience(self.roster[idx], exp)
                self.roster[idx] = mon
                result.level_ups[idx] = ups
                self._msg(f"{mon.name} gained {exp} EXP!")
                if ups:
                    self._msg(f"{mon.name} grew to level {mon.level}!")
            result.experience_award = award
            result.shares = shares
            if captured:
                caught = self.enemy.copy()
                caught.stats.current_hp = caught.stats.max_hp
                result.captured_creature = caught
        elif outcome == Outcome.LOSE:
            self._msg("You have no creatures left that can battle!")
        result.roster = [c.copy() for c in self.roster]
        self.result = result

__all__ = [
    "Encounter", "EncounterEvent", "EncounterResult", "AttackRecord", "BattleState", "Outcome",
    "BattleRules", "Inventory", "Attack", "Heal", "Capture", "Switch", "Flee", "Action",
    "POTION", "CAPTURE_DEVICE", "DEFAULT_HEAL_AMOUNT",
]
