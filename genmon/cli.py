"""Encounter simulator for balancing and debugging.

Loads a roster and an enemy from JSON creature records, auto-plays the
encounter and prints the battle log plus the resulting roster. The
auto-player drinks a potion when its lead is at 25% HP or less, throws a
capture device at an enemy at 25% HP or less, and otherwise uses its
strongest move.

    genmon-sim roster.json enemy.json --seed 7 --potions 2 --devices 1
"""
from __future__ import annotations
import argparse
import random
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from genmon.battle.ai import StrongestMoveStrategy, STRATEGIES
from genmon.battle.render import creature_line, roster_table
from genmon.battle.service import BattleService
from genmon.battle.session import Action, Attack, Capture, Encounter, Heal, Inventory
from genmon.core.errors import GenmonError
from genmon.core.logging import logger
from genmon.data.loader import load_creatures
from genmon.system.settings import Settings

MAX_TURNS = 500
LOW_HP_RATIO = 0.25


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="genmon-sim", description="Auto-play one encounter.")
    p.add_argument("roster", help="JSON file with the player's creature records")
    p.add_argument("enemy", help="JSON file with the enemy creature record")
    p.add_argument("--seed", type=int, default=None, help="RNG seed for a reproducible run")
    p.add_argument("--lead", type=int, default=None, help="roster index of the lead")
    p.add_argument("--potions", type=int, default=0, help="potions used when the lead is low on HP")
    p.add_argument("--devices", type=int, default=0, help="capture devices thrown at a weakened enemy")
    p.add_argument("--strategy", choices=sorted(STRATEGIES), default=None,
                   help="enemy move strategy (overrides settings for this run)")
    p.add_argument("--debug", action="store_true", help="debug logging for this run")
    return p


def _low(current: int, max_hp: int) -> bool:
    return current <= max_hp * LOW_HP_RATIO

def auto_action(enc: Encounter) -> Action:
    lead, foe = enc.lead, enc.enemy
    if enc.inventory.potions > 0 and _low(lead.stats.current_hp, lead.stats.max_hp):
        return Heal()
    if enc.inventory.capture_devices > 0 and _low(foe.stats.current_hp, foe.stats.max_hp):
        return Capture()
    return Attack(StrongestMoveStrategy().choose(lead, foe, enc.core.rng))


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    console = Console()
    settings = Settings.load()
    settings.apply_log_level()
    overrides = {}
    if args.strategy:
        overrides["enemy_strategy"] = args.strategy
    if args.debug:
        overrides["debug"] = True
    if overrides:
        # run-only overrides; the settings file is not rewritten
        settings.update(**overrides)
    try:
        roster = load_creatures(args.roster)
        enemy = load_creatures(args.enemy)[0]
    except GenmonError as e:
        console.print(f"[red]{escape(str(e))}[/]")
        return 2

    service = BattleService(settings)
    try:
        handle = service.start_encounter(
            roster, enemy, lead_index=args.lead, rng=random.Random(args.seed),
            inventory=Inventory(potions=args.potions, capture_devices=args.devices),
        )
    except GenmonError as e:
        console.print(f"[red]{escape(str(e))}[/]")
        return 2

    event = handle.opening
    for line in event.messages:
        console.print(line)
    turns = 0
    while not event.state.terminal and turns < MAX_TURNS:
        enc = service.get(handle)
        event = service.submit_action(handle, auto_action(enc))
        for line in event.messages:
            console.print(line)
        console.print(creature_line(enc.lead))
        console.print(creature_line(enc.enemy))
        turns += 1

    result = service.close(handle)
    if result is None:
        logger.warn("SimulationStalled", turns=turns)
        console.print(Panel(f"No result after {turns} turns", style="yellow"))
        return 1
    summary = f"Outcome: [bold]{result.outcome.value}[/]"
    if result.captured:
        summary += " (captured)"
    if result.experience_award is not None:
        summary += f"   EXP award: {result.experience_award}"
    console.print(Panel(summary))
    console.print(roster_table(result.roster, result.level_ups))
    return 0


def main():
    raise SystemExit(run())

if __name__ == "__main__":
    main()
