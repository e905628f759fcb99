from __future__ import annotations
from rich.table import Table
from rich.text import Text

from genmon.core.types import format_element
from .evolution import can_evolve, next_evolution_level
from .growth import exp_required
from .models import Creature

def draw_hp_bar(current: int, max_hp: int, width: int = 20) -> Text:
    if max_hp <= 0:
        return Text("█" * width)

    ratio = max(0, current) / max_hp
    filled = int(ratio * width)
    empty = width - filled

    # Color based on HP percentage
    if ratio > 0.5:
        color = "green"
    elif ratio > 0.2:
        color = "yellow"
    else:
        color = "red"

    bar = Text("█" * filled, style=color)
    bar.append("░" * empty, style="grey50")
    return bar

def creature_line(creature: Creature) -> Text:
    s = creature.stats
    line = Text.from_markup(f"Lv.{creature.level} {creature.name} {format_element(creature.element)} ")
    line.append_text(draw_hp_bar(s.current_hp, s.max_hp))
    line.append(f" {s.current_hp}/{s.max_hp}")
    return line

def roster_table(roster: list[Creature], level_ups: dict[int, int] | None = None, title: str = "Roster") -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Elem")
    table.add_column("Lv", justify="right")
    table.add_column("EXP", justify="right")
    table.add_column("HP")
    table.add_column("Evolution")
    level_ups = level_ups or {}
    for i, mon in enumerate(roster):
        s = mon.stats
        lv = str(mon.level)
        if level_ups.get(i):
            lv += f" (+{level_ups[i]})"
        if mon.evolution is None:
            evo = "-"
        elif can_evolve(mon):
            evo = f"[bold green]ready -> {mon.evolution.next_stage}[/]"
        else:
            evo = f"at Lv.{next_evolution_level(mon)}"
        hp = draw_hp_bar(s.current_hp, s.max_hp, width=10)
        hp.append(f" {s.current_hp}/{s.max_hp}")
        table.add_row(str(i), mon.name, format_element(mon.element), lv,
                      f"{mon.exp}/{exp_required(mon.level)}", hp, evo)
    return table
