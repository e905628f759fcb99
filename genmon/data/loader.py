"""Creature record ingestion.

Turns the creature generator's JSON records (camelCase, possibly from older
saves without special stats) into normalized :class:`Creature` objects, and
back again for the save collaborator.
"""
from __future__ import annotations
import json
import uuid
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from genmon.core.errors import DataLoadError
from genmon.core.paths import CREATURE_SCHEMA
from genmon.battle.models import Creature, Evolution, Move, Stats, normalize_creature

# Top-level keys read into Creature fields; anything else rides along in Creature.extra
RECORD_KEYS = frozenset({
    "id", "name", "element", "stats", "moves", "level", "exp", "evolution",
    "evolutionCount", "evolution_count", "description", "imageUrl", "image_url",
    "visualPrompt", "visual_prompt", "modelUrl", "model_url",
})


@lru_cache(maxsize=None)
def _schema() -> Dict[str, Any]:
    return json.loads(CREATURE_SCHEMA.read_text(encoding="utf-8"))

def validate_record(raw: Dict[str, Any], source: str = "<record>"):
    try:
        jsonschema.validate(raw, _schema())
    except jsonschema.ValidationError as e:
        raise DataLoadError(source, f"schema: {e.message}") from e

def _pick(d: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for k in keys:
        if d.get(k) is not None:
            return d[k]
    return default

def stats_from_dict(raw: Dict[str, Any]) -> Stats:
    """Build a stat block; missing special stats fall back to the physical ones."""
    max_hp = int(_pick(raw, "maxHp", "max_hp"))
    attack = int(raw["attack"])
    defense = int(raw["defense"])
    return Stats(
        max_hp=max_hp,
        current_hp=int(_pick(raw, "currentHp", "current_hp", default=max_hp)),
        attack=attack,
        defense=defense,
        sp_attack=int(_pick(raw, "spAttack", "sp_attack", default=attack)),
        sp_defense=int(_pick(raw, "spDefense", "sp_defense", default=defense)),
        speed=int(raw["speed"]),
    )

def creature_from_dict(raw: Dict[str, Any], source: str = "<record>") -> Creature:
    validate_record(raw, source)
    evo_raw = raw.get("evolution")
    evolution: Optional[Evolution] = None
    if evo_raw and _pick(evo_raw, "nextStage", "next_stage"):
        evolution = Evolution(next_stage=_pick(evo_raw, "nextStage", "next_stage"),
                              condition=evo_raw.get("condition", ""))
    moves = [
        Move(name=m["name"], element=_pick(m, "type", "element"),
             power=int(m.get("power", 40)), accuracy=int(m.get("accuracy", 100)))
        for m in raw["moves"]
    ]
    creature = Creature(
        id=str(raw.get("id") or uuid.uuid4()),
        name=raw["name"],
        element=raw["element"],
        stats=stats_from_dict(raw["stats"]),
        moves=moves,
        level=int(raw.get("level", 1)),
        exp=int(raw.get("exp", 0)),
        evolution=evolution,
        evolution_count=int(_pick(raw, "evolutionCount", "evolution_count", default=0)),
        description=raw.get("description", ""),
        image_url=_pick(raw, "imageUrl", "image_url"),
        visual_prompt=_pick(raw, "visualPrompt", "visual_prompt"),
        model_url=_pick(raw, "modelUrl", "model_url"),
        extra={k: v for k, v in raw.items() if k not in RECORD_KEYS},
    )
    return normalize_creature(creature)

def creature_to_dict(creature: Creature) -> Dict[str, Any]:
    s = creature.stats
    out = dict(creature.extra)
    out.update({
        "id": creature.id,
        "name": creature.name,
        "element": creature.element,
        "level": creature.level,
        "exp": creature.exp,
        "evolutionCount": creature.evolution_count,
        "description": creature.description,
        "imageUrl": creature.image_url,
        "visualPrompt": creature.visual_prompt,
        "modelUrl": creature.model_url,
        "stats": {
            "maxHp": s.max_hp,
            "currentHp": s.current_hp,
            "attack": s.attack,
            "defense": s.defense,
            "spAttack": s.sp_attack,
            "spDefense": s.sp_defense,
            "speed": s.speed,
        },
        "moves": [
            {"name": m.name, "type": m.element, "power": m.power, "accuracy": m.accuracy}
            for m in creature.moves
        ],
        "evolution": (
            {"nextStage": creature.evolution.next_stage, "condition": creature.evolution.condition}
            if creature.evolution else None
        ),
    })
    return out

def load_creatures(path: Path) -> List[Creature]:
    """Read a JSON file holding one record, a list of records or ``{"roster": [...]}``."""
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise DataLoadError(str(path), str(e)) from e
    if isinstance(raw, dict) and "roster" in raw:
        raw = raw["roster"]
    if isinstance(raw, dict):
        raw = [raw]
    if not isinstance(raw, list):
        raise DataLoadError(str(path), "expected a creature record or a list of them")
    return [creature_from_dict(r, f"{path}[{i}]") for i, r in enumerate(raw)]

__all__ = ["creature_from_dict", "creature_to_dict", "stats_from_dict", "load_creatures", "validate_record"]
