"""
Centralized path helpers.
"""
from __future__ import annotations
from pathlib import Path

# This file lives at genmon/core/paths.py
PACKAGE = Path(__file__).resolve().parents[1]   # the 'genmon' package directory
DATA = PACKAGE / "data"
CREATURE_SCHEMA = DATA / "creature.schema.json"
