"""
Battle engine package.
Modules:
- models.py (Creature, Stats, Move, Evolution, ingestion normalization)
- chart.py (element effectiveness)
- growth.py (stat growth, EXP curve, level scaling)
- core.py (damage resolution, HP bookkeeping)
- capture.py (catch chance)
- ledger.py (per-encounter contribution tracking)
- ai.py (enemy move strategies)
- session.py (encounter state machine)
- experience.py / evolution.py (progression)
- service.py (handle-based entry point)
- render.py (rich HP bars and roster tables)
"""
from .service import battle_service, BattleService, EncounterHandle
__all__ = ["battle_service", "BattleService", "EncounterHandle"]
