from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional
from genmon.core.logging import logger

SETTINGS_FILENAME = ".genmon_settings.json"

@dataclass
class SettingsData:
    log_level: str = "INFO"        # DEBUG / INFO / WARN / ERROR
    debug: bool = False            # Verbose battle/debug logging
    heal_amount: int = 50          # HP restored by one potion
    capture_hp_factor: float = 0.8 # catch chance = 1 - hp_ratio * factor
    enemy_strategy: str = "random" # random / strongest

    def normalize(self):
        if self.log_level not in {"DEBUG","INFO","WARN","ERROR"}:
            self.log_level = "INFO"
        try:
            self.heal_amount = max(0, int(self.heal_amount))
        except (TypeError, ValueError):
            self.heal_amount = 50
        try:
            self.capture_hp_factor = min(1.0, max(0.0, float(self.capture_hp_factor)))
        except (TypeError, ValueError):
            self.capture_hp_factor = 0.8
        if self.enemy_strategy not in {"random","strongest"}:
            self.enemy_strategy = "random"
        self.debug = bool(self.debug)

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = Path(path) if path is not None else cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Unknown keys are ignored so older/newer files still load
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))

    def update(self, **changes):
        for name, value in changes.items():
            if not hasattr(self.data, name):
                raise AttributeError(f"Unknown setting '{name}'")
            setattr(self.data, name, value)
        self.data.normalize()
        self.apply_log_level()

    def apply_log_level(self):
        logger.set_level(self.data.log_level)  # type: ignore[arg-type]
        if self.data.debug:
            logger.set_level("DEBUG")

    def rules(self):
        """Battle tunables as consumed by :class:`genmon.battle.session.Encounter`."""
        from genmon.battle.session import BattleRules
        return BattleRules(heal_amount=self.data.heal_amount, capture_hp_factor=self.data.capture_hp_factor)
