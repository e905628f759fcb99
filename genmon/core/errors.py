"""
Error classes for clearer exception sources.
"""
from __future__ import annotations

class GenmonError(Exception):
    pass

class DataLoadError(GenmonError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to load {path}: {detail}")
        self.path = path
        self.detail = detail

class ValidationError(GenmonError):
    pass

class InvalidActionError(GenmonError):
    """Action rejected before it touched the encounter (bad move index, bad switch)."""

class ExhaustedResourceError(GenmonError):
    def __init__(self, item: str):
        super().__init__(f"No {item.replace('_', ' ')}s left")
        self.item = item

class StaleHandleError(GenmonError):
    def __init__(self, encounter_id: str, detail: str = "encounter already finished"):
        super().__init__(f"Encounter '{encounter_id}': {detail}")
        self.encounter_id = encounter_id
        self.detail = detail
