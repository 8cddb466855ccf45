"""Validation + persistence of slot and override mutations."""

from .override_editor import OverrideEditor, validate_override
from .slot_editor import SlotEditor, validate_slot

__all__ = ["OverrideEditor", "SlotEditor", "validate_override", "validate_slot"]
