"""SQLAlchemy-backed stores for slots and overrides, plus the read-only directories."""

from .directory import CoachDirectory, GroupDirectory
from .override_store import OverrideStore
from .slot_store import SlotStore

__all__ = ["CoachDirectory", "GroupDirectory", "OverrideStore", "SlotStore"]
