# backend/coachplan/schemas/__init__.py

# Training slots
from .training_slot import (
    AssignmentIn,
    AssignmentOut,
    SlotIn,
    SlotOut,
)

# Slot overrides
from .override import (
    OverrideIn,
    OverrideOut,
    OverrideSaved,
)

# Calendar views
from .calendar import (
    ConflictOut,
    DayLayoutResponse,
    OccurrenceOut,
    OccurrencesResponse,
    PlacementOut,
    WeekResponse,
)

# Directory lookups
from .directory import CoachOut, GroupOut

__all__ = [
    "AssignmentIn", "AssignmentOut", "SlotIn", "SlotOut",
    "OverrideIn", "OverrideOut", "OverrideSaved",
    "ConflictOut", "DayLayoutResponse", "OccurrenceOut", "OccurrencesResponse", "PlacementOut", "WeekResponse",
    "CoachOut", "GroupOut",
]
