# backend/coachplan/models/__init__.py
# IMPORTANT: Use Base from coachplan.db since all models import from it
from coachplan.db import Base

# import all model modules so tables get registered on Base.metadata
from .group import Group
from .user import User, COACH_ROLE
from .training_slot import TrainingSlot, TrainingSlotAssignment
from .training_slot_override import TrainingSlotOverride


__all__ = [
    "Base",
    "Group",
    "User",
    "COACH_ROLE",
    "TrainingSlot",
    "TrainingSlotAssignment",
    "TrainingSlotOverride",
]
