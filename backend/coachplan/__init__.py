"""
Coaching training-slot scheduler.

Weekly recurring training slots, date-specific overrides, and the pure
resolver / conflict detector / timeline layout built on top of them.
"""

__version__ = "0.1.0"
