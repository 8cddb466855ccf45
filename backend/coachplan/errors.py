# backend/coachplan/errors.py
from __future__ import annotations


class SlotNotFoundError(Exception):
    """Raised when a requested training slot doesn't exist."""


class OverrideNotFoundError(Exception):
    """Raised when a requested slot override doesn't exist."""


class PersistenceError(Exception):
    """A write failed and was rolled back; stored state is unchanged."""


class EditorValidationError(ValueError):
    """
    Input rejected before anything is written.

    `errors` is a list of {"field": ..., "message": ...} so a form can show
    every problem inline at once.
    """

    def __init__(self, errors: list[dict]):
        self.errors = errors
        super().__init__("; ".join(f"{e['field']}: {e['message']}" for e in errors))


class SlotValidationError(EditorValidationError):
    pass


class OverrideValidationError(EditorValidationError):
    pass
