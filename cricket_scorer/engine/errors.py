"""
Scoring errors.

Every error here is an operator-input error local to a single call: it
is raised before the caller's state is touched, so the previous state
remains valid. None of them is worth retrying automatically.
"""

from __future__ import annotations


class ScoringError(Exception):
    """Base class for everything the scoring engine rejects."""


class MissingNomination(ScoringError):
    """Striker, non-striker or bowler has not been selected."""

    def __init__(self, roles: list[str]):
        self.roles = list(roles)
        super().__init__(f"Nomination required before the next delivery: {', '.join(self.roles)}")


class EmptyLog(ScoringError):
    """Undo requested with no deliveries recorded."""

    def __init__(self, message: str = "Nothing to undo: no deliveries recorded"):
        super().__init__(message)


class InvalidOutcome(ScoringError):
    """Contradictory or out-of-range delivery outcome."""


class InvalidNomination(ScoringError):
    """Player cannot take the requested role."""


class InningsComplete(ScoringError):
    """The innings has finished; no further deliveries are accepted."""


class StaleStateError(ScoringError):
    """A mutation was computed against an out-of-date state version."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"State version conflict: expected {expected}, current is {actual}"
        )


class InningsExists(ScoringError):
    """An innings is already stored under the requested key."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"An innings is already stored under {key!r}; resume it instead")
