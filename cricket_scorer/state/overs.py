"""
Over notation.

Cricket writes overs as "N.B": N completed overs of six legal balls plus
B legal balls (0-5) into the current over. It looks like a decimal but
is a mixed-radix count, so 4.5 followed by one more ball is 5.0, not 4.6.

Every ``overs`` value in the engine is projected from a raw legal-ball
count with :func:`encode`; notations are never added or subtracted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from cricket_scorer.config import BALLS_PER_OVER


@dataclass(frozen=True, order=True)
class OverNotation:
    """An "overs.balls" value. Display-only: it supports no arithmetic."""

    completed: int = 0
    balls: int = 0

    def __post_init__(self) -> None:
        if self.completed < 0:
            raise ValueError(f"Completed overs cannot be negative: {self.completed}")
        if not 0 <= self.balls < BALLS_PER_OVER:
            raise ValueError(
                f"Balls into the over must be 0-{BALLS_PER_OVER - 1}, got {self.balls}"
            )

    @property
    def legal_balls(self) -> int:
        return self.completed * BALLS_PER_OVER + self.balls

    def as_float(self) -> float:
        """Legacy float rendering, e.g. 5.3. For display only."""
        return float(str(self))

    @classmethod
    def parse(cls, value: Union[str, int, float, "OverNotation"]) -> "OverNotation":
        """Parse "N.B", "N", or a legacy numeric value such as 12.4."""
        if isinstance(value, OverNotation):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Not an over notation: {value!r}")
        if isinstance(value, int):
            return cls(value, 0)
        if isinstance(value, float):
            # Stored floats carry binary noise (12.4 -> 12.399999...); the
            # single fractional digit is recovered by rounding, but a real
            # second digit (12.45) is rejected like the string form.
            if abs(value - round(value, 1)) > 1e-9:
                raise ValueError(f"Over notation has one ball digit: {value!r}")
            value = f"{value:.1f}"

        text = str(value).strip()
        whole, _, frac = text.partition(".")
        try:
            completed = int(whole)
            balls = int(frac) if frac else 0
        except ValueError:
            raise ValueError(f"Not an over notation: {value!r}") from None
        if len(frac) > 1:
            raise ValueError(f"Over notation has one ball digit: {value!r}")
        return cls(completed, balls)

    def __str__(self) -> str:
        return f"{self.completed}.{self.balls}"


def encode(legal_balls: int) -> OverNotation:
    """Project a raw legal-ball count onto over notation."""
    if legal_balls < 0:
        raise ValueError(f"Legal ball count cannot be negative: {legal_balls}")
    completed, balls = divmod(legal_balls, BALLS_PER_OVER)
    return OverNotation(completed, balls)


def decode(notation: Union[OverNotation, str, int, float]) -> int:
    """Inverse of :func:`encode`."""
    return OverNotation.parse(notation).legal_balls


class OverCounter:
    """Namespace facade over :func:`encode` / :func:`decode`."""

    encode = staticmethod(encode)
    decode = staticmethod(decode)
