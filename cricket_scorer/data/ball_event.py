"""
Ball-by-ball delivery data model.

``BallOutcome`` is what the operator submits for one delivery;
``BallRecord`` is what the engine appends to the innings log. The log
is the ground truth the undo path replays, so records are immutable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cricket_scorer.engine.errors import InvalidOutcome


def _flag(data: dict[str, Any], key: str) -> bool:
    """Read a delivery flag; only JSON booleans are accepted."""
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise InvalidOutcome(f"{key} must be true or false, got {value!r}")
    return value


class _DeliveryRules:
    """Run and legality arithmetic shared by outcomes and logged records."""

    runs_off_bat: int
    is_wide: bool
    is_no_ball: bool
    is_bye: bool
    is_leg_bye: bool
    is_wicket: bool

    @property
    def is_legal(self) -> bool:
        """Counts towards the six-ball over."""
        return not (self.is_wide or self.is_no_ball)

    @property
    def extras(self) -> int:
        """The one-run penalty for a wide or no-ball."""
        return 1 if (self.is_wide or self.is_no_ball) else 0

    @property
    def ball_runs(self) -> int:
        """Runs added to the team total."""
        return self.runs_off_bat + self.extras

    @property
    def bowler_runs(self) -> int:
        """Runs charged to the bowler. Byes and leg-byes never are."""
        if self.is_bye or self.is_leg_bye:
            return 0
        return self.runs_off_bat + self.extras

    @property
    def batsman_runs(self) -> int:
        """Runs credited to the striker's own tally."""
        if self.is_wide or self.is_bye or self.is_leg_bye:
            return 0
        return self.runs_off_bat

    @property
    def faces_ball(self) -> bool:
        """A wide is not a ball faced; a no-ball is."""
        return not self.is_wide

    @property
    def rotates_strike(self) -> bool:
        return self.runs_off_bat % 2 == 1

    def contradictions(self) -> list[str]:
        problems = []
        if isinstance(self.runs_off_bat, bool) or not isinstance(self.runs_off_bat, int):
            problems.append(f"runs must be an integer, got {self.runs_off_bat!r}")
        elif self.runs_off_bat < 0:
            problems.append(f"runs cannot be negative, got {self.runs_off_bat}")
        if self.is_wide and self.is_no_ball:
            problems.append("a delivery cannot be both a wide and a no-ball")
        if self.is_bye and self.is_leg_bye:
            problems.append("a delivery cannot be both a bye and a leg-bye")
        if self.is_wide and (self.is_bye or self.is_leg_bye):
            problems.append("byes and leg-byes cannot be scored off a wide")
        return problems

    def validate(self) -> None:
        problems = self.contradictions()
        if problems:
            raise InvalidOutcome("; ".join(problems))


@dataclass(frozen=True)
class BallOutcome(_DeliveryRules):
    """What happened on one delivery, as entered by the scorer."""

    runs_off_bat: int = 0
    is_wide: bool = False
    is_no_ball: bool = False
    is_bye: bool = False
    is_leg_bye: bool = False
    is_wicket: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BallOutcome":
        runs = data.get("runsOffBat", data.get("runs", 0))
        return cls(
            runs_off_bat=runs,
            is_wide=_flag(data, "isWide"),
            is_no_ball=_flag(data, "isNoBall"),
            is_bye=_flag(data, "isBye"),
            is_leg_bye=_flag(data, "isLegBye"),
            is_wicket=_flag(data, "isWicket"),
        )


@dataclass(frozen=True)
class BallRecord(_DeliveryRules):
    """A delivery as logged in the innings.

    ``ball`` is 1-6 for a legal delivery; a wide or no-ball carries the
    number of legal balls already bowled in the over (0-5).
    ``over`` is 0-indexed.
    """

    ball: int
    over: int
    bowler_id: str
    striker_id: str
    runs_off_bat: int = 0
    is_wide: bool = False
    is_no_ball: bool = False
    is_bye: bool = False
    is_leg_bye: bool = False
    is_wicket: bool = False

    @classmethod
    def from_outcome(
        cls,
        outcome: BallOutcome,
        ball: int,
        over: int,
        bowler_id: str,
        striker_id: str,
    ) -> "BallRecord":
        return cls(
            ball=ball,
            over=over,
            bowler_id=bowler_id,
            striker_id=striker_id,
            runs_off_bat=outcome.runs_off_bat,
            is_wide=outcome.is_wide,
            is_no_ball=outcome.is_no_ball,
            is_bye=outcome.is_bye,
            is_leg_bye=outcome.is_leg_bye,
            is_wicket=outcome.is_wicket,
        )

    @property
    def ended_over(self) -> bool:
        return self.is_legal and self.ball == 6

    @property
    def over_ball_str(self) -> str:
        """Human-readable over.ball string, e.g. '5.3'."""
        return f"{self.over}.{self.ball}"

    @property
    def label(self) -> str:
        """Short label for the overlay's this-over strip."""
        runs = self.runs_off_bat
        if self.is_wide:
            text = "wd" if runs == 0 else f"{runs}wd"
        elif self.is_no_ball:
            text = "nb" if runs == 0 else f"{runs}nb"
        elif self.is_bye and runs:
            text = f"{runs}b"
        elif self.is_leg_bye and runs:
            text = f"{runs}lb"
        else:
            text = str(runs)

        if self.is_wicket:
            return "W" if text == "0" else f"W+{text}"
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "ballNumber": self.ball,
            "overNumber": self.over,
            "bowlerId": self.bowler_id,
            "batsmanId": self.striker_id,
            "runs": self.runs_off_bat,
            "isWide": self.is_wide,
            "isNoBall": self.is_no_ball,
            "isBye": self.is_bye,
            "isLegBye": self.is_leg_bye,
            "isWicket": self.is_wicket,
            "extras": self.extras,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BallRecord":
        # "extras" is derived from the flags and is not read back.
        return cls(
            ball=int(data["ballNumber"]),
            over=int(data["overNumber"]),
            bowler_id=str(data["bowlerId"]),
            striker_id=str(data["batsmanId"]),
            runs_off_bat=int(data.get("runs", 0)),
            is_wide=_flag(data, "isWide"),
            is_no_ball=_flag(data, "isNoBall"),
            is_bye=_flag(data, "isBye"),
            is_leg_bye=_flag(data, "isLegBye"),
            is_wicket=_flag(data, "isWicket"),
        )
