"""
Innings State - the aggregate the scoring engine transforms.

Holds the score, the extras breakdown, who is on strike and bowling,
the per-player ledgers and the ordered delivery log. Over notation is
never stored: ``overs`` is projected from the raw legal-ball counters
every time it is read.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from cricket_scorer.config import BALLS_PER_OVER
from cricket_scorer.data.ball_event import BallRecord
from cricket_scorer.state.overs import OverNotation, decode, encode

logger = logging.getLogger(__name__)

STRIKER = "striker"
NON_STRIKER = "non_striker"
BOWLER = "bowler"


@dataclass
class BatsmanLedger:
    """Batting figures for one player in this innings."""
    player_id: str
    name: str
    runs: int = 0
    balls: int = 0
    fours: int = 0
    sixes: int = 0
    is_striker: bool = False
    out_by: Optional[str] = None

    @property
    def is_out(self) -> bool:
        return self.out_by is not None

    @property
    def strike_rate(self) -> float:
        return (self.runs / self.balls * 100) if self.balls > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "playerId": self.player_id,
            "name": self.name,
            "runs": self.runs,
            "balls": self.balls,
            "fours": self.fours,
            "sixes": self.sixes,
            "isStriker": self.is_striker,
        }
        if self.out_by is not None:
            d["outBy"] = self.out_by
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BatsmanLedger":
        return cls(
            player_id=str(data["playerId"]),
            name=data.get("name", ""),
            runs=int(data.get("runs", 0)),
            balls=int(data.get("balls", 0)),
            fours=int(data.get("fours", 0)),
            sixes=int(data.get("sixes", 0)),
            is_striker=bool(data.get("isStriker", False)),
            out_by=data.get("outBy"),
        )


@dataclass
class BowlerLedger:
    """Bowling figures for one player in this innings.

    ``balls_bowled`` is the authoritative counter; ``overs`` is derived.
    """
    player_id: str
    name: str
    balls_bowled: int = 0
    runs_conceded: int = 0
    wickets: int = 0
    maidens: int = 0

    @property
    def overs(self) -> OverNotation:
        return encode(self.balls_bowled)

    @property
    def economy(self) -> float:
        overs = self.balls_bowled / BALLS_PER_OVER
        return self.runs_conceded / overs if overs > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "playerId": self.player_id,
            "name": self.name,
            "overs": str(self.overs),
            "ballsBowled": self.balls_bowled,
            "runsConceded": self.runs_conceded,
            "wickets": self.wickets,
            "maidens": self.maidens,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BowlerLedger":
        if "ballsBowled" in data:
            balls = int(data["ballsBowled"])
        else:
            balls = decode(data.get("overs", 0))
        return cls(
            player_id=str(data["playerId"]),
            name=data.get("name", ""),
            balls_bowled=balls,
            runs_conceded=int(data.get("runsConceded", 0)),
            wickets=int(data.get("wickets", 0)),
            maidens=int(data.get("maidens", 0)),
        )


@dataclass
class Extras:
    wides: int = 0
    no_balls: int = 0
    byes: int = 0
    leg_byes: int = 0

    @property
    def total(self) -> int:
        return self.wides + self.no_balls + self.byes + self.leg_byes

    def to_dict(self) -> dict[str, int]:
        return {
            "wides": self.wides,
            "noBalls": self.no_balls,
            "byes": self.byes,
            "legByes": self.leg_byes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Extras":
        return cls(
            wides=int(data.get("wides", 0)),
            no_balls=int(data.get("noBalls", 0)),
            byes=int(data.get("byes", 0)),
            leg_byes=int(data.get("legByes", 0)),
        )


@dataclass
class InningsState:
    """State for a single innings.

    ``None`` in ``striker_id`` / ``non_striker_id`` / ``current_bowler_id``
    means the operator must nominate a player before the next delivery.
    """

    batting_team_id: str = ""
    bowling_team_id: str = ""
    total_runs: int = 0
    wickets: int = 0
    legal_balls: int = 0
    balls_in_current_over: int = 0  # 0-5; six is a transition, not a state
    extras: Extras = field(default_factory=Extras)

    striker_id: Optional[str] = None
    non_striker_id: Optional[str] = None
    current_bowler_id: Optional[str] = None

    batsmen: dict[str, BatsmanLedger] = field(default_factory=dict)
    bowlers: dict[str, BowlerLedger] = field(default_factory=dict)
    recent_balls: list[BallRecord] = field(default_factory=list)

    @property
    def overs(self) -> OverNotation:
        return encode(self.legal_balls)

    @property
    def run_rate(self) -> float:
        overs = self.legal_balls / BALLS_PER_OVER
        return self.total_runs / overs if overs > 0 else 0.0

    @property
    def awaiting(self) -> list[str]:
        """Roles that must be nominated before the next delivery."""
        missing = []
        if self.striker_id is None:
            missing.append(STRIKER)
        if self.non_striker_id is None:
            missing.append(NON_STRIKER)
        if self.current_bowler_id is None:
            missing.append(BOWLER)
        return missing

    @property
    def striker(self) -> Optional[BatsmanLedger]:
        return self.batsmen.get(self.striker_id) if self.striker_id else None

    @property
    def non_striker(self) -> Optional[BatsmanLedger]:
        return self.batsmen.get(self.non_striker_id) if self.non_striker_id else None

    @property
    def current_bowler(self) -> Optional[BowlerLedger]:
        return self.bowlers.get(self.current_bowler_id) if self.current_bowler_id else None

    @property
    def this_over(self) -> list[BallRecord]:
        """Deliveries of the over in progress, or of the over just finished."""
        if not self.recent_balls:
            return []
        current = self.recent_balls[-1].over
        return [b for b in self.recent_balls if b.over == current]

    def legal_balls_logged(self, bowler_id: Optional[str] = None) -> int:
        """Legal deliveries in the log, optionally for one bowler."""
        return sum(
            1
            for b in self.recent_balls
            if b.is_legal and (bowler_id is None or b.bowler_id == bowler_id)
        )

    def swap_strike(self) -> None:
        self.striker_id, self.non_striker_id = self.non_striker_id, self.striker_id

    def refresh_striker_flags(self) -> None:
        """Flag exactly the ledger of ``striker_id``."""
        for pid, ledger in self.batsmen.items():
            ledger.is_striker = pid == self.striker_id

    def to_dict(self) -> dict[str, Any]:
        """Serialise in the document-store shape the overlays read."""
        return {
            "battingTeamId": self.batting_team_id,
            "bowlingTeamId": self.bowling_team_id,
            "totalRuns": self.total_runs,
            "wickets": self.wickets,
            "overs": str(self.overs),
            "legalBalls": self.legal_balls,
            "ballsInCurrentOver": self.balls_in_current_over,
            "currentRunRate": round(self.run_rate, 2),
            "extras": self.extras.to_dict(),
            "strikerId": self.striker_id,
            "nonStrikerId": self.non_striker_id,
            "currentBowlerId": self.current_bowler_id,
            "batsmen": {pid: b.to_dict() for pid, b in self.batsmen.items()},
            "bowlers": {pid: b.to_dict() for pid, b in self.bowlers.items()},
            "recentBalls": [b.to_dict() for b in self.recent_balls],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InningsState":
        """Load a serialised innings.

        Older documents carry only the ``overs`` notation; the raw count
        is decoded from it.
        """
        if "legalBalls" in data:
            legal_balls = int(data["legalBalls"])
        else:
            legal_balls = decode(data.get("overs", 0))
            logger.debug("Decoded legacy overs %r to %d legal balls", data.get("overs"), legal_balls)

        def _opt_id(key: str) -> Optional[str]:
            value = data.get(key)
            return str(value) if value not in (None, "") else None

        return cls(
            batting_team_id=str(data.get("battingTeamId", "")),
            bowling_team_id=str(data.get("bowlingTeamId", "")),
            total_runs=int(data.get("totalRuns", 0)),
            wickets=int(data.get("wickets", 0)),
            legal_balls=legal_balls,
            balls_in_current_over=int(
                data.get("ballsInCurrentOver", legal_balls % BALLS_PER_OVER)
            ),
            extras=Extras.from_dict(data.get("extras") or {}),
            striker_id=_opt_id("strikerId"),
            non_striker_id=_opt_id("nonStrikerId"),
            current_bowler_id=_opt_id("currentBowlerId"),
            batsmen={
                str(pid): BatsmanLedger.from_dict(b)
                for pid, b in (data.get("batsmen") or {}).items()
            },
            bowlers={
                str(pid): BowlerLedger.from_dict(b)
                for pid, b in (data.get("bowlers") or {}).items()
            },
            recent_balls=[BallRecord.from_dict(b) for b in data.get("recentBalls") or []],
        )
