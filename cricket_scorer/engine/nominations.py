"""
Innings start and player nomination.

The engine never picks players. After the toss, after a wicket and at
the end of every over the operator nominates whoever fills the empty
slot; these functions record that choice and create the player's
ledger the first time they appear.
"""

from __future__ import annotations

import copy
import logging
from enum import Enum
from typing import Union

from cricket_scorer.engine.errors import InvalidNomination
from cricket_scorer.state.innings_state import (
    BatsmanLedger,
    BowlerLedger,
    InningsState,
)

logger = logging.getLogger(__name__)


class TossChoice(Enum):
    BAT = "BAT"
    BOWL = "BOWL"

    @classmethod
    def parse(cls, value: Union["TossChoice", str]) -> "TossChoice":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise InvalidNomination(f"Toss choice must be BAT or BOWL, got {value!r}") from None


def toss_result(
    team_a_id: str, team_b_id: str, toss_winner_id: str, choice: Union[TossChoice, str]
) -> tuple[str, str]:
    """(batting_team_id, bowling_team_id) decided by the toss."""
    if toss_winner_id not in (team_a_id, team_b_id):
        raise InvalidNomination(f"Toss winner {toss_winner_id!r} is not playing this match")
    loser_id = team_b_id if toss_winner_id == team_a_id else team_a_id
    if TossChoice.parse(choice) is TossChoice.BAT:
        return toss_winner_id, loser_id
    return loser_id, toss_winner_id


def new_innings(batting_team_id: str, bowling_team_id: str) -> InningsState:
    """Empty innings with the sides already decided."""
    if not batting_team_id or not bowling_team_id:
        raise InvalidNomination("Both batting and bowling team ids are required")
    if batting_team_id == bowling_team_id:
        raise InvalidNomination("A team cannot bat and bowl in the same innings")
    return InningsState(batting_team_id=batting_team_id, bowling_team_id=bowling_team_id)


def from_toss(
    team_a_id: str, team_b_id: str, toss_winner_id: str, choice: Union[TossChoice, str]
) -> InningsState:
    """Empty innings as created at the toss."""
    batting_team_id, bowling_team_id = toss_result(team_a_id, team_b_id, toss_winner_id, choice)
    logger.info("Toss won by %s: %s bat, %s bowl", toss_winner_id, batting_team_id, bowling_team_id)
    return new_innings(batting_team_id, bowling_team_id)


def _nominate_batsman(
    state: InningsState, player_id: str, name: str, on_strike: bool
) -> InningsState:
    if not player_id:
        raise InvalidNomination("Player id is required")
    partner = state.non_striker_id if on_strike else state.striker_id
    if player_id == partner:
        raise InvalidNomination(f"{player_id} is already batting at the other end")
    if player_id in state.bowlers:
        raise InvalidNomination(f"{player_id} has bowled in this innings and cannot bat in it")
    existing = state.batsmen.get(player_id)
    if existing is not None and existing.is_out:
        raise InvalidNomination(f"{player_id} is out ({existing.out_by})")

    new = copy.deepcopy(state)
    if player_id not in new.batsmen:
        new.batsmen[player_id] = BatsmanLedger(player_id=player_id, name=name or player_id)
        logger.info("New batsman: %s (%s)", name or player_id, player_id)
    if on_strike:
        new.striker_id = player_id
    else:
        new.non_striker_id = player_id
    new.refresh_striker_flags()
    return new


def nominate_striker(state: InningsState, player_id: str, name: str = "") -> InningsState:
    return _nominate_batsman(state, player_id, name, on_strike=True)


def nominate_non_striker(state: InningsState, player_id: str, name: str = "") -> InningsState:
    return _nominate_batsman(state, player_id, name, on_strike=False)


def nominate_bowler(state: InningsState, player_id: str, name: str = "") -> InningsState:
    if not player_id:
        raise InvalidNomination("Player id is required")
    if player_id in state.batsmen:
        raise InvalidNomination(f"{player_id} has batted in this innings and cannot bowl in it")
    new = copy.deepcopy(state)
    if player_id not in new.bowlers:
        new.bowlers[player_id] = BowlerLedger(player_id=player_id, name=name or player_id)
        logger.info("New bowler: %s (%s)", name or player_id, player_id)
    new.current_bowler_id = player_id
    return new
