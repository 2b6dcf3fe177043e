"""
Scoring Engine - forward transition.

Applies one delivery to an innings and returns the new innings. The
input state is never mutated: the engine works on a deep copy, so a
rejected delivery leaves the caller's state exactly as it was.

Rule order matters; later steps read fields earlier steps changed:

1. bowler runs conceded
2. team total
3. extras breakdown
4. batsman credit and ball faced
5. legal-ball and over progression
6. wicket
7. delivery log
8. strike rotation on odd runs
9. over-end transition (bowler release and end change)
"""

from __future__ import annotations

import copy
import logging
from typing import Iterable, Optional

from cricket_scorer.config import BALLS_PER_OVER
from cricket_scorer.data.ball_event import BallOutcome, BallRecord
from cricket_scorer.engine.errors import MissingNomination
from cricket_scorer.state.innings_state import (
    BOWLER,
    NON_STRIKER,
    STRIKER,
    InningsState,
)

logger = logging.getLogger(__name__)


def maiden_bowler(over_records: Iterable[BallRecord]) -> Optional[str]:
    """Bowler credited with a maiden for a completed over, if any.

    A maiden is a full over from a single bowler conceding no bowler
    runs (byes and leg-byes do not spoil it).
    """
    records = list(over_records)
    bowlers = {r.bowler_id for r in records}
    if len(bowlers) != 1:
        return None
    if sum(1 for r in records if r.is_legal) != BALLS_PER_OVER:
        return None
    if any(r.bowler_runs for r in records):
        return None
    return bowlers.pop()


def check_nominations(state: InningsState) -> None:
    """Raise MissingNomination unless striker, non-striker and bowler are set."""
    missing = state.awaiting
    if state.striker_id is not None and state.striker_id not in state.batsmen:
        missing.append(STRIKER)
    if state.non_striker_id is not None and state.non_striker_id not in state.batsmen:
        missing.append(NON_STRIKER)
    if state.current_bowler_id is not None and state.current_bowler_id not in state.bowlers:
        missing.append(BOWLER)
    if missing:
        raise MissingNomination(missing)


def apply(state: InningsState, outcome: BallOutcome) -> InningsState:
    """Apply one delivery and return the resulting innings state."""
    outcome.validate()
    check_nominations(state)

    new = copy.deepcopy(state)
    striker = new.batsmen[new.striker_id]
    bowler = new.bowlers[new.current_bowler_id]

    ball_in_over = new.balls_in_current_over
    over_index = new.legal_balls // BALLS_PER_OVER

    # 1) Bowler runs conceded
    bowler.runs_conceded += outcome.bowler_runs

    # 2) Team total
    new.total_runs += outcome.ball_runs

    # 3) Extras
    if outcome.is_wide:
        new.extras.wides += 1 + outcome.runs_off_bat
    if outcome.is_no_ball:
        new.extras.no_balls += 1 + outcome.runs_off_bat
    if outcome.is_bye:
        new.extras.byes += outcome.runs_off_bat
    if outcome.is_leg_bye:
        new.extras.leg_byes += outcome.runs_off_bat

    # 4) Batsman
    if outcome.faces_ball:
        striker.runs += outcome.batsman_runs
        if outcome.batsman_runs == 4:
            striker.fours += 1
        elif outcome.batsman_runs == 6:
            striker.sixes += 1
        striker.balls += 1

    # 5) Legal ball: over progression from the raw counters
    if outcome.is_legal:
        ball_in_over += 1
        new.legal_balls += 1
        bowler.balls_bowled += 1
        new.balls_in_current_over = ball_in_over

    # 6) Wicket
    if outcome.is_wicket:
        new.wickets += 1
        bowler.wickets += 1
        striker.out_by = f"b {bowler.name}"
        new.striker_id = None

    # 7) Log
    record = BallRecord.from_outcome(
        outcome,
        ball=ball_in_over,
        over=over_index,
        bowler_id=bowler.player_id,
        striker_id=striker.player_id,
    )
    new.recent_balls.append(record)

    # 8) Odd runs rotate strike, dismissal or not
    if outcome.rotates_strike:
        new.swap_strike()

    # 9) Over end: release the bowler and change ends. On an odd-run sixth
    # ball this cancels step 8.
    if new.balls_in_current_over == BALLS_PER_OVER:
        new.balls_in_current_over = 0
        new.current_bowler_id = None
        new.swap_strike()
        over_records = [r for r in new.recent_balls if r.over == over_index]
        if maiden_bowler(over_records) == bowler.player_id:
            bowler.maidens += 1
            logger.debug("Maiden over %d credited to %s", over_index + 1, bowler.player_id)
        logger.info(
            "End of over %d: %d/%d, bowler %s %s-%d-%d-%d",
            over_index + 1, new.total_runs, new.wickets, bowler.name,
            bowler.overs, bowler.maidens, bowler.runs_conceded, bowler.wickets,
        )

    new.refresh_striker_flags()

    logger.debug(
        "Delivery %s: %s -> %d/%d (%s ov)",
        record.over_ball_str, record.label, new.total_runs, new.wickets, new.overs,
    )
    return new


class ScoringEngine:
    """Forward transition ``apply(state, outcome) -> state'``."""

    def apply(self, state: InningsState, outcome: BallOutcome) -> InningsState:
        return apply(state, outcome)
