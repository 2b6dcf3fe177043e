"""
Undo Engine - reverse transition.

Removes the most recent delivery from an innings. Plain integer sums
are reversed by subtracting the same quantities the forward path added,
recomputed from the popped record's flags. Ball counts are rebuilt from
the remaining log rather than decremented, so ``overs`` can never drift
from the deliveries actually recorded.
"""

from __future__ import annotations

import copy
import logging

from cricket_scorer.config import BALLS_PER_OVER
from cricket_scorer.engine.errors import EmptyLog
from cricket_scorer.engine.scoring import maiden_bowler
from cricket_scorer.state.innings_state import InningsState

logger = logging.getLogger(__name__)


def revert(state: InningsState) -> InningsState:
    """Undo the last delivery and return the resulting innings state."""
    if not state.recent_balls:
        raise EmptyLog()

    new = copy.deepcopy(state)
    record = new.recent_balls.pop()
    batsman = new.batsmen.get(record.striker_id)
    bowler = new.bowlers.get(record.bowler_id)
    if batsman is None or bowler is None:
        logger.warning(
            "Undo of %s references unknown players (batsman=%s, bowler=%s)",
            record.over_ball_str, record.striker_id, record.bowler_id,
        )

    # Runs, extras and batsman figures
    if bowler is not None:
        bowler.runs_conceded -= record.bowler_runs
    new.total_runs -= record.ball_runs

    if record.is_wide:
        new.extras.wides -= 1 + record.runs_off_bat
    if record.is_no_ball:
        new.extras.no_balls -= 1 + record.runs_off_bat
    if record.is_bye:
        new.extras.byes -= record.runs_off_bat
    if record.is_leg_bye:
        new.extras.leg_byes -= record.runs_off_bat

    if batsman is not None and record.faces_ball:
        batsman.runs -= record.batsman_runs
        if record.batsman_runs == 4:
            batsman.fours -= 1
        elif record.batsman_runs == 6:
            batsman.sixes -= 1
        batsman.balls -= 1

    # Ball counts, rebuilt from what is left in the log
    if record.is_legal:
        if bowler is not None:
            bowler.balls_bowled -= 1
            logged = new.legal_balls_logged(bowler.player_id)
            if bowler.balls_bowled != logged:
                logger.warning(
                    "Bowler %s ball count drifted (%d counted, %d logged); using the log",
                    bowler.player_id, bowler.balls_bowled, logged,
                )
                bowler.balls_bowled = logged
        new.legal_balls = new.legal_balls_logged()
        new.balls_in_current_over = new.legal_balls % BALLS_PER_OVER

    # Over end: bring the bowler back and undo the change of ends
    if record.ended_over:
        over_records = [r for r in new.recent_balls if r.over == record.over]
        over_records.append(record)
        if bowler is not None and maiden_bowler(over_records) == bowler.player_id:
            bowler.maidens -= 1
        new.current_bowler_id = record.bowler_id
        new.swap_strike()

    if record.rotates_strike:
        new.swap_strike()

    # With both swaps undone the dismissed batsman's slot is the striker's.
    if record.is_wicket:
        new.wickets -= 1
        if bowler is not None:
            bowler.wickets -= 1
        if batsman is not None:
            batsman.out_by = None
        new.striker_id = record.striker_id

    new.refresh_striker_flags()

    logger.debug(
        "Undid delivery %s (%s) -> %d/%d (%s ov)",
        record.over_ball_str, record.label, new.total_runs, new.wickets, new.overs,
    )
    return new


class UndoEngine:
    """Reverse transition ``revert(state) -> state'``."""

    def revert(self, state: InningsState) -> InningsState:
        return revert(state)
