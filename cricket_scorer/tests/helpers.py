"""Builders shared across the scoring engine tests."""

from __future__ import annotations

from cricket_scorer.data.ball_event import BallOutcome
from cricket_scorer.engine.nominations import (
    new_innings,
    nominate_bowler,
    nominate_non_striker,
    nominate_striker,
)
from cricket_scorer.engine.scoring import apply
from cricket_scorer.state.innings_state import InningsState

OUTCOMES = [
    BallOutcome(0),
    BallOutcome(1),
    BallOutcome(2),
    BallOutcome(3),
    BallOutcome(4),
    BallOutcome(6),
    BallOutcome(0, is_wide=True),
    BallOutcome(2, is_wide=True),
    BallOutcome(0, is_no_ball=True),
    BallOutcome(4, is_no_ball=True),
    BallOutcome(3, is_bye=True),
    BallOutcome(1, is_leg_bye=True),
    BallOutcome(1, is_no_ball=True, is_bye=True),
    BallOutcome(0, is_wicket=True),
    BallOutcome(1, is_wicket=True),
    BallOutcome(0, is_wide=True, is_wicket=True),
]


def make_ready_state(
    striker: str = "S",
    non_striker: str = "N",
    bowler: str = "B",
) -> InningsState:
    """Fresh innings with both openers and the first bowler nominated."""
    state = new_innings("Thunder", "Strikers")
    state = nominate_striker(state, striker, f"Striker {striker}")
    state = nominate_non_striker(state, non_striker, f"Partner {non_striker}")
    return nominate_bowler(state, bowler, f"Bowler {bowler}")


def bowl_legal_balls(state: InningsState, count: int, runs: int = 0) -> InningsState:
    for _ in range(count):
        state = apply(state, BallOutcome(runs))
    return state
