"""Tests for the scorecard projections."""

from __future__ import annotations

from cricket_scorer.data.ball_event import BallOutcome
from cricket_scorer.engine.nominations import new_innings
from cricket_scorer.engine.scoring import apply
from cricket_scorer.state.innings_state import InningsState
from cricket_scorer.tests.helpers import bowl_legal_balls
from cricket_scorer.utils.scorecard import (
    BATTING_COLUMNS,
    BOWLING_COLUMNS,
    batting_card,
    bowling_card,
    extras_line,
    render,
    score_line,
    this_over_strip,
)


class TestCards:
    def test_batting_card(self, ready_state: InningsState):
        state = apply(ready_state, BallOutcome(1))
        card = batting_card(state)
        assert list(card.columns) == BATTING_COLUMNS
        assert list(card["batsman"]) == ["Striker S", "Partner N*"]
        first = card.iloc[0]
        assert first["R"] == 1
        assert first["B"] == 1
        assert first["SR"] == 100.0
        assert first["dismissal"] == "not out"

    def test_dismissal_shown(self, ready_state: InningsState):
        state = apply(ready_state, BallOutcome(0, is_wicket=True))
        card = batting_card(state)
        assert card.iloc[0]["dismissal"] == "b Bowler B"

    def test_bowling_card(self, ready_state: InningsState):
        state = bowl_legal_balls(ready_state, 6)
        card = bowling_card(state)
        assert list(card.columns) == BOWLING_COLUMNS
        row = card.iloc[0]
        assert row["bowler"] == "Bowler B"
        assert row["O"] == "1.0"
        assert row["M"] == 1
        assert row["R"] == 0
        assert row["Econ"] == 0.0


class TestLines:
    def test_score_line(self, ready_state: InningsState):
        state = apply(ready_state, BallOutcome(4))
        state = apply(state, BallOutcome(0, is_wide=True))
        assert score_line(state) == "5/0 (0.1 ov, RR 30.00)"

    def test_extras_line(self, ready_state: InningsState):
        state = apply(ready_state, BallOutcome(0, is_wide=True))
        state = apply(state, BallOutcome(2, is_leg_bye=True))
        assert extras_line(state) == "Extras 3 (w 1, nb 0, b 0, lb 2)"

    def test_this_over_strip(self, ready_state: InningsState):
        state = apply(ready_state, BallOutcome(1))
        state = apply(state, BallOutcome(0, is_wide=True))
        state = apply(state, BallOutcome(0, is_wicket=True))
        assert this_over_strip(state) == ["1", "wd", "W"]


class TestRender:
    def test_render_live_innings(self, ready_state: InningsState):
        text = render(apply(ready_state, BallOutcome(6)))
        assert text.startswith("Thunder v Strikers: 6/0 (0.1 ov")
        assert "Bowler B" in text
        assert "This over: 6" in text

    def test_render_empty_innings(self):
        text = render(new_innings("Thunder", "Strikers"))
        assert "(no batsmen)" in text
        assert "(no bowlers)" in text
        assert "This over" not in text
