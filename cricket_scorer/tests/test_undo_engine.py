"""Tests for the reverse (undo) transition."""

from __future__ import annotations

import copy
import logging
import random

import pytest

from cricket_scorer.data.ball_event import BallOutcome
from cricket_scorer.engine.errors import EmptyLog
from cricket_scorer.engine.nominations import (
    nominate_bowler,
    nominate_non_striker,
    nominate_striker,
)
from cricket_scorer.engine.scoring import apply
from cricket_scorer.engine.undo import UndoEngine, revert
from cricket_scorer.state.innings_state import InningsState
from cricket_scorer.state.overs import OverNotation
from cricket_scorer.tests.helpers import OUTCOMES, bowl_legal_balls, make_ready_state


def start_of_innings() -> InningsState:
    return make_ready_state()


def last_ball_of_over() -> InningsState:
    state = make_ready_state()
    state = apply(state, BallOutcome(1))
    state = apply(state, BallOutcome(0, is_wide=True))
    return bowl_legal_balls(state, 4)


def mid_innings() -> InningsState:
    state = make_ready_state()
    state = apply(state, BallOutcome(4))
    state = apply(state, BallOutcome(0, is_wicket=True))
    state = nominate_striker(state, "S2", "Second Striker")
    state = bowl_legal_balls(state, 3)
    state = apply(state, BallOutcome(1))  # ends over 1
    state = nominate_bowler(state, "B2", "Change Bowler")
    state = apply(state, BallOutcome(2, is_no_ball=True))
    state = apply(state, BallOutcome(3, is_leg_bye=True))
    return state


def after_maiden_and_five_dots() -> InningsState:
    state = bowl_legal_balls(make_ready_state(), 6)
    state = nominate_bowler(state, "B2", "Change Bowler")
    state = nominate_bowler(state, "B", "Bowler B")
    return bowl_legal_balls(state, 5)


POSITIONS = {
    "start": start_of_innings,
    "last_ball": last_ball_of_over,
    "mid_innings": mid_innings,
    "maiden_pending": after_maiden_and_five_dots,
}


class TestRoundTrip:
    @pytest.mark.parametrize("position", sorted(POSITIONS))
    @pytest.mark.parametrize("outcome", OUTCOMES, ids=lambda o: repr(o))
    def test_revert_undoes_apply(self, position: str, outcome: BallOutcome):
        before = POSITIONS[position]()
        after = apply(before, outcome)
        assert revert(after) == before

    def test_random_innings_every_delivery_reverts(self):
        rng = random.Random(1234)
        state = make_ready_state()
        pairs = []
        next_batsman = 3
        bowler_turn = 0
        for _ in range(80):
            if state.striker_id is None:
                state = nominate_striker(state, f"P{next_batsman}")
                next_batsman += 1
            if state.non_striker_id is None:
                state = nominate_non_striker(state, f"P{next_batsman}")
                next_batsman += 1
            if state.current_bowler_id is None:
                bowler_turn += 1
                state = nominate_bowler(state, f"BW{bowler_turn % 3}")
            before = state
            state = apply(state, rng.choice(OUTCOMES))
            pairs.append((before, state))

        for before, after in pairs:
            assert revert(after) == before

        legal = sum(1 for r in state.recent_balls if r.is_legal)
        assert state.legal_balls == legal
        assert sum(b.balls_bowled for b in state.bowlers.values()) == legal
        assert state.total_runs == sum(r.ball_runs for r in state.recent_balls)

    def test_consecutive_undos_unwind_to_start(self, ready_state: InningsState):
        sequence = [
            BallOutcome(1), BallOutcome(0, is_wide=True), BallOutcome(4),
            BallOutcome(3, is_no_ball=True), BallOutcome(2, is_bye=True), BallOutcome(1),
            BallOutcome(2), BallOutcome(0),
        ]
        state = ready_state
        for outcome in sequence[:-1]:
            state = apply(state, outcome)
        state = apply(state, sequence[-1])  # sixth legal ball
        assert state.current_bowler_id is None

        for _ in sequence:
            state = revert(state)
        assert state == ready_state

    def test_overs_rebuilt_after_many_undos(self, ready_state: InningsState):
        state = bowl_legal_balls(ready_state, 5)
        state = apply(state, BallOutcome(1))
        assert str(state.overs) == "1.0"
        state = revert(state)
        assert state.overs == OverNotation(0, 5)
        assert state.bowlers["B"].overs == OverNotation(0, 5)
        assert state.balls_in_current_over == 5
        for _ in range(5):
            state = revert(state)
        assert state.overs == OverNotation(0, 0)
        assert state.bowlers["B"].balls_bowled == 0


class TestScenarios:
    def test_wicket_then_undo(self, ready_state: InningsState):
        out = apply(ready_state, BallOutcome(0, is_wicket=True))
        assert out.wickets == 1
        assert out.striker_id is None

        back = revert(out)
        assert back.wickets == 0
        assert back.striker_id == "S"
        assert back.batsmen["S"].out_by is None
        assert back.batsmen["S"].is_striker
        assert back.bowlers["B"].wickets == 0

    def test_wicket_undo_after_replacement_nominated(self, ready_state: InningsState):
        out = apply(ready_state, BallOutcome(0, is_wicket=True))
        out = nominate_striker(out, "S2", "Replacement")
        back = revert(out)
        assert back.striker_id == "S"
        assert back.non_striker_id == "N"
        # ledgers are never deleted
        assert "S2" in back.batsmen
        assert not back.batsmen["S2"].is_striker

    def test_over_end_undo_restores_bowler(self, ready_state: InningsState):
        state = bowl_legal_balls(ready_state, 6)
        state = nominate_bowler(state, "B2", "Change Bowler")
        back = revert(state)
        assert back.current_bowler_id == "B"
        assert back.balls_in_current_over == 5
        assert back.striker_id == "S"
        assert back.bowlers["B"].maidens == 0
        assert back.bowlers["B2"].balls_bowled == 0

    def test_undo_byes(self, ready_state: InningsState):
        state = apply(ready_state, BallOutcome(3, is_bye=True))
        back = revert(state)
        assert back.extras.byes == 0
        assert back.total_runs == 0
        assert back.striker_id == "S"

    def test_facade(self, ready_state: InningsState):
        state = apply(ready_state, BallOutcome(2))
        assert UndoEngine().revert(state) == ready_state


class TestFailures:
    def test_empty_log(self, ready_state: InningsState):
        with pytest.raises(EmptyLog):
            revert(ready_state)

    def test_input_not_mutated(self, ready_state: InningsState):
        state = apply(ready_state, BallOutcome(1, is_wicket=True))
        snapshot = copy.deepcopy(state)
        revert(state)
        assert state == snapshot

    def test_drifted_bowler_count_repaired_from_log(self, ready_state: InningsState, caplog):
        state = bowl_legal_balls(ready_state, 3)
        state.bowlers["B"].balls_bowled = 7  # corrupted counter
        with caplog.at_level(logging.WARNING, logger="cricket_scorer.engine.undo"):
            back = revert(state)
        assert back.bowlers["B"].balls_bowled == 2
        assert str(back.bowlers["B"].overs) == "0.2"
        assert back.legal_balls == 2
        assert "drifted" in caplog.text
