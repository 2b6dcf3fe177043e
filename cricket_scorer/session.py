"""
Scoring Session - the single-writer controller around the engine.

The engine is pure and holds no locks, so two operators computing a
delivery against the same state would lose one of the updates. The
session serialises every mutation behind one lock and a version
number: callers that read the state, decide, and then write may pass
the version they read and get ``StaleStateError`` if someone else
wrote in between.

Each accepted mutation is persisted before listeners (overlays,
broadcasters) are notified. Listeners run while the lock is held, so
they receive versions strictly in order and should return quickly.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from cricket_scorer.config import InningsConfig
from cricket_scorer.data.ball_event import BallOutcome
from cricket_scorer.engine import nominations
from cricket_scorer.engine.errors import (
    InningsComplete,
    InningsExists,
    ScoringError,
    StaleStateError,
)
from cricket_scorer.engine.scoring import apply
from cricket_scorer.engine.undo import revert
from cricket_scorer.state.innings_state import InningsState
from cricket_scorer.store.state_store import StateStore

logger = logging.getLogger(__name__)

ALL_OUT = "all_out"
OVERS_COMPLETE = "overs_complete"
TARGET_REACHED = "target_reached"


class ScoringSession:
    """Owns one innings and serialises every change to it."""

    def __init__(
        self,
        key: str,
        state: InningsState,
        store: StateStore,
        config: Optional[InningsConfig] = None,
        target: Optional[int] = None,
        version: int = 0,
    ):
        self.key = key
        self.config = config or InningsConfig()
        self.target = target
        self._state = state
        self._version = version
        self._store = store
        self._lock = threading.RLock()
        self._callbacks: list[Callable[[InningsState, int], None]] = []

    @classmethod
    def start(
        cls,
        key: str,
        batting_team_id: str,
        bowling_team_id: str,
        store: StateStore,
        config: Optional[InningsConfig] = None,
        target: Optional[int] = None,
    ) -> "ScoringSession":
        """Create and persist a fresh innings (the toss).

        Raises ``InningsExists`` rather than overwrite a stored innings.
        """
        if store.load(key) is not None:
            raise InningsExists(key)
        state = nominations.new_innings(batting_team_id, bowling_team_id)
        session = cls(key, state, store, config=config, target=target)
        store.save(key, state, session.version)
        logger.info("Innings %s started: %s batting, %s bowling", key, batting_team_id, bowling_team_id)
        return session

    @classmethod
    def resume(
        cls,
        key: str,
        store: StateStore,
        config: Optional[InningsConfig] = None,
        target: Optional[int] = None,
    ) -> "ScoringSession":
        loaded = store.load(key)
        if loaded is None:
            raise KeyError(f"No stored innings for {key!r}")
        state, version = loaded
        logger.info("Innings %s resumed at v%d: %d/%d (%s ov)", key, version, state.total_runs, state.wickets, state.overs)
        return cls(key, state, store, config=config, target=target, version=version)

    @property
    def state(self) -> InningsState:
        return self._state

    @property
    def version(self) -> int:
        return self._version

    def on_update(self, callback: Callable[[InningsState, int], None]) -> None:
        """Register a callback for every accepted state change."""
        self._callbacks.append(callback)

    def completion_reason(self, state: Optional[InningsState] = None) -> Optional[str]:
        """Why the innings is over, or None while it is still live."""
        if state is None:
            state = self._state
        if state.wickets >= self.config.max_wickets:
            return ALL_OUT
        if self.target is not None and state.total_runs >= self.target:
            return TARGET_REACHED
        max_balls = self.config.max_legal_balls
        if max_balls is not None and state.legal_balls >= max_balls:
            return OVERS_COMPLETE
        return None

    @property
    def is_complete(self) -> bool:
        return self.completion_reason() is not None

    # ── Mutations ────────────────────────────────────────────────────

    def score(self, outcome: BallOutcome, expected_version: Optional[int] = None) -> InningsState:
        def _score(state: InningsState) -> InningsState:
            reason = self.completion_reason(state)
            if reason is not None:
                raise InningsComplete(f"Innings {self.key} is complete ({reason})")
            return apply(state, outcome)

        return self._mutate("score", _score, expected_version)

    def undo(self, expected_version: Optional[int] = None) -> InningsState:
        return self._mutate("undo", revert, expected_version)

    def nominate_striker(self, player_id: str, name: str = "", expected_version: Optional[int] = None) -> InningsState:
        return self._mutate(
            "nominate_striker",
            lambda s: nominations.nominate_striker(s, player_id, name),
            expected_version,
        )

    def nominate_non_striker(self, player_id: str, name: str = "", expected_version: Optional[int] = None) -> InningsState:
        return self._mutate(
            "nominate_non_striker",
            lambda s: nominations.nominate_non_striker(s, player_id, name),
            expected_version,
        )

    def nominate_bowler(self, player_id: str, name: str = "", expected_version: Optional[int] = None) -> InningsState:
        return self._mutate(
            "nominate_bowler",
            lambda s: nominations.nominate_bowler(s, player_id, name),
            expected_version,
        )

    def _mutate(
        self,
        action: str,
        transition: Callable[[InningsState], InningsState],
        expected_version: Optional[int],
    ) -> InningsState:
        with self._lock:
            if expected_version is not None and expected_version != self._version:
                logger.warning("%s on %s rejected: stale v%d (current v%d)", action, self.key, expected_version, self._version)
                raise StaleStateError(expected_version, self._version)
            try:
                new_state = transition(self._state)
            except ScoringError as e:
                logger.warning("%s on %s rejected: %s", action, self.key, e)
                raise

            version = self._version + 1
            self._store.save(self.key, new_state, version)
            self._state = new_state
            self._version = version

            logger.info(
                "%s %s v%d: %d/%d (%s ov)",
                self.key, action, version, new_state.total_runs, new_state.wickets, new_state.overs,
            )
            reason = self.completion_reason(new_state)
            if reason is not None and action == "score":
                logger.info("Innings %s complete: %s", self.key, reason)

            # Broadcast under the lock so listeners see versions in order.
            for cb in self._callbacks:
                cb(new_state, version)
        return new_state
