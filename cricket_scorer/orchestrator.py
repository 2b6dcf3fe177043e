"""
Cricket Scoring Engine Orchestrator.

Command-line entry point around the scoring session:

1. Demo: score a synthetic innings end to end (with the odd undo)
2. Show: print the scorecard of a persisted innings
3. Undo: revert the last delivery of a persisted innings

Usage:
    python -m cricket_scorer.orchestrator --demo --seed 7
    python -m cricket_scorer.orchestrator --show demo_20260101_120000
    python -m cricket_scorer.orchestrator --undo demo_20260101_120000
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Optional

from cricket_scorer.config import EngineConfig
from cricket_scorer.data.ball_event import BallOutcome
from cricket_scorer.engine.errors import ScoringError
from cricket_scorer.engine.nominations import TossChoice, toss_result
from cricket_scorer.session import ScoringSession
from cricket_scorer.state.innings_state import BOWLER, NON_STRIKER, STRIKER
from cricket_scorer.store.state_store import JsonFileStateStore
from cricket_scorer.utils.scorecard import render

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("cricket_scorer.orchestrator")


def random_outcome(rng: random.Random) -> BallOutcome:
    """Rough T20 delivery distribution."""
    r = rng.random()
    if r < 0.33:
        return BallOutcome(0)
    if r < 0.58:
        return BallOutcome(1)
    if r < 0.66:
        return BallOutcome(2)
    if r < 0.68:
        return BallOutcome(3)
    if r < 0.78:
        return BallOutcome(4)
    if r < 0.83:
        return BallOutcome(6)
    if r < 0.87:
        return BallOutcome(0, is_wide=True)
    if r < 0.89:
        return BallOutcome(rng.choice([0, 1]), is_no_ball=True)
    if r < 0.91:
        return BallOutcome(1, is_leg_bye=True)
    if r < 0.92:
        return BallOutcome(rng.choice([1, 4]), is_bye=True)
    return BallOutcome(0, is_wicket=True)


def run_demo(config: EngineConfig, key: str, seed: Optional[int] = None) -> None:
    """Score a synthetic innings through a persisted session."""
    rng = random.Random(seed)
    store = JsonFileStateStore(config.state_dir)

    logger.info("=" * 60)
    logger.info("CRICKET SCORING ENGINE - DEMO MODE")
    logger.info("=" * 60)

    winner = rng.choice(["Thunder", "Strikers"])
    choice = rng.choice(list(TossChoice))
    batting, bowling = toss_result("Thunder", "Strikers", winner, choice)
    logger.info("%s won the toss and chose to %s", winner, choice.value.lower())

    session = ScoringSession.start(key, batting, bowling, store, config=config.innings)
    batsmen = iter(f"Bat_{i}" for i in range(1, config.innings.players_per_side + 1))
    bowlers = [f"Bowl_{i}" for i in range(1, 6)]
    last_bowler: Optional[str] = None

    while not session.is_complete:
        awaiting = session.state.awaiting
        if STRIKER in awaiting:
            session.nominate_striker(next(batsmen))
            continue
        if NON_STRIKER in awaiting:
            session.nominate_non_striker(next(batsmen))
            continue
        if BOWLER in awaiting:
            choice = rng.choice([b for b in bowlers if b != last_bowler])
            session.nominate_bowler(choice)
            last_bowler = choice
            continue

        before = session.state
        state = session.score(random_outcome(rng))
        if state.wickets > before.wickets:
            logger.info("  WICKET! %d/%d after %s overs", state.total_runs, state.wickets, state.overs)

        # Operators mis-key now and then.
        if rng.random() < 0.03:
            session.undo()
            logger.info("  Undo -> %d/%d (%s ov)", session.state.total_runs, session.state.wickets, session.state.overs)

    logger.info("Innings complete: %s", session.completion_reason())
    print("\n" + render(session.state))
    print(f"\nSaved to {store.path_for(key)}")


def run_show(config: EngineConfig, key: str) -> None:
    session = ScoringSession.resume(key, JsonFileStateStore(config.state_dir), config=config.innings)
    print(render(session.state))


def run_undo(config: EngineConfig, key: str) -> None:
    session = ScoringSession.resume(key, JsonFileStateStore(config.state_dir), config=config.innings)
    session.undo()
    print(render(session.state))


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Cricket Live Scoring Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m cricket_scorer.orchestrator --demo --seed 7
  python -m cricket_scorer.orchestrator --show demo_20260101_120000
  python -m cricket_scorer.orchestrator --undo demo_20260101_120000
        """,
    )

    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--demo", action="store_true", help="Score a synthetic innings")
    mode.add_argument("--show", metavar="KEY", help="Print the scorecard of a stored innings")
    mode.add_argument("--undo", metavar="KEY", help="Undo the last delivery of a stored innings")

    parser.add_argument("--key", type=str, help="Innings key for --demo (default: timestamped)")
    parser.add_argument("--state-dir", type=str, help="Directory for innings JSON files")
    parser.add_argument("--overs", type=int, help="Overs per innings")
    parser.add_argument("--seed", type=int, help="Random seed for --demo")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    config = EngineConfig.from_env()
    logging.getLogger().setLevel(config.log_level.upper())
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.state_dir:
        config.state_dir = Path(args.state_dir)
    if args.overs:
        config.innings = replace(config.innings, total_overs=args.overs)

    try:
        if args.demo:
            key = args.key or f"demo_{datetime.now():%Y%m%d_%H%M%S}"
            run_demo(config, key, seed=args.seed)
        elif args.show:
            run_show(config, args.show)
        elif args.undo:
            run_undo(config, args.undo)
    except (ScoringError, KeyError) as e:
        logger.error("%s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
