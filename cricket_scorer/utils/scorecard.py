"""
Scorecard projections.

Read-only views of an innings for overlays, logs and the CLI. Nothing
here feeds back into the engine.
"""

from __future__ import annotations

import pandas as pd

from cricket_scorer.state.innings_state import InningsState

BATTING_COLUMNS = ["batsman", "dismissal", "R", "B", "4s", "6s", "SR"]
BOWLING_COLUMNS = ["bowler", "O", "M", "R", "W", "Econ"]


def batting_card(state: InningsState) -> pd.DataFrame:
    """One row per batsman in order of appearance. Striker marked with '*'."""
    rows = []
    for pid, b in state.batsmen.items():
        name = f"{b.name}*" if pid == state.striker_id else b.name
        rows.append({
            "batsman": name,
            "dismissal": b.out_by if b.is_out else "not out",
            "R": b.runs,
            "B": b.balls,
            "4s": b.fours,
            "6s": b.sixes,
            "SR": round(b.strike_rate, 2),
        })
    return pd.DataFrame(rows, columns=BATTING_COLUMNS)


def bowling_card(state: InningsState) -> pd.DataFrame:
    rows = []
    for b in state.bowlers.values():
        rows.append({
            "bowler": b.name,
            "O": str(b.overs),
            "M": b.maidens,
            "R": b.runs_conceded,
            "W": b.wickets,
            "Econ": round(b.economy, 2),
        })
    return pd.DataFrame(rows, columns=BOWLING_COLUMNS)


def extras_line(state: InningsState) -> str:
    e = state.extras
    return f"Extras {e.total} (w {e.wides}, nb {e.no_balls}, b {e.byes}, lb {e.leg_byes})"


def score_line(state: InningsState) -> str:
    """e.g. '123/4 (15.2 ov, RR 8.02)'."""
    return f"{state.total_runs}/{state.wickets} ({state.overs} ov, RR {state.run_rate:.2f})"


def this_over_strip(state: InningsState) -> list[str]:
    """Delivery labels for the over in progress, as the overlay shows them."""
    return [b.label for b in state.this_over]


def render(state: InningsState) -> str:
    """Plain-text scorecard."""
    batting = batting_card(state)
    bowling = bowling_card(state)
    parts = [
        f"{state.batting_team_id} v {state.bowling_team_id}: {score_line(state)}",
        "",
        batting.to_string(index=False) if not batting.empty else "(no batsmen)",
        extras_line(state),
        "",
        bowling.to_string(index=False) if not bowling.empty else "(no bowlers)",
    ]
    strip = this_over_strip(state)
    if strip:
        parts += ["", "This over: " + " ".join(strip)]
    return "\n".join(parts)
