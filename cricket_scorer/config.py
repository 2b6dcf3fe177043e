"""
Configuration management for the Cricket Scoring Engine.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

BALLS_PER_OVER = 6


class MatchFormat(Enum):
    T10 = "t10"
    T20 = "t20"
    ODI = "odi"
    TEST = "test"


@dataclass(frozen=True)
class InningsConfig:
    """Limits the session controller checks after every delivery."""
    match_format: MatchFormat = MatchFormat.T20
    total_overs: Optional[int] = 20  # None for unlimited (Test cricket)
    players_per_side: int = 11

    @property
    def max_wickets(self) -> int:
        return self.players_per_side - 1

    @property
    def max_legal_balls(self) -> Optional[int]:
        if self.total_overs is None:
            return None
        return self.total_overs * BALLS_PER_OVER


@dataclass
class EngineConfig:
    """Top-level scorer configuration."""
    innings: InningsConfig = field(default_factory=InningsConfig)
    state_dir: Path = field(default_factory=lambda: Path("data/innings"))
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Load configuration from environment variables."""
        fmt = MatchFormat(os.getenv("SCORER_MATCH_FORMAT", "t20").lower())
        overs_env = os.getenv("SCORER_TOTAL_OVERS", "")
        total_overs = int(overs_env) if overs_env else FORMAT_OVERS.get(fmt)
        return cls(
            innings=InningsConfig(
                match_format=fmt,
                total_overs=total_overs,
                players_per_side=int(os.getenv("SCORER_PLAYERS_PER_SIDE", "11")),
            ),
            state_dir=Path(os.getenv("SCORER_STATE_DIR", "data/innings")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


# Format-specific constants
FORMAT_OVERS: dict[MatchFormat, Optional[int]] = {
    MatchFormat.T10: 10,
    MatchFormat.T20: 20,
    MatchFormat.ODI: 50,
    MatchFormat.TEST: None,  # Unlimited
}
