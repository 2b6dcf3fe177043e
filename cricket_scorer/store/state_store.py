"""
Innings state persistence.

The session controller persists every accepted mutation before it is
broadcast. Stores keep the serialised innings together with the
session's version number so a reloaded session resumes its
optimistic-concurrency sequence.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from cricket_scorer.state.innings_state import InningsState

logger = logging.getLogger(__name__)


class StateStore(ABC):
    """Abstract base class for innings state storage."""

    @abstractmethod
    def save(self, key: str, state: InningsState, version: int) -> None:
        """Persist ``state`` as ``version`` under ``key``."""

    @abstractmethod
    def load(self, key: str) -> Optional[tuple[InningsState, int]]:
        """Return ``(state, version)`` or None when nothing is stored."""


class InMemoryStateStore(StateStore):
    """Dictionary-backed store for tests and demos."""

    def __init__(self):
        self._docs: dict[str, dict] = {}

    def save(self, key: str, state: InningsState, version: int) -> None:
        # Serialise on write so later changes to ``state`` cannot leak in.
        self._docs[key] = {"version": version, "innings": state.to_dict()}

    def load(self, key: str) -> Optional[tuple[InningsState, int]]:
        doc = self._docs.get(key)
        if doc is None:
            return None
        return InningsState.from_dict(doc["innings"]), int(doc["version"])


class JsonFileStateStore(StateStore):
    """One ``<key>.json`` document per innings in a directory."""

    def __init__(self, directory: Path):
        self._dir = Path(directory)

    def path_for(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def save(self, key: str, state: InningsState, version: int) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        tmp = path.with_suffix(".json.tmp")
        doc = {"version": version, "innings": state.to_dict()}
        tmp.write_text(json.dumps(doc, indent=2))
        tmp.replace(path)
        logger.debug("Saved innings %s v%d to %s", key, version, path)

    def load(self, key: str) -> Optional[tuple[InningsState, int]]:
        path = self.path_for(key)
        if not path.exists():
            return None
        doc = json.loads(path.read_text())
        return InningsState.from_dict(doc["innings"]), int(doc.get("version", 0))
