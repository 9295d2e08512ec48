"""Event sources the scouting analytics read pitch events from."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from contracts import PitchEvent
from exceptions import EventLoadError
from log_config.logger import get_logger

logger = get_logger(__name__)


class EventSource(ABC):
    """Read-only access to recorded pitch events."""

    @abstractmethod
    def all_events(self) -> List[PitchEvent]:
        """Every event, in recorded order."""

    def events_by_pitcher(self, pitcher_id: str) -> List[PitchEvent]:
        return [e for e in self.all_events() if e.pitcher_id == pitcher_id]

    def events_by_pitcher_and_game(self, pitcher_id: str, game_id: str) -> List[PitchEvent]:
        return [e for e in self.events_by_pitcher(pitcher_id) if e.game_id == game_id]

    def events_by_game(self, game_id: str) -> List[PitchEvent]:
        return [e for e in self.all_events() if e.game_id == game_id]

    def pitcher_ids(self) -> List[str]:
        """Pitcher IDs in first-recorded order."""
        seen: Dict[str, None] = {}
        for event in self.all_events():
            if event.pitcher_id is not None:
                seen.setdefault(event.pitcher_id, None)
        return list(seen)


class InMemoryEventStore(EventSource):
    """Event source over an in-memory list."""

    def __init__(self, events: Optional[Iterable[PitchEvent]] = None):
        self._events: List[PitchEvent] = list(events or [])

    def add(self, event: PitchEvent) -> None:
        self._events.append(event)

    def all_events(self) -> List[PitchEvent]:
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)


class JsonEventStore(EventSource):
    """Event source backed by a JSON export.

    Accepts either a list of pitch objects or an object with a ``pitches``
    list. The file is read once, on construction.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._events = self._load(self.path)

    @staticmethod
    def _load(path: Path) -> List[PitchEvent]:
        if not path.exists():
            logger.error(f"Event file not found: {path}")
            raise EventLoadError(f"Event file not found: {path}", path=path)

        try:
            with open(path, "r", encoding="utf-8") as f:
                data: Any = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in event file {path}: {e}")
            raise EventLoadError(f"Invalid JSON in event file: {e}", path=path)
        except UnicodeDecodeError as e:
            logger.error(f"Event file {path} is not valid UTF-8: {e}")
            raise EventLoadError(f"Event file is not valid UTF-8: {e}", path=path)
        except OSError as e:
            logger.error(f"Failed to read event file {path}: {e}")
            raise EventLoadError(f"Failed to read event file: {e}", path=path)

        if isinstance(data, dict):
            data = data.get("pitches")
        if not isinstance(data, list):
            raise EventLoadError(
                "Event file must contain a list of pitches or an object with a 'pitches' list",
                path=path,
            )

        events = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                logger.warning(f"Skipping non-object entry {index} in {path}")
                continue
            events.append(PitchEvent.from_dict(item))

        logger.info(f"Loaded {len(events)} pitch events from {path}")
        return events

    def all_events(self) -> List[PitchEvent]:
        return list(self._events)


__all__ = ["EventSource", "InMemoryEventStore", "JsonEventStore"]
