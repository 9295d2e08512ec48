"""Core data contracts for recorded pitch events."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class PitchResult(str, Enum):
    BALL = "ball"
    STRIKE = "strike"
    FOUL = "foul"
    SWINGING_STRIKE = "swinging_strike"
    HIT = "hit"
    OUT = "out"


# Results that count toward a pitcher's strike percentage.
STRIKE_LIKE_RESULTS = frozenset({
    PitchResult.STRIKE.value,
    PitchResult.FOUL.value,
    PitchResult.SWINGING_STRIKE.value,
    PitchResult.OUT.value,
})

# Results where the batter put the ball in play or fouled it off.
CONTACT_RESULTS = frozenset({
    PitchResult.FOUL.value,
    PitchResult.HIT.value,
    PitchResult.OUT.value,
})

VALID_RESULTS = frozenset(r.value for r in PitchResult)
BATTER_SIDES = ("L", "R")
MAX_BALLS = 3
MAX_STRIKES = 2
MAX_OUTS = 2


def parse_count(count: Any) -> Optional[Tuple[int, int]]:
    """Parse a "balls-strikes" count string.

    Returns:
        (balls, strikes) or None if the count is missing or out of range
    """
    if not isinstance(count, str):
        return None
    parts = count.strip().split("-")
    if len(parts) != 2:
        return None
    try:
        balls, strikes = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    if not (0 <= balls <= MAX_BALLS and 0 <= strikes <= MAX_STRIKES):
        return None
    return balls, strikes


def parse_timestamp(value: Any) -> Optional[float]:
    """Normalize an epoch number or ISO-8601 string to epoch seconds."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, datetime):
        return value.timestamp()
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text).timestamp()
        except ValueError:
            return None
    return None


# camelCase keys written by the capture app, mapped to field names.
_FIELD_ALIASES = {
    "pitcherId": "pitcher_id",
    "gameId": "game_id",
    "isTopHalf": "is_top_half",
    "isTop": "is_top_half",
    "pitchType": "pitch_type",
    "batterSide": "batter_side",
    "id": "event_id",
    "eventId": "event_id",
}


@dataclass(frozen=True)
class PitchEvent:
    """One recorded pitch.

    Fields are kept exactly as supplied; accessors such as ``balls`` return
    None when the underlying field is malformed instead of raising.
    """

    pitcher_id: Optional[str] = None
    game_id: Optional[str] = None
    inning: Optional[int] = None
    is_top_half: Optional[bool] = None
    outs: Optional[int] = None
    count: Optional[str] = None
    pitch_type: Optional[str] = None
    result: Optional[str] = None
    batter_side: Optional[str] = None
    timestamp: Optional[float] = None
    event_id: Optional[str] = None

    @property
    def parsed_count(self) -> Optional[Tuple[int, int]]:
        return parse_count(self.count)

    @property
    def balls(self) -> Optional[int]:
        parsed = self.parsed_count
        return parsed[0] if parsed else None

    @property
    def strikes(self) -> Optional[int]:
        parsed = self.parsed_count
        return parsed[1] if parsed else None

    @property
    def valid_outs(self) -> Optional[int]:
        if isinstance(self.outs, bool) or not isinstance(self.outs, int):
            return None
        return self.outs if 0 <= self.outs <= MAX_OUTS else None

    @property
    def valid_inning(self) -> Optional[int]:
        if isinstance(self.inning, bool) or not isinstance(self.inning, int):
            return None
        return self.inning if self.inning > 0 else None

    @property
    def valid_pitch_type(self) -> Optional[str]:
        if not isinstance(self.pitch_type, str) or not self.pitch_type.strip():
            return None
        return self.pitch_type

    @property
    def valid_result(self) -> Optional[str]:
        if not isinstance(self.result, str):
            return None
        return self.result if self.result in VALID_RESULTS else None

    @property
    def valid_batter_side(self) -> Optional[str]:
        if not isinstance(self.batter_side, str):
            return None
        return self.batter_side if self.batter_side in BATTER_SIDES else None

    @property
    def valid_timestamp(self) -> Optional[float]:
        return parse_timestamp(self.timestamp)

    @property
    def is_strike_like(self) -> bool:
        return self.valid_result in STRIKE_LIKE_RESULTS

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PitchEvent":
        """Build an event from a stored record (camelCase or snake_case keys)."""
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = _FIELD_ALIASES.get(key, key)
            if name in _EVENT_FIELDS:
                values[name] = value

        if isinstance(values.get("result"), PitchResult):
            values["result"] = values["result"].value
        values["timestamp"] = parse_timestamp(values.get("timestamp"))
        for name in ("pitcher_id", "game_id", "event_id"):
            if values.get(name) is not None:
                values[name] = str(values[name])
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in _EVENT_FIELDS}


_EVENT_FIELDS = tuple(PitchEvent.__dataclass_fields__)
