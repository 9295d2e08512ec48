"""Generic frequency and percentage aggregation over pitch events.

Every situational table in the scouting reports is a ``Partition``: events
grouped by one attribute (or a conjunction of attributes), with per-category
counts, independently rounded integer percentages and the sample size.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Iterable, Optional, Sequence, Tuple, Union

from contracts import PitchEvent

from analysis.scouting.utils import percentage

KeyFn = Callable[[PitchEvent], Optional[Hashable]]
PartitionKey = Union[str, Tuple[str, ...], KeyFn]
EventFilter = Callable[[PitchEvent], bool]


def _count_label(event: PitchEvent) -> Optional[str]:
    parsed = event.parsed_count
    if parsed is None:
        return None
    return f"{parsed[0]}-{parsed[1]}"


def _half_inning_label(event: PitchEvent) -> Optional[str]:
    inning = event.valid_inning
    if inning is None or not isinstance(event.is_top_half, bool):
        return None
    return f"{'Top' if event.is_top_half else 'Bottom'}-{inning}"


KEY_EXTRACTORS: Dict[str, KeyFn] = {
    "pitch_type": lambda e: e.valid_pitch_type,
    "count": _count_label,
    "balls": lambda e: e.balls,
    "strikes": lambda e: e.strikes,
    "batter_side": lambda e: e.valid_batter_side,
    "outs": lambda e: e.valid_outs,
    "inning": lambda e: e.valid_inning,
    "half_inning": _half_inning_label,
    "result": lambda e: e.valid_result,
}


@dataclass(frozen=True)
class Partition:
    """Category counts and percentages for one partition of events.

    ``counts`` and ``percentages`` keep categories in the order they were
    first encountered; categories with no observations never appear.
    """

    key: str
    counts: Dict[Any, int] = field(default_factory=dict)
    percentages: Dict[Any, int] = field(default_factory=dict)
    sample_size: int = 0

    @classmethod
    def empty(cls, key: str) -> "Partition":
        return cls(key=key)

    @property
    def has_data(self) -> bool:
        return self.sample_size > 0

    @property
    def categories(self) -> Tuple[Any, ...]:
        return tuple(self.counts)

    def dominant(self) -> Optional[Tuple[Any, int]]:
        """Category with the highest count and its percentage.

        Ties go to the category encountered first.
        """
        best = None
        best_count = 0
        for category, count in self.counts.items():
            if count > best_count:
                best, best_count = category, count
        if best is None:
            return None
        return best, self.percentages[best]

    def share(self, category: Any) -> int:
        return self.percentages.get(category, 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "counts": dict(self.counts),
            "percentages": dict(self.percentages),
            "sample_size": self.sample_size,
            "has_data": self.has_data,
        }


def resolve_key(key: PartitionKey) -> Tuple[str, KeyFn]:
    """Turn a key name, tuple of names, or callable into (name, extractor).

    Raises:
        KeyError: If a named key is not a known extractor
    """
    if callable(key):
        return getattr(key, "__name__", "custom"), key

    if isinstance(key, tuple):
        extractors = [KEY_EXTRACTORS[name] for name in key]

        def conjunction(event: PitchEvent) -> Optional[str]:
            values = [extract(event) for extract in extractors]
            if any(v is None for v in values):
                return None
            return "|".join(str(v) for v in values)

        return "+".join(key), conjunction

    return key, KEY_EXTRACTORS[key]


def partition(
    events: Iterable[PitchEvent],
    key: PartitionKey,
    where: Optional[EventFilter] = None,
) -> Partition:
    """Partition events by key and compute counts and percentages.

    Args:
        events: Pitch events, in the order categories should be enumerated
        key: Named key, tuple of names (conjunction), or extractor callable
        where: Optional filter selecting the situation to partition

    Returns:
        Partition; events whose key value is missing or malformed are left
        out of it. With nothing left the partition has ``has_data=False``.
    """
    name, extract = resolve_key(key)

    counts: Dict[Any, int] = {}
    for event in events:
        if where is not None and not where(event):
            continue
        category = extract(event)
        if category is None:
            continue
        counts[category] = counts.get(category, 0) + 1

    total = sum(counts.values())
    if total == 0:
        return Partition.empty(name)

    percentages = {category: percentage(n, total) for category, n in counts.items()}
    return Partition(key=name, counts=counts, percentages=percentages, sample_size=total)


def partition_within(
    events: Iterable[PitchEvent],
    group_key: PartitionKey,
    category_key: PartitionKey = "pitch_type",
) -> Dict[Any, Partition]:
    """Partition events by category separately inside each group.

    Groups appear in first-encountered order; a group whose events all lack
    the category is omitted.
    """
    _, group_of = resolve_key(group_key)

    groups: Dict[Any, list] = {}
    for event in events:
        group = group_of(event)
        if group is None:
            continue
        groups.setdefault(group, []).append(event)

    result = {}
    for group, members in groups.items():
        part = partition(members, category_key)
        if part.has_data:
            result[group] = part
    return result


def merge_partitions(partitions: Sequence[Partition], key: str) -> Partition:
    """Sum the counts of several partitions and recompute percentages."""
    counts: Dict[Any, int] = {}
    for part in partitions:
        for category, n in part.counts.items():
            counts[category] = counts.get(category, 0) + n

    total = sum(counts.values())
    if total == 0:
        return Partition.empty(key)

    percentages = {category: percentage(n, total) for category, n in counts.items()}
    return Partition(key=key, counts=counts, percentages=percentages, sample_size=total)


__all__ = [
    "KEY_EXTRACTORS",
    "Partition",
    "merge_partitions",
    "partition",
    "partition_within",
    "resolve_key",
]
