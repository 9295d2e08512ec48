"""Tests for the partition aggregation engine."""

from datetime import datetime, timezone

import pytest

from analysis.scouting.aggregation import (
    Partition,
    merge_partitions,
    partition,
    partition_within,
)
from analysis.scouting.utils import chronological, percentage


class TestPercentage:
    """Test integer percentage rounding."""

    def test_rounds_half_up(self):
        assert percentage(1, 8) == 13  # 12.5
        assert percentage(1, 3) == 33
        assert percentage(2, 3) == 67

    def test_zero_total(self):
        assert percentage(0, 0) == 0


class TestPartition:
    """Test partition-by-key aggregation."""

    def test_counts_and_percentages(self, make_sequence):
        events = make_sequence(["strike"] * 4, ["fastball", "fastball", "curveball", "fastball"])

        part = partition(events, "pitch_type")

        assert part.counts == {"fastball": 3, "curveball": 1}
        assert part.percentages == {"fastball": 75, "curveball": 25}
        assert part.sample_size == 4
        assert part.has_data

    def test_independent_rounding_may_not_sum_to_100(self, make_sequence):
        events = make_sequence(["strike"] * 3, ["fastball", "curveball", "changeup"])

        part = partition(events, "pitch_type")

        assert list(part.percentages.values()) == [33, 33, 33]
        assert sum(part.percentages.values()) == 99

    def test_empty_input_is_no_data(self):
        part = partition([], "pitch_type")

        assert not part.has_data
        assert part.sample_size == 0
        assert part.counts == {}
        assert part.dominant() is None

    def test_categories_keep_first_encountered_order(self, make_sequence):
        events = make_sequence(["strike"] * 3, ["slider", "fastball", "slider"])

        assert partition(events, "pitch_type").categories == ("slider", "fastball")

    def test_malformed_field_excluded_from_that_partition_only(self, make_pitch):
        events = [
            make_pitch(0, count="0-0"),
            make_pitch(1, count="4-1"),
            make_pitch(2, count=None),
        ]

        assert partition(events, "count").sample_size == 1
        assert partition(events, "pitch_type").sample_size == 3

    def test_where_filter(self, make_pitch):
        events = [
            make_pitch(0, batter_side="L", pitch_type="curveball"),
            make_pitch(1, batter_side="R"),
            make_pitch(2, batter_side="L", pitch_type="curveball"),
        ]

        part = partition(events, "pitch_type", where=lambda e: e.batter_side == "L")

        assert part.counts == {"curveball": 2}

    def test_conjunction_key(self, make_pitch):
        events = [
            make_pitch(0, batter_side="L"),
            make_pitch(1, batter_side="R"),
            make_pitch(2, batter_side="R"),
        ]

        part = partition(events, ("pitch_type", "batter_side"))

        assert part.key == "pitch_type+batter_side"
        assert part.counts == {"fastball|L": 1, "fastball|R": 2}

    def test_callable_key(self, make_sequence):
        events = make_sequence(["strike", "ball", "ball"])

        def is_ball(event):
            return event.result == "ball"

        part = partition(events, is_ball)

        assert part.key == "is_ball"
        assert part.counts == {False: 1, True: 2}

    def test_unknown_key_raises(self, make_sequence):
        with pytest.raises(KeyError):
            partition(make_sequence(["strike"]), "spin_rate")

    def test_half_inning_labels(self, make_pitch):
        events = [
            make_pitch(0, inning=3, is_top_half=True),
            make_pitch(1, inning=3, is_top_half=False),
        ]

        assert partition(events, "half_inning").categories == ("Top-3", "Bottom-3")

    def test_counts_sum_to_sample_size(self, make_pitch):
        events = [
            make_pitch(i, pitch_type=t, count=c)
            for i, (t, c) in enumerate([
                ("fastball", "0-0"), ("curveball", "1-0"), ("fastball", "1-1"),
                ("changeup", "bad"), ("fastball", "3-2"), ("curveball", "0-0"),
            ])
        ]

        for key in ("pitch_type", "count", "result", "outs", "batter_side"):
            part = partition(events, key)
            assert sum(part.counts.values()) == part.sample_size
            assert abs(sum(part.percentages.values()) - 100) <= len(part.counts)


class TestDominant:
    """Test dominant category selection."""

    def test_highest_count_wins(self, make_sequence):
        events = make_sequence(["strike"] * 3, ["curveball", "fastball", "fastball"])

        assert partition(events, "pitch_type").dominant() == ("fastball", 67)

    def test_tie_goes_to_first_encountered(self, make_sequence):
        events = make_sequence(["strike"] * 4, ["curveball", "fastball", "fastball", "curveball"])

        assert partition(events, "pitch_type").dominant() == ("curveball", 50)


class TestPartitionHelpers:
    """Test grouped and merged partitions."""

    def test_partition_within_groups(self, make_pitch):
        events = [
            make_pitch(0, outs=0, pitch_type="fastball"),
            make_pitch(1, outs=1, pitch_type="curveball"),
            make_pitch(2, outs=0, pitch_type="curveball"),
            make_pitch(3, outs=7, pitch_type="curveball"),
        ]

        groups = partition_within(events, "outs")

        assert list(groups) == [0, 1]
        assert groups[0].percentages == {"fastball": 50, "curveball": 50}
        assert groups[1].counts == {"curveball": 1}

    def test_merge_partitions(self):
        first = Partition("count", {"slider": 2}, {"slider": 100}, 2)
        second = Partition("count", {"fastball": 1, "slider": 1}, {"fastball": 50, "slider": 50}, 2)

        merged = merge_partitions([first, second], "two_strike_counts")

        assert merged.counts == {"slider": 3, "fastball": 1}
        assert merged.percentages == {"slider": 75, "fastball": 25}
        assert merged.sample_size == 4

    def test_merge_nothing(self):
        assert not merge_partitions([], "empty").has_data


class TestChronological:
    """Test event ordering."""

    def test_mixed_timestamp_types(self, make_pitch):
        iso = make_pitch(0, timestamp="2024-05-01T10:00:00Z")
        aware = make_pitch(1, timestamp=datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc))
        epoch = make_pitch(2, timestamp=1000.0)

        assert chronological([iso, aware, epoch]) == [epoch, aware, iso]

    def test_missing_and_unparseable_go_last_in_order(self, make_pitch):
        garbage = make_pitch(0, timestamp="yesterday")
        missing = make_pitch(1, timestamp=None)
        stamped = make_pitch(2, timestamp=5.0)

        assert chronological([garbage, missing, stamped]) == [stamped, garbage, missing]
