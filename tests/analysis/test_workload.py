"""Tests for pitch count workload summaries."""

import pytest

from analysis.scouting.workload import (
    estimate_pitches_per_batter,
    inning_breakdown,
    pitch_count_status,
    summarize_workload,
)


class TestPitchCountStatus:
    """Test pitch count status bands."""

    @pytest.mark.parametrize("total,status", [
        (0, "fresh"), (59, "fresh"), (60, "caution"), (79, "caution"), (80, "limit"), (95, "limit"),
    ])
    def test_bands(self, total, status):
        assert pitch_count_status(total) == status


class TestEstimates:
    """Test estimated per-batter figures."""

    def test_pitches_per_batter(self):
        assert estimate_pitches_per_batter(20) == 3.3
        assert estimate_pitches_per_batter(4) == 2.0
        assert estimate_pitches_per_batter(0) == 0.0


class TestSummarizeWorkload:
    """Test the workload summary."""

    def test_empty(self):
        assert summarize_workload([]) is None

    def test_per_inning_and_projection(self, make_sequence):
        events = make_sequence(["strike"] * 10, inning=1) + make_sequence(["ball"] * 10, start=10, inning=2)

        summary = summarize_workload(events)

        assert summary.total_pitches == 20
        assert summary.pitch_limit == 95
        assert summary.status == "fresh"
        assert summary.strike_percentage == 50
        assert [(w.half_inning, w.pitches) for w in summary.pitches_per_inning] == [("Top-1", 10), ("Top-2", 10)]
        assert summary.average_per_inning == 10.0
        assert summary.projected_innings_remaining == 7
        assert summary.pitches_per_batter == 3.3

    def test_projection_never_negative(self, make_sequence):
        summary = summarize_workload(make_sequence(["strike"] * 100))

        assert summary.projected_innings_remaining == 0
        assert summary.status == "limit"

    def test_times_through_order(self, make_sequence):
        events = make_sequence(["strike"] * 30, ["fastball"] * 25 + ["curveball"] * 5)

        summary = summarize_workload(events)

        assert summary.first_time_through.pitch_type == "fastball"
        assert summary.first_time_through.percentage == 100
        assert summary.second_time_through.pitch_type == "curveball"
        assert summary.second_time_through.sample_size == 5

    def test_no_second_time_through_early(self, make_sequence):
        summary = summarize_workload(make_sequence(["strike"] * 25))

        assert summary.second_time_through is None


class TestInningBreakdown:
    """Test per-inning breakdown."""

    def test_breakdown_in_inning_order(self, make_sequence):
        events = (
            make_sequence(["strike"] * 3, ["curveball"] * 3, start=10, inning=2)
            + make_sequence(["strike", "ball"], ["fastball", "slider"], inning=1)
        )

        breakdown = inning_breakdown(events)

        assert [b.inning for b in breakdown] == [1, 2]
        assert breakdown[0].strike_percentage == 50
        assert breakdown[0].pitch_mix == {"fastball": 50, "slider": 50}
        assert breakdown[0].dominant_pitch_type == "fastball"
        assert breakdown[1].dominant_pitch_type == "curveball"
        assert breakdown[1].dominant_share == 100
