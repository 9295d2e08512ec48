"""Tests for the scouting analyzer facade."""

import json

import pytest

import analysis.scouting as scouting
from analysis.scouting.analyzer import (
    COUNT_ORDER,
    ScoutingAnalyzer,
    count_leverage,
    outcome_rates,
    pitch_effectiveness,
    quality_tier,
)
from analysis.scouting.event_store import InMemoryEventStore
from configs.settings import SampleSizeConfig, ScoutingConfig


@pytest.fixture
def analyzer():
    return ScoutingAnalyzer()


class TestAnalyze:
    """Test tendency analysis."""

    def test_empty_input(self, analyzer):
        result = analyzer.analyze([])

        assert not result.has_data
        assert result.message == "No pitch data available"
        assert analyzer.analyze([]) == result

    def test_all_fastball_first_pitch_strikes(self, analyzer, make_sequence):
        result = analyzer.analyze(make_sequence(["strike"] * 15, count="0-0"))

        assert result.pitch_type_percentages == {"fastball": 100}
        first = result.predictions["first_pitch"]
        assert (first.pitch_type, first.confidence) == ("fastball", 100)
        assert result.quality == "medium"

    def test_ten_events_half_strikes(self, analyzer, make_sequence):
        result = analyzer.analyze(make_sequence(["strike"] * 5 + ["ball"] * 5))

        assert result.result_percentages["strike"] == 50
        assert result.rates.strike_percentage == 50
        assert result.quality == "medium"

    @pytest.mark.parametrize("total,quality", [(1, "low"), (9, "low"), (10, "medium"), (19, "medium"), (20, "high")])
    def test_quality_tiers(self, total, quality):
        assert quality_tier(total) == quality

    def test_idempotent(self, analyzer, make_pitch):
        events = [
            make_pitch(i, pitch_type=t, count=c, result=r)
            for i, (t, c, r) in enumerate([
                ("fastball", "0-0", "strike"), ("curveball", "0-1", "ball"),
                ("fastball", "1-1", "foul"), ("changeup", "1-2", "hit"),
            ])
        ]

        assert analyzer.analyze(events) == analyzer.analyze(events)
        assert analyzer.analyze(events).to_dict() == analyzer.analyze(events).to_dict()

    def test_does_not_mutate_input(self, analyzer, make_sequence):
        events = list(reversed(make_sequence(["strike", "ball", "foul"])))
        snapshot = list(events)

        analyzer.analyze(events)
        analyzer.assess_fatigue(events)
        analyzer.build_advice(events)

        assert events == snapshot

    def test_malformed_event_counts_in_total(self, analyzer, make_pitch):
        events = [make_pitch(0), make_pitch(1, count="9-9", pitch_type=None)]

        result = analyzer.analyze(events)

        assert result.total_pitches == 2
        assert result.partition("count").sample_size == 1
        assert result.partition("pitch_type").sample_size == 1
        assert result.partition("result").sample_size == 2

    def test_counts_sum_to_sample_size(self, analyzer, make_pitch):
        events = [
            make_pitch(i, count=f"{i % 4}-{i % 3}", outs=i % 3, batter_side="LR"[i % 2],
                       pitch_type=["fastball", "curveball", "changeup"][i % 3])
            for i in range(25)
        ]

        result = analyzer.analyze(events)

        for part in list(result.partitions.values()) + list(result.count_matrix.values()):
            assert sum(part.counts.values()) == part.sample_size
            assert abs(sum(part.percentages.values()) - 100) <= len(part.counts)
        for prediction in result.predictions.values():
            part = result.partition(prediction.situation)
            assert prediction.confidence == part.percentages[prediction.pitch_type]

    def test_count_matrix_order(self, analyzer, make_pitch):
        events = [make_pitch(0, count="3-2"), make_pitch(1, count="0-1"), make_pitch(2, count="1-0")]

        result = analyzer.analyze(events)

        assert list(result.count_matrix) == ["0-1", "1-0", "3-2"]
        assert COUNT_ORDER[0] == "0-0" and COUNT_ORDER[-1] == "3-2"

    def test_pitch_types_by_outs(self, analyzer, make_pitch):
        events = [make_pitch(0, outs=2, pitch_type="slider"), make_pitch(1, outs=0)]

        result = analyzer.analyze(events)

        assert list(result.pitch_types_by_outs) == [0, 2]
        assert result.pitch_types_by_outs[2].counts == {"slider": 1}

    def test_scope_ids(self, analyzer, make_pitch):
        single = analyzer.analyze([make_pitch(0)])
        mixed = analyzer.analyze([make_pitch(0), make_pitch(1, game_id="g2")])

        assert (single.pitcher_id, single.game_id) == ("p1", "g1")
        assert (mixed.pitcher_id, mixed.game_id) == ("p1", None)

    def test_custom_sample_minimums(self, make_sequence):
        config = ScoutingConfig(samples=SampleSizeConfig(first_pitch=20))

        result = ScoutingAnalyzer(config).analyze(make_sequence(["strike"] * 15))

        assert "first_pitch" not in result.predictions

    def test_json_serializable(self, analyzer, make_sequence):
        result = analyzer.analyze(make_sequence(["strike", "ball"] * 8))

        data = json.loads(json.dumps(result.to_dict()))

        assert data["has_data"] is True
        assert data["partitions"]["pitch_type"]["percentages"] == {"fastball": 100}
        assert data["pitch_types_by_outs"]["0"]["sample_size"] == 16


class TestExtendedStatistics:
    """Test count leverage and outcome rates."""

    def test_count_leverage(self, make_pitch):
        events = [
            make_pitch(0, count="0-0"), make_pitch(1, count="0-1"), make_pitch(2, count="2-1"),
            make_pitch(3, count="1-1"), make_pitch(4, count="bad"),
        ]

        leverage = count_leverage(events)

        assert (leverage.ahead, leverage.behind, leverage.even) == (1, 1, 2)

    def test_outcome_rates(self, make_sequence):
        events = make_sequence(["strike", "ball", "foul", "swinging_strike", "hit", "out", "out", "ball"])

        rates = outcome_rates(events)

        assert rates.strike_percentage == 63  # 5 of 8
        assert rates.contact_rate == 50
        assert rates.swing_and_miss_rate == 13
        assert rates.hit_rate == 25
        assert rates.out_rate == 50

    def test_pitch_effectiveness(self, make_sequence):
        events = make_sequence(
            ["swinging_strike", "ball", "strike", "ball"],
            ["curveball", "curveball", "fastball", "fastball"],
        )

        effectiveness = pitch_effectiveness(events)

        assert effectiveness["curveball"].strike_percentage == 50
        assert effectiveness["curveball"].swing_and_miss_percentage == 50
        assert effectiveness["fastball"].swing_and_miss_percentage == 0
        assert effectiveness["fastball"].pitches == 2


class TestFacadeEntryPoints:
    """Test fatigue, advice and game entry points."""

    def test_empty_everywhere(self, analyzer):
        assert not analyzer.assess_fatigue([]).has_data
        assert not analyzer.build_advice([]).has_data
        assert not analyzer.analyze_game([]).has_data
        assert analyzer.build_advice([]).message == analyzer.assess_fatigue([]).message

    def test_analyze_game(self, analyzer, make_sequence):
        events = make_sequence(["strike"] * 3, pitcher_id="a") + make_sequence(["ball"] * 2, start=3, pitcher_id="b")

        game = analyzer.analyze_game(events)

        assert game.total_pitches == 5
        assert list(game.pitcher_breakdown) == ["a", "b"]
        assert game.pitcher_breakdown["b"].total_pitches == 2

    def test_scoped_helpers(self, analyzer, make_sequence):
        store = InMemoryEventStore(
            make_sequence(["strike"] * 12, game_id="g1")
            + make_sequence(["ball"] * 4, start=12, game_id="g2")
            + make_sequence(["strike"] * 3, start=16, pitcher_id="p2")
        )

        assert analyzer.analyze_pitcher(store, "p1").total_pitches == 16
        assert analyzer.analyze_pitcher(store, "p1", "g2").total_pitches == 4
        assert analyzer.assess_pitcher_fatigue(store, "p1", "g1").has_data
        assert analyzer.advise_on_pitcher(store, "p2").has_data

    def test_module_level_functions(self, make_sequence):
        events = make_sequence(["strike"] * 12)

        assert scouting.analyze(events).total_pitches == 12
        assert scouting.assess_fatigue(events).has_data
        assert scouting.build_advice(events).has_data

    def test_unhashable_result_is_excluded(self, analyzer, make_sequence, make_pitch):
        events = make_sequence(["strike"] * 11) + [make_pitch(11, result=["strike"])]

        result = analyzer.analyze(events)

        assert result.total_pitches == 12
        assert result.partition("result").sample_size == 11
        assert result.rates.strike_percentage == 100
        assert analyzer.assess_fatigue(events).has_data
        assert analyzer.build_advice(events).has_data

    def test_mixed_timestamp_types(self, analyzer, make_sequence, make_pitch):
        events = make_sequence(["strike"] * 12) + [make_pitch(12, timestamp="2024-05-01T10:00:00")]

        assert analyzer.analyze(events).total_pitches == 13
        assert analyzer.assess_fatigue(events).has_data
        assert analyzer.build_advice(events).has_data
