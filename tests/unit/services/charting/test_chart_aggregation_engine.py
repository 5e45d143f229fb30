"""
Unit tests for ChartAggregationEngine.

Covers:
- Two-probe hourly and minute payloads built from one snapshot
- Single-probe payload with a moisture average overlay
- Unequal series lengths, missing configs, malformed snapshots
- Purity: no input mutation, equal output for equal input
"""

from __future__ import annotations

import copy

import pytest

from plantstation.domain.chart_layout import DUAL_LAYOUT
from plantstation.domain.exceptions import ConfigIncompleteError, MalformedInputError, ValidationError
from plantstation.schemas.telemetry import StationSnapshot


class TestDualLayout:
    def test_labels_wrap_across_midnight(self, engine, dual_snapshot):
        payload = engine.build(dual_snapshot, "dual")
        assert payload.labels == (22, 23, 0, 1, 2)
        assert payload.window_end == 2
        assert payload.resolution == "hour"

    def test_raw_series_are_scaled(self, engine, dual_snapshot):
        payload = engine.build(dual_snapshot, "dual")
        assert payload.series_by_name("weight_1").data == (100, 98, 96, 110, 108)
        assert payload.series_by_name("water_1").data == (0, 0, 0.5, 0, 0)
        assert payload.series_by_name("temperature").data == (20, 21, 22, 23, 24)
        assert payload.series_by_name("humidity").data[0] == 50

    def test_average_overlay_per_plant(self, engine, dual_snapshot):
        payload = engine.build(dual_snapshot, "dual")
        assert payload.series_by_name("weight_1_avg").data == (98, 98, 98, 109, 109)
        assert payload.series_by_name("weight_2_avg").data == (190,) * 5

    def test_every_series_matches_label_count(self, engine, dual_snapshot):
        payload = engine.build(dual_snapshot, "dual")
        assert all(len(series.data) == payload.length for series in payload.series)

    def test_shared_weight_axis_takes_widest_range(self, engine, dual_snapshot):
        payload = engine.build(dual_snapshot, "dual")
        weight = payload.axis("weight-y-axis")
        # plant 1: 80..120, plant 2: 150..220
        assert (weight.suggested_min, weight.suggested_max) == (80, 220)
        water = payload.axis("water-y-axis")
        assert (water.min, water.max) == (0, 20)

    def test_static_axes_kept(self, engine, dual_snapshot):
        payload = engine.build(dual_snapshot, "dual")
        temperature = payload.axis("temp-y-axis")
        assert (temperature.suggested_min, temperature.suggested_max) == (10, 30)

    def test_four_lines_per_configured_channel(self, engine, dual_snapshot):
        payload = engine.build(dual_snapshot, "dual")
        assert [line.y for line in payload.reference_lines] == [100, 110, 90, 105, 185, 205, 170, 195]
        assert payload.reference_lines[2].style != payload.reference_lines[6].style

    def test_summaries(self, engine, dual_snapshot):
        plant1, plant2 = engine.build(dual_snapshot, "dual").summaries
        assert (plant1.channel, plant1.samples_since_watering, plant1.dryout_per_day) == ("plant1", 2, 48)
        assert plant1.average_since_watering == 109
        assert (plant2.samples_since_watering, plant2.average_since_watering) == (5, 190)
        assert plant2.dryout_per_day == 120

    def test_watering_time_refitted_from_station_calibration(self, engine, dual_snapshot):
        plant1, plant2 = engine.build(dual_snapshot, "dual").summaries
        assert (plant1.watering_scale, plant1.watering_offset, plant1.watering_fitted) == (35, 10, True)
        assert (plant2.watering_scale, plant2.watering_offset, plant2.watering_fitted) == (0, 0, False)

    def test_watering_time_without_station_calibration(self, engine, dual_snapshot):
        del dual_snapshot["watertime"]
        plant1 = engine.build(dual_snapshot, "dual").summaries[0]
        assert (plant1.watering_scale, plant1.watering_offset, plant1.watering_fitted) == (0, 0, False)

    def test_accepts_layout_object_and_validated_snapshot(self, engine, dual_snapshot):
        snapshot = StationSnapshot.model_validate(dual_snapshot)
        assert engine.build(snapshot, DUAL_LAYOUT) == engine.build(dual_snapshot, "dual")


class TestNullProbes:
    """The station sends a probe without samples as null inside the per-probe array."""

    def test_null_minute_water_builds_both_resolutions(self, engine, dual_snapshot):
        dual_snapshot["mindata"]["water"] = [None, None]
        charts = engine.build_many(dual_snapshot, ["dual", "dual-minute"])
        assert charts["dual-minute"].series_by_name("weight_1").data == (108, 108, 107)
        assert charts["dual"].length == 5

    def test_null_weight_probe_after_startup(self, engine, dual_snapshot):
        dual_snapshot["data"]["weight"][1] = None
        payload = engine.build(dual_snapshot, "dual")
        assert payload.series_by_name("weight_2").data == (None,) * 5
        assert payload.series_by_name("weight_2_avg").data == (None,) * 5
        assert payload.series_by_name("weight_1").data == (100, 98, 96, 110, 108)
        plant2 = payload.summaries[1]
        assert (plant2.average_since_watering, plant2.dryout_per_day) == (None, 0)

    def test_null_water_probe_means_no_watering(self, engine, dual_snapshot):
        dual_snapshot["data"]["water"][0] = None
        payload = engine.build(dual_snapshot, "dual")
        assert payload.series_by_name("water_1").data == (None,) * 5
        assert payload.series_by_name("weight_1_avg").data == (102.4,) * 5
        assert payload.summaries[0].samples_since_watering == 5

    def test_all_probes_null_gives_empty_chart(self, engine, dual_snapshot):
        data = dual_snapshot["data"]
        data["weight"] = data["water"] = [None, None]
        data["temperature"] = data["humidity"] = []
        payload = engine.build(dual_snapshot, "dual")
        assert payload.labels == ()
        assert all(series.data == () for series in payload.series)


class TestMinuteLayout:
    def test_minute_labels_and_medians(self, engine, dual_snapshot):
        payload = engine.build(dual_snapshot, "dual-minute")
        assert payload.labels == (28, 29, 30)
        assert [s.hour_median for s in payload.summaries] == [108, 180]
        assert payload.summaries[0].samples_since_watering is None

    def test_no_water_series_or_average(self, engine, dual_snapshot):
        names = [series.name for series in engine.build(dual_snapshot, "dual-minute").series]
        assert names == ["weight_1", "weight_2", "temperature", "humidity"]

    def test_build_many_uses_one_snapshot(self, engine, dual_snapshot):
        charts = engine.build_many(dual_snapshot, ["dual", "dual-minute"])
        assert list(charts) == ["dual", "dual-minute"]
        assert charts["dual"].labels[-1] == 2
        assert charts["dual-minute"].labels[-1] == 30

    def test_missing_minute_section(self, engine, dual_snapshot):
        del dual_snapshot["mindata"]
        with pytest.raises(MalformedInputError, match="mindata"):
            engine.build(dual_snapshot, "dual-minute")


class TestSingleLayout:
    def test_moisture_average_and_axes(self, engine, single_snapshot):
        payload = engine.build(single_snapshot, "single")
        assert payload.labels == (20, 21, 22, 23)
        assert payload.series_by_name("moisture_avg").data == (42, 42, 42, 30)
        moisture = payload.axis("moist-y-axis")
        assert (moisture.suggested_min, moisture.suggested_max) == (10, 60)
        water = payload.axis("water-y-axis")
        assert (water.min, water.max) == (0, 2)
        assert [line.y for line in payload.reference_lines] == [45, 55, 20, 50]

    def test_pulses_shown_in_seconds(self, engine, single_snapshot):
        payload = engine.build(single_snapshot, "single")
        assert payload.series_by_name("water").data == (0, 0, 1.5, 0)
        assert payload.series_by_name("water").kind == "bar"


class TestUnequalLengths:
    def test_short_series_padded_at_the_head(self, engine, dual_snapshot):
        dual_snapshot["data"]["weight"][0] = [96, 110, 108]
        dual_snapshot["data"]["water"][0] = [500, 0, 0]
        payload = engine.build(dual_snapshot, "dual")
        assert payload.length == 5
        assert payload.series_by_name("weight_1").data == (None, None, 96, 110, 108)
        assert payload.series_by_name("weight_1_avg").data == (96, 96, 96, 109, 109)

    def test_longest_series_sets_length(self, engine, dual_snapshot):
        dual_snapshot["data"]["temperature"].append(2500)
        payload = engine.build(dual_snapshot, "dual")
        assert payload.labels == (21, 22, 23, 0, 1, 2)
        assert payload.series_by_name("weight_2").data[0] is None


class TestConfigs:
    def test_no_config_means_no_lines(self, engine, dual_snapshot):
        dual_snapshot["config"] = None
        payload = engine.build(dual_snapshot, "dual")
        assert payload.reference_lines == ()
        assert payload.axis("weight-y-axis").suggested_min is None

    def test_missing_record_skips_channel(self, engine, dual_snapshot):
        dual_snapshot["config"] = dual_snapshot["config"][:1]
        payload = engine.build(dual_snapshot, "dual")
        assert len(payload.reference_lines) == 4

    def test_incomplete_record_rejected(self, engine, dual_snapshot):
        del dual_snapshot["config"][1]["range"]
        with pytest.raises(ConfigIncompleteError):
            engine.build(dual_snapshot, "dual")


class TestMalformedInput:
    def test_missing_probe(self, engine, dual_snapshot):
        dual_snapshot["data"]["weight"] = dual_snapshot["data"]["weight"][:1]
        with pytest.raises(MalformedInputError) as exc_info:
            engine.build(dual_snapshot, "dual")
        assert exc_info.value.detail == {"series": "weight[1]"}

    def test_flat_array_where_probes_expected(self, engine, dual_snapshot):
        dual_snapshot["data"]["weight"] = [1, 2, 3, 4, 5]
        with pytest.raises(MalformedInputError):
            engine.build(dual_snapshot, "dual")

    def test_non_numeric_sample(self, engine, dual_snapshot):
        dual_snapshot["data"]["temperature"][1] = "warm"
        with pytest.raises(MalformedInputError) as exc_info:
            engine.build(dual_snapshot, "dual")
        assert exc_info.value.detail["errors"]

    def test_time_outside_modulus(self, engine, dual_snapshot):
        dual_snapshot["data"]["time"] = 24
        with pytest.raises(MalformedInputError):
            engine.build(dual_snapshot, "dual")

    def test_not_an_object(self, engine):
        with pytest.raises(MalformedInputError):
            engine.build([1, 2, 3], "dual")

    def test_unknown_layout(self, engine, dual_snapshot):
        with pytest.raises(ValidationError) as exc_info:
            engine.build(dual_snapshot, "triple")
        assert "dual" in exc_info.value.detail["available"]


class TestPurity:
    def test_input_not_mutated(self, engine, dual_snapshot):
        before = copy.deepcopy(dual_snapshot)
        engine.build_many(dual_snapshot, ["dual", "dual-minute"])
        assert dual_snapshot == before

    def test_same_input_same_payload(self, engine, dual_snapshot):
        assert engine.build(dual_snapshot, "dual").to_dict() == engine.build(dual_snapshot, "dual").to_dict()
