"""
Unit tests for ChannelConfig parsing.
"""

import math

import pytest

from plantstation.domain.channel_config import ChannelConfig, parse_channel_configs
from plantstation.domain.exceptions import ConfigIncompleteError

RECORD = {"hour": 7, "start": 2000, "max": 20000, "low": 1400, "dst": 1500, "range": 100}


class TestFromMapping:
    def test_full_record(self):
        config = ChannelConfig.from_mapping(RECORD)
        assert (config.low, config.dst, config.range, config.max) == (1400, 1500, 100, 20000)
        assert (config.water_hour, config.water_start) == (7, 2000)

    def test_schedule_fields_optional(self):
        config = ChannelConfig.from_mapping({"low": 1, "dst": 2, "range": 1, "max": 10})
        assert config.water_hour is None

    def test_band(self):
        assert ChannelConfig.from_mapping(RECORD).band == (1400, 1600)

    def test_null_threshold_counts_as_missing(self):
        with pytest.raises(ConfigIncompleteError) as exc_info:
            ChannelConfig.from_mapping({**RECORD, "dst": None})
        assert exc_info.value.detail["missing"] == ["dst"]

    @pytest.mark.parametrize("bad", [True, "1500", [1500], math.inf])
    def test_non_numeric_threshold(self, bad):
        with pytest.raises(ConfigIncompleteError):
            ChannelConfig.from_mapping({**RECORD, "low": bad})

    def test_not_a_mapping(self):
        with pytest.raises(ConfigIncompleteError):
            ChannelConfig.from_mapping([1400, 1500], channel_index=0)

    def test_to_dict_uses_station_keys(self):
        assert ChannelConfig.from_mapping(RECORD).to_dict() == RECORD


class TestParseChannelConfigs:
    def test_none(self):
        assert parse_channel_configs(None) == ()

    def test_single_record(self):
        (config,) = parse_channel_configs(RECORD)
        assert config.dst == 1500

    def test_list_keeps_order(self):
        configs = parse_channel_configs([RECORD, {**RECORD, "dst": 900}])
        assert [c.dst for c in configs] == [1500, 900]

    def test_error_names_channel(self):
        with pytest.raises(ConfigIncompleteError) as exc_info:
            parse_channel_configs([RECORD, {"low": 1}])
        assert exc_info.value.detail["channel"] == 1

    def test_wrong_type(self):
        with pytest.raises(ConfigIncompleteError):
            parse_channel_configs("low=1")
