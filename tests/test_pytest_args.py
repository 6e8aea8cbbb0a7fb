"""Tests for the pytest argument codec — decode, encode, round-trip, process options."""

import logging

import pytest

from pytest_config.core.pytest_args import (
    ARG_OPTION_DEFS,
    BROWSERS,
    RECORDING_MODES,
    TRACEBACK_STYLES,
    VERBOSITY_LEVELS,
    PytestConfig,
    decode,
    derive_process_options,
    encode,
    normalize,
)


FULL_CONFIG = PytestConfig(
    traceback_style="long",
    num_processes="4",
    verbosity="very-verbose",
    capture_output=True,
    show_locals=True,
    browser="firefox",
    show_browser=True,
    slow_motion=True,
    tracing="retain-on-failure",
    video="on",
    wait_for_debugger_attach=True,
)

FULL_ARGS = [
    "--tb=long",
    "--numprocesses=4",
    "-vvv",
    "-s",
    "--showlocals",
    "--headed",
    "--delve=1",
    "--browser=firefox",
    "--slowmo",
    "--tracing=retain-on-failure",
    "--video=on",
]


class TestDecode:
    def test_empty_list_is_zero_config(self):
        assert decode([]) == PytestConfig()

    def test_value_options(self):
        config = decode(["--numprocesses=auto", "--browser=chromium", "--headed"])
        assert config == PytestConfig(num_processes="auto", browser="chromium", show_browser=True)

    def test_every_token(self):
        assert decode(FULL_ARGS) == FULL_CONFIG

    def test_any_order(self):
        assert decode(list(reversed(FULL_ARGS))) == FULL_CONFIG

    @pytest.mark.parametrize(
        "token, level",
        [("-q", "quiet"), ("-v", "verbose"), ("-vv", "more-verbose"), ("-vvv", "very-verbose")],
    )
    def test_verbosity_flags(self, token, level):
        assert decode([token]).verbosity == level

    def test_last_verbosity_flag_wins(self):
        assert decode(["-q", "-vv"]).verbosity == "more-verbose"
        assert decode(["-vvv", "-q"]).verbosity == "quiet"

    def test_unknown_tokens_are_dropped(self):
        assert decode(["--foo=bar", "-q"]) == PytestConfig(verbosity="quiet")

    def test_near_misses_are_dropped(self):
        config = decode(["-vvvv", "--delve=0", "--slowmo=100", "--tb", "tests/", "-x"])
        assert config == PytestConfig()

    def test_suffix_keeps_everything_after_prefix(self):
        assert decode(["--tb=a=b"]).traceback_style == "a=b"

    def test_sentinel_suffix_is_absent(self):
        assert decode(["--tb=none", "--browser=", "--video=none"]) == PytestConfig()

    def test_later_sentinel_clears_earlier_value(self):
        assert decode(["--tracing=on", "--tracing=none"]).tracing is None

    def test_out_of_domain_values_pass_through(self):
        assert decode(["--browser=msedge"]).browser == "msedge"

    def test_non_string_items_are_ignored(self):
        assert decode(["-s", None, 3, "--headed"]) == PytestConfig(
            capture_output=True, show_browser=True
        )

    def test_accepts_any_iterable(self):
        assert decode(iter(["-s"])) == PytestConfig(capture_output=True)

    def test_returns_fresh_instances(self):
        assert decode([]) is not decode([])

    def test_logs_dropped_tokens_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="pytest_config.core.pytest_args"):
            decode(["--maxfail=2"])
        assert any("--maxfail=2" in r.getMessage() for r in caplog.records)


class TestEncode:
    def test_zero_config_is_empty(self):
        assert encode(PytestConfig()) == []

    def test_concrete_scenario(self):
        config = PytestConfig(traceback_style="short", verbosity="verbose", capture_output=True)
        assert encode(config) == ["--tb=short", "-v", "-s"]

    def test_canonical_order(self):
        assert encode(FULL_CONFIG) == FULL_ARGS

    def test_order_independent_of_construction_order(self):
        a = PytestConfig(video="on", capture_output=True, traceback_style="no")
        b = PytestConfig(traceback_style="no", capture_output=True, video="on")
        assert encode(a) == encode(b) == ["--tb=no", "-s", "--video=on"]

    @pytest.mark.parametrize("sentinel", ["none", ""])
    def test_sentinels_emit_nothing(self, sentinel):
        config = PytestConfig(
            traceback_style=sentinel,
            num_processes=sentinel,
            verbosity=sentinel,
            browser=sentinel,
            tracing=sentinel,
            video=sentinel,
        )
        assert encode(config) == []

    def test_unrecognized_verbosity_emits_nothing(self):
        assert encode(PytestConfig(verbosity="loud")) == []

    def test_out_of_domain_values_are_not_validated(self):
        assert encode(PytestConfig(browser="msedge", num_processes="64")) == [
            "--numprocesses=64",
            "--browser=msedge",
        ]

    def test_option_table_matches_config_fields(self):
        keys = [opt.key for opt in ARG_OPTION_DEFS]
        assert sorted(keys) == sorted(PytestConfig.__dataclass_fields__)


class TestRoundTrip:
    @pytest.mark.parametrize("style", TRACEBACK_STYLES)
    def test_traceback_styles(self, style):
        config = PytestConfig(traceback_style=style)
        assert decode(encode(config)) == config

    @pytest.mark.parametrize("level", VERBOSITY_LEVELS)
    def test_verbosity_levels(self, level):
        config = PytestConfig(verbosity=level, show_locals=True)
        assert decode(encode(config)) == config

    @pytest.mark.parametrize("browser", BROWSERS)
    def test_browsers(self, browser):
        config = PytestConfig(browser=browser, show_browser=True, slow_motion=True)
        assert decode(encode(config)) == config

    @pytest.mark.parametrize("mode", RECORDING_MODES)
    def test_recording_modes(self, mode):
        config = PytestConfig(tracing=mode, video=mode)
        assert decode(encode(config)) == config

    def test_full_config(self):
        assert decode(encode(FULL_CONFIG)) == FULL_CONFIG

    def test_zero_config(self):
        assert decode(encode(PytestConfig())) == PytestConfig()

    def test_sentinel_config_round_trips_to_normalized(self):
        config = PytestConfig(traceback_style="none", browser="", capture_output=True)
        assert decode(encode(config)) == normalize(config)

    def test_unknown_tokens_do_not_survive(self):
        assert encode(decode(["--lf", "-s", "-k", "smoke"])) == ["-s"]


class TestNormalize:
    def test_maps_sentinels_to_none(self):
        config = PytestConfig(traceback_style="none", num_processes="", tracing="on")
        assert normalize(config) == PytestConfig(tracing="on")

    def test_normalized_config_is_unchanged(self):
        assert normalize(FULL_CONFIG) is FULL_CONFIG


class TestDeriveProcessOptions:
    @pytest.mark.parametrize("cores", [0, 1, 2])
    def test_small_hosts_get_base_options(self, cores):
        assert derive_process_options(cores) == ["none", "auto", "1"]

    def test_even_core_count(self):
        assert derive_process_options(8) == ["none", "auto", "1", "2", "4", "6", "8"]

    def test_odd_core_count_appends_itself(self):
        assert derive_process_options(7) == ["none", "auto", "1", "2", "4", "6", "7"]

    def test_three_cores(self):
        assert derive_process_options(3) == ["none", "auto", "1", "2", "3"]
