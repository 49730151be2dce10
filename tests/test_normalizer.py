import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.core.config import EncoderConfig
from src.core.limits import DEFAULT_LIMITS, EncoderLimits
from src.core.normalizer import ParameterNormalizer
from src.core.parsers import INT64_MIN

L = DEFAULT_LIMITS


def test_defaults_after_construction():
    config = ParameterNormalizer().config

    assert config.ffmpeg == L.default_ffmpeg_path
    assert config.rate == L.default_frame_rate
    assert config.height == L.default_frame_height
    assert config.width == L.default_frame_width
    assert config.crf == L.default_crf
    assert config.time == L.default_capture_time
    assert config.size == L.default_capture_size
    assert config.profile == L.default_profile
    assert config.level == L.default_level
    assert config.copy is False
    assert config.audio is False


def test_empty_text_yields_defaults():
    n = ParameterNormalizer(EncoderConfig(width=640, height=480, crf=25, time=30, rate=10, size=1000))

    assert n.set_audio("") is False
    assert n.set_profile("") == L.default_profile
    assert n.set_level("") == L.default_level
    assert n.set_height("") == L.default_frame_height
    assert n.set_width("") == L.default_frame_width
    assert n.set_crf("") == L.default_crf
    assert n.set_time("") == L.default_capture_time
    assert n.set_rate("") == L.default_frame_rate
    assert n.set_size("") == L.default_capture_size


def test_values_above_maximum_are_capped():
    n = ParameterNormalizer()

    assert n.set_height("9000") == L.maximum_frame_size
    assert n.set_width("9000") == L.maximum_frame_size
    assert n.set_crf("9000") == L.maximum_crf
    assert n.set_time("9000") == L.maximum_capture_time
    assert n.set_rate("9000") == L.maximum_frame_rate
    assert n.set_size("999999999") == L.maximum_capture_size
    assert n.set_size("99999999999999999999") == L.maximum_capture_size


def test_values_below_minimum_are_raised():
    n = ParameterNormalizer()

    assert n.set_height("1") == L.minimum_frame_size
    assert n.set_width("1") == L.minimum_frame_size
    assert n.set_crf("1") == L.minimum_crf
    assert n.set_rate("-1") == L.minimum_frame_rate


def test_negative_duration_and_size_pass_through():
    n = ParameterNormalizer()

    assert n.set_time("-5") == -5
    assert n.set_size("-1") == -1
    assert n.config.time == -5


def test_very_long_numbers_are_coerced_not_rejected():
    n = ParameterNormalizer()

    assert n.set_size("9" * 5000) == L.maximum_capture_size
    assert n.set_width("9" * 5000) == L.maximum_frame_size
    assert n.set_time("-" + "9" * 5000) == INT64_MIN


def test_in_range_values_are_kept():
    n = ParameterNormalizer()

    assert n.set_width("1920") == 1920
    assert n.set_height("1080") == 1080
    assert n.set_crf("23") == 23
    assert n.set_rate("15") == 15
    assert n.set_time("60") == 60
    assert n.set_size("5000000") == 5000000


def test_profile_and_level_enumerations():
    n = ParameterNormalizer()

    assert n.set_profile("garbage") == L.default_profile
    assert n.set_profile("baseline") == "baseline"
    assert n.set_profile("Baseline") == L.default_profile
    assert n.set_level("9.9") == L.default_level
    assert n.set_level("4.0") == "4.0"
    assert n.set_level("4") == L.default_level


def test_set_audio_parses_boolean_text():
    n = ParameterNormalizer()

    assert n.set_audio("true") is True
    assert n.set_audio("1") is True
    assert n.set_audio("nope") is False


def test_set_copy_parses_boolean_text():
    n = ParameterNormalizer(EncoderConfig(copy=True))

    assert n.config.copy is True
    assert n.set_copy("0") is False
    assert n.set_copy("t") is True
    assert n.set_copy("maybe") is False


def test_construction_normalizes_overrides():
    n = ParameterNormalizer(EncoderConfig(width=9000, height=10, crf=50, rate=200, time=5000, profile="x", level="5.1"))
    config = n.config

    assert config.width == L.maximum_frame_size
    assert config.height == L.minimum_frame_size
    assert config.crf == L.maximum_crf
    assert config.rate == L.maximum_frame_rate
    assert config.time == L.maximum_capture_time
    assert config.profile == L.default_profile
    assert config.level == L.default_level


def test_clamp_pass_is_idempotent():
    n = ParameterNormalizer(EncoderConfig(width=50, crf=99, time=-3))
    before = n.config

    n.normalize()
    n.normalize()

    assert n.config == before


def test_each_setter_heals_the_whole_record():
    n = ParameterNormalizer()
    n._config.crf = 0
    n._config.width = 99999

    n.set_rate("10")

    assert n.config.crf == L.default_crf
    assert n.config.width == L.maximum_frame_size


def test_config_is_a_snapshot_not_a_live_reference():
    caller_config = EncoderConfig(width=640)
    n = ParameterNormalizer(caller_config)

    snapshot = n.config
    snapshot.width = 4000
    caller_config.width = 3000

    assert n.config.width == 640
    # The caller's record is copied, never normalized in place.
    assert caller_config.ffmpeg == ""


def test_custom_limits():
    limits = EncoderLimits(maximum_frame_size=2000, default_profile="high", default_ffmpeg_path="/opt/ffmpeg")
    n = ParameterNormalizer(limits=limits)

    assert n.config.ffmpeg == "/opt/ffmpeg"
    assert n.config.profile == "high"
    assert n.set_width("9000") == 2000
