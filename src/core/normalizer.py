from __future__ import annotations

import dataclasses
import logging
from typing import Optional

from src.core.config import EncoderConfig
from src.core.limits import DEFAULT_LIMITS, EncoderLimits
from src.core.parsers import parse_bool, parse_int


class ParameterNormalizer:
    """
    Owns one EncoderConfig and keeps every field within its bounds.

    Setters accept loose text, coerce it and re-run the full clamp pass, so the
    record can never be observed in an invalid state between calls.
    """

    def __init__(
        self,
        config: Optional[EncoderConfig] = None,
        limits: EncoderLimits = DEFAULT_LIMITS,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.limits = limits
        self._config = dataclasses.replace(config) if config is not None else EncoderConfig()

        if not self._config.ffmpeg:
            self._config.ffmpeg = limits.default_ffmpeg_path

        self.set_level(self._config.level)
        self.set_profile(self._config.profile)
        self.normalize()

    @property
    def config(self) -> EncoderConfig:
        return dataclasses.replace(self._config)

    def set_audio(self, audio: str | bool) -> bool:
        self._config.audio = parse_bool(audio)
        return self._config.audio

    def set_copy(self, copy: str | bool) -> bool:
        self._config.copy = parse_bool(copy)
        return self._config.copy

    def set_level(self, level: str) -> str:
        if level not in self.limits.levels:
            if level:
                self.logger.debug("Unsupported h264 level '%s', using %s", level, self.limits.default_level)
            level = self.limits.default_level
        self._config.level = level
        return self._config.level

    def set_profile(self, profile: str) -> str:
        if profile not in self.limits.profiles:
            if profile:
                self.logger.debug("Unsupported h264 profile '%s', using %s", profile, self.limits.default_profile)
            profile = self.limits.default_profile
        self._config.profile = profile
        return self._config.profile

    def set_width(self, width: str | int) -> int:
        self._config.width = parse_int(width)
        self.normalize()
        return self._config.width

    def set_height(self, height: str | int) -> int:
        self._config.height = parse_int(height)
        self.normalize()
        return self._config.height

    def set_crf(self, crf: str | int) -> int:
        self._config.crf = parse_int(crf)
        self.normalize()
        return self._config.crf

    def set_time(self, seconds: str | int) -> int:
        self._config.time = parse_int(seconds)
        self.normalize()
        return self._config.time

    def set_rate(self, rate: str | int) -> int:
        self._config.rate = parse_int(rate)
        self.normalize()
        return self._config.rate

    def set_size(self, size: str | int) -> int:
        self._config.size = parse_int(size)
        self.normalize()
        return self._config.size

    def normalize(self) -> None:
        """Clamp pass. Idempotent."""
        limits = self.limits
        config = self._config

        config.height = _clamp(
            config.height, limits.default_frame_height, limits.minimum_frame_size, limits.maximum_frame_size
        )
        config.width = _clamp(
            config.width, limits.default_frame_width, limits.minimum_frame_size, limits.maximum_frame_size
        )
        config.crf = _clamp(config.crf, limits.default_crf, limits.minimum_crf, limits.maximum_crf)
        config.rate = _clamp(
            config.rate, limits.default_frame_rate, limits.minimum_frame_rate, limits.maximum_frame_rate
        )

        # No minimums for duration and size.
        config.time = _clamp(config.time, limits.default_capture_time, None, limits.maximum_capture_time)
        config.size = _clamp(config.size, limits.default_capture_size, None, limits.maximum_capture_size)


def _clamp(value: int, default: int, minimum: Optional[int], maximum: int) -> int:
    if value == 0:
        return default
    if value > maximum:
        return maximum
    if minimum is not None and value < minimum:
        return minimum
    return value
