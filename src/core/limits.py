from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(slots=True, frozen=True)
class EncoderLimits:
    """Defaults and bounds applied by the parameter normalizer."""

    default_frame_rate: int = 5
    minimum_frame_rate: int = 1
    maximum_frame_rate: int = 60
    default_frame_height: int = 720
    default_frame_width: int = 1280
    minimum_frame_size: int = 100
    maximum_frame_size: int = 5000
    default_crf: int = 21
    minimum_crf: int = 16
    maximum_crf: int = 30
    default_capture_time: int = 15
    maximum_capture_time: int = 1200  # 20 minutes
    default_capture_size: int = 2_500_000  # roughly 5-10 seconds
    maximum_capture_size: int = 104_857_600  # 100MB
    default_ffmpeg_path: str = "/usr/local/bin/ffmpeg"
    default_profile: str = "main"
    default_level: str = "3.0"
    profiles: Tuple[str, ...] = ("main", "baseline", "high")
    levels: Tuple[str, ...] = ("3.0", "3.1", "4.0", "4.1", "4.2")


DEFAULT_LIMITS = EncoderLimits()
