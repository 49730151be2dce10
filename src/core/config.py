from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class EncoderConfig:
    """
    How ffmpeg transcodes a stream.
    With copy=True these are ignored: profile, level, width, height, crf and rate.
    """

    ffmpeg: str = ""
    copy: bool = False
    audio: bool = False
    width: int = 0
    height: int = 0
    crf: int = 0
    time: int = 0  # seconds
    rate: int = 0  # frames per second
    size: int = 0  # max file size in bytes, ffmpeg always overshoots a little
    profile: str = ""
    level: str = ""
