from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from src.core.config import EncoderConfig


@dataclass(frozen=True, slots=True)
class CapturePreset:
    name: str
    description: str
    copy: bool = False
    audio: bool = False
    time: int = 0
    width: int = 0
    height: int = 0
    crf: int = 0
    rate: int = 0
    level: str = ""
    profile: str = ""

    def to_config(self, ffmpeg: str = "") -> EncoderConfig:
        return EncoderConfig(
            ffmpeg=ffmpeg,
            copy=self.copy,
            audio=self.audio,
            time=self.time,
            width=self.width,
            height=self.height,
            crf=self.crf,
            rate=self.rate,
            level=self.level,
            profile=self.profile,
        )


PRESETS: Dict[str, CapturePreset] = {
    "securityspy": CapturePreset(
        name="securityspy",
        description="Direct save from a SecuritySpy server, no transcode, original audio kept.",
        copy=True,
        audio=True,
        time=10,
    ),
    "dahua": CapturePreset(
        name="dahua",
        description="Full HD transcode from a Dahua IP camera.",
        audio=True,
        time=10,
        width=1920,
        height=1080,
        crf=23,
        level="4.0",
        rate=5,
        profile="baseline",
    ),
}


def list_preset_names() -> List[str]:
    return list(PRESETS.keys())


def get_preset(name: str) -> CapturePreset:
    try:
        return PRESETS[name.strip().lower()]
    except KeyError:
        raise KeyError(f"Unknown preset '{name}'. Choose one of: {', '.join(list_preset_names())}") from None
