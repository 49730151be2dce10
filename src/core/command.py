from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Tuple

from src.core.config import EncoderConfig

STREAM_OUTPUT = "-"


@dataclass(slots=True, frozen=True)
class FFmpegCommand:
    args: Tuple[str, ...]

    @property
    def text(self) -> str:
        return " ".join(self.args)

    @property
    def executable(self) -> str:
        return self.args[0]

    def __str__(self) -> str:
        return self.text


def build_command(config: EncoderConfig, input_url: str, output: str, title: str = "") -> FFmpegCommand:
    """
    Serialize a normalized config into an ffmpeg invocation.
    ffmpeg is flag-order sensitive: the order below is fixed and the output goes last.
    """
    if not title:
        title = _base_name(output)

    args: List[str] = [
        config.ffmpeg,
        "-v", "16",  # log level: errors only
        "-rtsp_transport", "tcp",
        "-i", input_url,
        "-f", "mov",
        "-metadata", f'title="{title}"',
        "-y", "-map", "0",
    ]

    if config.size > 0:
        args += ["-fs", str(config.size)]

    if config.time > 0:
        args += ["-t", str(config.time)]

    if not config.copy:
        args += [
            "-vcodec", "libx264",
            "-profile:v", config.profile,
            "-level", config.level,
            "-pix_fmt", "yuv420p",
            "-movflags", "faststart",
            "-s", f"{config.width}x{config.height}",
            "-preset", "superfast",
            "-crf", str(config.crf),
            "-r", str(config.rate),
        ]
    else:
        args += ["-c", "copy"]

    if not config.audio:
        args.append("-an")
    else:
        args += ["-c:a", "copy"]

    args.append(output)
    return FFmpegCommand(args=tuple(args))


def _base_name(path: str) -> str:
    stripped = path.rstrip(os.sep)
    if not stripped:
        return os.sep if path else "."
    return os.path.basename(stripped)
