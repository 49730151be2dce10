from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True, frozen=True)
class CaptureSettings:
    runtime_root: Path
    outputs_dir: Path
    ffmpeg_path: str
    stream_chunk_kb: int

    @staticmethod
    def from_env() -> "CaptureSettings":
        runtime_root = Path(os.getenv("CAPTURE_RUNTIME_DIR", "runtime"))

        return CaptureSettings(
            runtime_root=runtime_root,
            outputs_dir=runtime_root / "captures",
            ffmpeg_path=os.getenv("CAPTURE_FFMPEG_PATH", "").strip(),
            stream_chunk_kb=max(1, int(os.getenv("CAPTURE_STREAM_CHUNK_KB", "64"))),
        )
