from __future__ import annotations

import dataclasses
import logging
import secrets
from pathlib import Path
from typing import Optional, Tuple

from src.api.schemas import CaptureRequest, EncoderOverrides
from src.api.settings import CaptureSettings
from src.core.config import EncoderConfig
from src.core.encoder import CaptureResult, Encoder
from src.core.presets import get_preset
from src.core.stream import VideoStream


class CaptureService:
    def __init__(self, settings: CaptureSettings, logger: Optional[logging.Logger] = None):
        self.settings = settings
        self.logger = logger or logging.getLogger(__name__)

    def build_encoder(self, preset: Optional[str], overrides: EncoderOverrides) -> Encoder:
        if preset:
            config = get_preset(preset).to_config(ffmpeg=self.settings.ffmpeg_path)
        else:
            config = EncoderConfig(ffmpeg=self.settings.ffmpeg_path)

        values = overrides.model_dump(exclude_none=True)
        if "copy_mode" in values:
            values["copy"] = values.pop("copy_mode")
        config = dataclasses.replace(config, **values)

        return Encoder(config=config, logger=self.logger)

    def capture(self, request: CaptureRequest) -> Tuple[CaptureResult, Path]:
        encoder = self.build_encoder(request.preset, request.options)

        self.settings.outputs_dir.mkdir(parents=True, exist_ok=True)
        filename = request.filename or f"{secrets.token_hex(8)}.mov"
        target = self.settings.outputs_dir / filename

        self.logger.info("Capturing %s into %s", request.input_url, target)
        result = encoder.capture_to_file(request.input_url, str(target), request.title)
        return result, target

    def open_stream(
        self,
        input_url: str,
        title: str = "",
        preset: Optional[str] = None,
        overrides: Optional[EncoderOverrides] = None,
    ) -> VideoStream:
        encoder = self.build_encoder(preset, overrides or EncoderOverrides())
        return encoder.retrieve_stream(input_url, title)
