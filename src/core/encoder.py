from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Optional

from src.core.command import STREAM_OUTPUT, FFmpegCommand, build_command
from src.core.config import EncoderConfig
from src.core.errors import InvalidInputError, InvalidOutputError, ProcessExecutionError, ProcessLaunchError
from src.core.limits import DEFAULT_LIMITS, EncoderLimits
from src.core.normalizer import ParameterNormalizer
from src.core.stream import VideoStream


@dataclass(slots=True, frozen=True)
class CaptureResult:
    command: str
    output: str


class Encoder(ParameterNormalizer):
    """Captures video from RTSP sources by running ffmpeg with a normalized config."""

    def __init__(
        self,
        config: Optional[EncoderConfig] = None,
        limits: EncoderLimits = DEFAULT_LIMITS,
        logger: Optional[logging.Logger] = None,
    ):
        super().__init__(config=config, limits=limits, logger=logger or logging.getLogger(__name__))

    def assemble(self, input_url: str, output: str, title: str = "") -> FFmpegCommand:
        return build_command(self._config, input_url, output, title)

    def retrieve_stream(self, input_url: str, title: str = "") -> VideoStream:
        """
        Start ffmpeg writing to stdout and hand back the live stream.
        Title is encoded into the video as the movie title.
        """
        if not input_url:
            raise InvalidInputError()

        command = self.assemble(input_url, STREAM_OUTPUT, title)
        self.logger.debug("Stream command: %s", command.text)

        process = self._spawn(command, stdout=subprocess.PIPE, stderr=subprocess.DEVNULL)
        self.logger.info("Streaming from %s (pid=%s)", input_url, process.pid)
        return VideoStream(command.text, process, logger=self.logger)

    def capture_to_file(self, input_url: str, output: str, title: str = "") -> CaptureResult:
        """
        Save a video snippet to a file. The file is overwritten.
        Returns the command used and its trimmed stdout+stderr.
        """
        if not input_url:
            raise InvalidInputError()
        if not output or output == STREAM_OUTPUT:
            raise InvalidOutputError()

        command = self.assemble(input_url, output, title)
        self.logger.debug("Capture command: %s", command.text)

        process = self._spawn(command, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
        raw, _ = process.communicate()
        text = raw.decode("utf-8", errors="replace").strip()

        if process.returncode != 0:
            self.logger.warning("Capture from %s failed with exit status %s", input_url, process.returncode)
            raise ProcessExecutionError(
                f"subcommand failed: exit status {process.returncode}",
                command=command.text,
                output=text,
                returncode=process.returncode,
            )

        self.logger.info("Saved capture from %s to %s", input_url, output)
        return CaptureResult(command=command.text, output=text)

    def _spawn(self, command: FFmpegCommand, stdout, stderr) -> subprocess.Popen:
        try:
            return subprocess.Popen(list(command.args), stdout=stdout, stderr=stderr)
        except OSError as exc:
            self.logger.warning("Could not start %s: %s", command.executable, exc)
            raise ProcessLaunchError(f"subcommand failed: {exc}", command=command.text) from exc
