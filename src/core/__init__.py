from src.core.command import STREAM_OUTPUT, FFmpegCommand, build_command
from src.core.config import EncoderConfig
from src.core.encoder import CaptureResult, Encoder
from src.core.errors import (
    EncoderError,
    ErrorKind,
    InvalidInputError,
    InvalidOutputError,
    ProcessExecutionError,
    ProcessLaunchError,
)
from src.core.limits import DEFAULT_LIMITS, EncoderLimits
from src.core.stream import VideoStream

__all__ = [
    "STREAM_OUTPUT",
    "FFmpegCommand",
    "build_command",
    "EncoderConfig",
    "CaptureResult",
    "Encoder",
    "EncoderError",
    "ErrorKind",
    "InvalidInputError",
    "InvalidOutputError",
    "ProcessExecutionError",
    "ProcessLaunchError",
    "DEFAULT_LIMITS",
    "EncoderLimits",
    "VideoStream",
]
