from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    INVALID_OUTPUT = "invalid_output"
    PROCESS_LAUNCH_FAILURE = "process_launch_failure"
    PROCESS_EXECUTION_FAILURE = "process_execution_failure"


class EncoderError(Exception):
    """
    Base error for capture calls.
    Carries the attempted command line and any captured output so callers can
    diagnose the exact invocation.
    """

    kind: ErrorKind

    def __init__(self, message: str, command: str = "", output: str = "") -> None:
        super().__init__(message)
        self.command = command
        self.output = output


class InvalidInputError(EncoderError):
    kind = ErrorKind.INVALID_INPUT

    def __init__(self) -> None:
        super().__init__("input path is not valid")


class InvalidOutputError(EncoderError):
    kind = ErrorKind.INVALID_OUTPUT

    def __init__(self) -> None:
        super().__init__("output path is not valid")


class ProcessLaunchError(EncoderError):
    kind = ErrorKind.PROCESS_LAUNCH_FAILURE


class ProcessExecutionError(EncoderError):
    kind = ErrorKind.PROCESS_EXECUTION_FAILURE

    def __init__(self, message: str, command: str = "", output: str = "", returncode: Optional[int] = None) -> None:
        super().__init__(message, command=command, output=output)
        self.returncode = returncode
