from __future__ import annotations

import logging
import subprocess
from typing import Iterator, Optional

from src.core.errors import ProcessExecutionError


class VideoStream:
    """
    Live stdout of a running ffmpeg process.

    The process is not awaited before this object is handed out: the caller
    reads at its own pace while ffmpeg keeps writing. Read to EOF before calling
    wait(), otherwise a full pipe can block the child. close() stops a process
    that is still running.
    """

    def __init__(self, command: str, process: subprocess.Popen, logger: Optional[logging.Logger] = None):
        self.command = command
        self.process = process
        self.logger = logger or logging.getLogger(__name__)

    @property
    def stdout(self):
        return self.process.stdout

    @property
    def closed(self) -> bool:
        return self.process.stdout is None or self.process.stdout.closed

    def read(self, size: int = -1) -> bytes:
        return self.process.stdout.read(size)

    def iter_chunks(self, chunk_size: int = 64 * 1024) -> Iterator[bytes]:
        """Yield whatever ffmpeg has written so far, up to chunk_size bytes at a time."""
        while True:
            chunk = self.process.stdout.read1(max(1, chunk_size))
            if not chunk:
                return
            yield chunk

    def wait(self, timeout: Optional[float] = None) -> int:
        returncode = self.process.wait(timeout=timeout)
        if returncode != 0:
            raise ProcessExecutionError(
                f"run failed: exit status {returncode}",
                command=self.command,
                returncode=returncode,
            )
        return returncode

    def close(self) -> None:
        if self.process.poll() is None:
            self.logger.info("Stopping stream process pid=%s", self.process.pid)
            self.process.terminate()
        if self.process.stdout is not None:
            self.process.stdout.close()
        self.process.wait()

    def __enter__(self) -> "VideoStream":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore[override]
        self.close()
