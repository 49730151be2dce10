import os
import stat
import sys
import time

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from src.core.config import EncoderConfig
from src.core.encoder import Encoder
from src.core.errors import ErrorKind, InvalidInputError, ProcessExecutionError, ProcessLaunchError

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell")


def _script(tmp_path, body: str) -> str:
    path = tmp_path / "fake-ffmpeg"
    path.write_text("#!/bin/sh\n" + body + "\n", encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IEXEC)
    return str(path)


def test_retrieve_stream_rejects_empty_input():
    encoder = Encoder(EncoderConfig(ffmpeg="/bin/echo"))

    with pytest.raises(InvalidInputError) as excinfo:
        encoder.retrieve_stream("")

    assert excinfo.value.kind is ErrorKind.INVALID_INPUT


def test_full_read_then_wait(tmp_path):
    ffmpeg = _script(tmp_path, "printf 'frame-bytes'")
    encoder = Encoder(EncoderConfig(ffmpeg=ffmpeg))

    with encoder.retrieve_stream("rtsp://cam", "Cam") as stream:
        data = stream.read()
        assert stream.wait() == 0

    assert data == b"frame-bytes"
    assert stream.command.startswith(ffmpeg)
    assert stream.command.endswith(" -")
    assert stream.closed


def test_stream_is_returned_before_process_finishes(tmp_path):
    # An endless producer: retrieve_stream must hand the pipe back while it runs.
    ffmpeg = _script(tmp_path, "exec cat /dev/zero")
    encoder = Encoder(EncoderConfig(ffmpeg=ffmpeg))

    stream = encoder.retrieve_stream("rtsp://cam")
    try:
        assert stream.process.poll() is None
        chunk = stream.read(4096)
        assert len(chunk) == 4096
    finally:
        stream.close()

    assert stream.process.returncode is not None
    assert stream.closed


def test_iter_chunks_yields_everything(tmp_path):
    ffmpeg = _script(tmp_path, "printf 'abcdefghij'")
    encoder = Encoder(EncoderConfig(ffmpeg=ffmpeg))

    with encoder.retrieve_stream("rtsp://cam") as stream:
        chunks = list(stream.iter_chunks(chunk_size=3))

    assert b"".join(chunks) == b"abcdefghij"


def test_wait_reports_failed_process(tmp_path):
    ffmpeg = _script(tmp_path, "echo 'noise' >&2\nexit 5")
    encoder = Encoder(EncoderConfig(ffmpeg=ffmpeg))

    with encoder.retrieve_stream("rtsp://cam") as stream:
        assert stream.read() == b""
        with pytest.raises(ProcessExecutionError) as excinfo:
            stream.wait()

    assert excinfo.value.returncode == 5
    assert excinfo.value.command == stream.command


def test_retrieve_stream_launch_failure(tmp_path):
    encoder = Encoder(EncoderConfig(ffmpeg=str(tmp_path / "missing")))

    with pytest.raises(ProcessLaunchError) as excinfo:
        encoder.retrieve_stream("rtsp://cam")

    assert excinfo.value.command.endswith(" -")


def test_iter_chunks_yields_partial_data_without_waiting_for_a_full_chunk(tmp_path):
    ffmpeg = _script(tmp_path, "printf 'first'\nsleep 3\nprintf 'second'")
    encoder = Encoder(EncoderConfig(ffmpeg=ffmpeg))

    with encoder.retrieve_stream("rtsp://cam") as stream:
        started = time.monotonic()
        first = next(stream.iter_chunks(chunk_size=64 * 1024))
        elapsed = time.monotonic() - started

    assert first == b"first"
    assert elapsed < 2.0
