from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path
from typing import List, Optional

# Ensure src is importable when running directly.
sys.path.append(str(Path(__file__).resolve().parent))

from src.core.command import STREAM_OUTPUT
from src.core.config import EncoderConfig
from src.core.encoder import Encoder
from src.core.errors import EncoderError, ErrorKind
from src.core.presets import get_preset, list_preset_names


EXIT_OK = 0
EXIT_PROCESS_FAILED = 1
EXIT_BAD_REQUEST = 2


def setup_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stderr,
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Capture video from an RTSP camera with ffmpeg")
    parser.add_argument("--input", required=True, help="RTSP URL of the camera stream")
    parser.add_argument(
        "--output",
        default=STREAM_OUTPUT,
        help="File to write (overwritten). Use '-' to stream the video to stdout",
    )
    parser.add_argument("--title", default="", help="Movie title stored in the file metadata")
    parser.add_argument("--preset", choices=list_preset_names(), default=None, help="Start from a named preset")
    parser.add_argument("--ffmpeg", default="", help="Path to the ffmpeg binary")

    # Loose values: the encoder clamps them, it never rejects them.
    parser.add_argument("--copy", default=None, help="Copy the original stream instead of transcoding (true/false)")
    parser.add_argument("--audio", default=None, help="Keep the original audio track (true/false)")
    parser.add_argument("--width", default=None, help="Frame width in pixels")
    parser.add_argument("--height", default=None, help="Frame height in pixels")
    parser.add_argument("--crf", default=None, help="h264 constant rate factor")
    parser.add_argument("--time", default=None, help="Capture duration in seconds")
    parser.add_argument("--rate", default=None, help="Frame rate")
    parser.add_argument("--size", default=None, help="Maximum file size in bytes")
    parser.add_argument("--profile", default=None, help="h264 profile: main, baseline or high")
    parser.add_argument("--level", default=None, help="h264 level: 3.0, 3.1, 4.0, 4.1 or 4.2")

    parser.add_argument("--print-command", action="store_true", help="Print the ffmpeg command and exit")
    parser.add_argument("--debug", action="store_true", help="Enable verbose logs")
    return parser


def build_encoder(args: argparse.Namespace, logger: Optional[logging.Logger] = None) -> Encoder:
    if args.preset:
        config = get_preset(args.preset).to_config(ffmpeg=args.ffmpeg)
    else:
        config = EncoderConfig(ffmpeg=args.ffmpeg)

    encoder = Encoder(config=config, logger=logger)

    setters = {
        "copy": encoder.set_copy,
        "audio": encoder.set_audio,
        "width": encoder.set_width,
        "height": encoder.set_height,
        "crf": encoder.set_crf,
        "time": encoder.set_time,
        "rate": encoder.set_rate,
        "size": encoder.set_size,
        "profile": encoder.set_profile,
        "level": encoder.set_level,
    }
    for name, setter in setters.items():
        value = getattr(args, name)
        if value is not None:
            setter(value)

    return encoder


def _stream_to_stdout(encoder: Encoder, input_url: str, title: str) -> None:
    with encoder.retrieve_stream(input_url, title) as stream:
        shutil.copyfileobj(stream.stdout, sys.stdout.buffer)
        sys.stdout.buffer.flush()
        stream.wait()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    setup_logging(args.debug)
    logger = logging.getLogger("capture")

    encoder = build_encoder(args, logger=logger)

    if args.print_command:
        print(encoder.assemble(args.input, args.output, args.title).text)
        return EXIT_OK

    try:
        if args.output == STREAM_OUTPUT:
            _stream_to_stdout(encoder, args.input, args.title)
        else:
            result = encoder.capture_to_file(args.input, args.output, args.title)
            logger.info("Command used: %s", result.command)
            if result.output:
                logger.info("Command output: %s", result.output)
    except EncoderError as exc:
        logger.error("%s", exc)
        if exc.command:
            logger.error("Command used: %s", exc.command)
        if exc.output:
            logger.error("Command output: %s", exc.output)
        if exc.kind in {ErrorKind.INVALID_INPUT, ErrorKind.INVALID_OUTPUT}:
            return EXIT_BAD_REQUEST
        return EXIT_PROCESS_FAILED

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
