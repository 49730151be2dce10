from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Iterator, Optional

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse, StreamingResponse

from src.api.schemas import CaptureFailure, CaptureRequest, CaptureResponse, ErrorResponse
from src.api.service import CaptureService
from src.api.settings import CaptureSettings
from src.core.errors import EncoderError, ErrorKind, ProcessExecutionError
from src.core.stream import VideoStream


logger = logging.getLogger("capture_api")

ERROR_STATUS = {
    ErrorKind.INVALID_INPUT: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.INVALID_OUTPUT: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.PROCESS_LAUNCH_FAILURE: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.PROCESS_EXECUTION_FAILURE: status.HTTP_502_BAD_GATEWAY,
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RuntimeContext:
    def __init__(self, settings: CaptureSettings) -> None:
        self.settings = settings
        settings.outputs_dir.mkdir(parents=True, exist_ok=True)

        self.runtime_root = settings.runtime_root
        self.outputs_dir = settings.outputs_dir
        self.service = CaptureService(settings)
        self.chunk_size = settings.stream_chunk_kb * 1024


context = RuntimeContext(CaptureSettings.from_env())

app = FastAPI(
    title="RTSP Capture API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
    request.state.request_id = request_id

    started = _utc_now()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Unhandled error for request_id=%s", request_id)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error", "request_id": request_id},
        )

    elapsed_ms = int((_utc_now() - started).total_seconds() * 1000)
    response.headers["X-Request-ID"] = request_id
    response.headers["X-Response-Time-Ms"] = str(elapsed_ms)
    response.headers["X-Content-Type-Options"] = "nosniff"

    logger.info(
        "request_id=%s method=%s path=%s status=%s duration_ms=%s",
        request_id,
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )

    return response


@app.exception_handler(EncoderError)
async def encoder_error_handler(request: Request, exc: EncoderError):
    request_id = getattr(request.state, "request_id", None)
    logger.warning("Capture failed kind=%s request_id=%s command=%s", exc.kind.value, request_id, exc.command)
    payload = CaptureFailure(
        detail=str(exc),
        kind=exc.kind.value,
        command=exc.command,
        output=exc.output,
        request_id=request_id,
    )
    return JSONResponse(status_code=ERROR_STATUS[exc.kind], content=payload.model_dump())


@app.get("/api/v1/health")
def healthcheck() -> dict:
    return {
        "status": "ok",
        "service": "rtsp-capture-api",
        "version": app.version,
        "timestamp": _utc_now().isoformat(),
        "outputs_dir": str(context.outputs_dir),
    }


@app.post(
    "/api/v1/captures",
    response_model=CaptureResponse,
    responses={422: {"model": CaptureFailure}, 502: {"model": CaptureFailure}, 500: {"model": ErrorResponse}},
)
def create_capture(payload: CaptureRequest):
    try:
        result, target = context.service.capture(payload)
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc.args[0])) from exc

    return CaptureResponse(command=result.command, output=result.output, path=str(target))


def _relay(stream: VideoStream, chunk_size: int) -> Iterator[bytes]:
    with stream:
        yield from stream.iter_chunks(chunk_size)
        try:
            stream.wait()
        except ProcessExecutionError as exc:
            logger.warning("Stream process failed returncode=%s command=%s", exc.returncode, exc.command)


@app.get(
    "/api/v1/stream",
    responses={422: {"model": CaptureFailure}, 502: {"model": CaptureFailure}, 500: {"model": ErrorResponse}},
)
def stream_capture(
    url: str = Query(..., max_length=2048),
    title: str = Query("", max_length=255),
    preset: Optional[str] = Query(default=None),
):
    try:
        stream = context.service.open_stream(url, title=title, preset=preset)
    except KeyError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc.args[0])) from exc

    return StreamingResponse(
        _relay(stream, context.chunk_size),
        media_type="video/quicktime",
    )
