from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class EncoderOverrides(BaseModel):
    """Loose encoder options. Out-of-range values are clamped by the encoder, not rejected."""

    copy_mode: Optional[bool] = None
    audio: Optional[bool] = None
    width: Optional[int] = None
    height: Optional[int] = None
    crf: Optional[int] = None
    time: Optional[int] = None
    rate: Optional[int] = None
    size: Optional[int] = None
    profile: Optional[str] = None
    level: Optional[str] = None


class CaptureRequest(BaseModel):
    input_url: str = Field(max_length=2048)
    filename: Optional[str] = Field(default=None, max_length=255)
    title: str = Field(default="", max_length=255)
    preset: Optional[str] = None
    options: EncoderOverrides = Field(default_factory=EncoderOverrides)

    @field_validator("filename")
    @classmethod
    def filename_is_base_name(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        cleaned = value.strip()
        if not cleaned or cleaned in {".", "..", "-"} or "/" in cleaned or "\\" in cleaned:
            raise ValueError("filename must be a plain file name")
        return cleaned


class CaptureResponse(BaseModel):
    command: str
    output: str
    path: str


class CaptureFailure(BaseModel):
    detail: str
    kind: str
    command: str = ""
    output: str = ""
    request_id: Optional[str] = None


class ErrorResponse(BaseModel):
    detail: str
    request_id: Optional[str] = None
