"""Pydantic schemas for synthesis requests and streamed events."""

from typing import Literal

from pydantic import BaseModel, Field


class TTSRequest(BaseModel):
    """Body of the synthesis endpoints. Presence checks happen in the route."""

    text: str | None = None
    voice: str | None = None
    speed: float = Field(default=1.0, ge=0.5, le=2.0, description="Speed multiplier")


class StreamStart(BaseModel):
    """First event of a synthesis stream."""

    type: Literal["start"] = "start"
    total_chunks: int = Field(serialization_alias="totalChunks")


class StreamProgress(BaseModel):
    """Sent after each synthesized chunk."""

    type: Literal["progress"] = "progress"
    current: int
    total: int
    percent: int


class StreamComplete(BaseModel):
    """Final event carrying the base64 audio and the SRT document."""

    type: Literal["complete"] = "complete"
    audio: str
    srt: str


class StreamError(BaseModel):
    """Sent instead of StreamComplete when synthesis fails."""

    type: Literal["error"] = "error"
    message: str
