"""Synthesis routes: one-shot audio and a Server-Sent-Events progress stream."""

import base64
from collections.abc import AsyncIterator

from fastapi import APIRouter, Request
from fastapi.responses import Response, StreamingResponse
from pydantic import BaseModel

from ttstudio.core.errors import InputTooLarge, MissingParameter
from ttstudio.core.logging import get_logger
from ttstudio.core.rate_limit import limiter, tts_rate_limit
from ttstudio.dependencies import AppSettings, Orchestrator
from ttstudio.schemas.tts import (
    StreamComplete,
    StreamError,
    StreamProgress,
    StreamStart,
    TTSRequest,
)
from ttstudio.tts.base import ProgressEvent, SynthesisResult
from ttstudio.tts.chunker import get_chunk_count
from ttstudio.tts.utils import map_speed_to_rate

logger = get_logger(__name__)

router = APIRouter()

STREAM_ERROR_MESSAGE = "Failed to generate speech"


def validate_synthesis_request(body: TTSRequest, max_text_length: int) -> tuple[str, str]:
    """
    Check a synthesis request before any work starts.

    Returns:
        (text, voice) once both are present and the text is within limits

    Raises:
        MissingParameter: if text or voice is absent
        InputTooLarge: if text exceeds max_text_length
    """
    if not body.text or not body.text.strip() or not body.voice:
        raise MissingParameter("Text and voice are required")
    if len(body.text) > max_text_length:
        raise InputTooLarge(len(body.text), max_text_length)
    return body.text, body.voice


def _sse(event: BaseModel) -> str:
    return f"data: {event.model_dump_json(by_alias=True)}\n\n"


@router.post("/tts")
@limiter.limit(tts_rate_limit)
async def synthesize(
    request: Request,
    body: TTSRequest,
    settings: AppSettings,
    orchestrator: Orchestrator,
) -> Response:
    """
    Synthesize text and return the MP3 audio as a download.

    Long text is chunked and stitched; subtitles are not included here,
    use /tts-stream for audio plus SRT.
    """
    text, voice = validate_synthesis_request(body, settings.max_text_length)
    rate = map_speed_to_rate(body.speed)

    result = await orchestrator.run(text, voice, rate)

    return Response(
        content=result.audio,
        media_type="audio/mpeg",
        headers={
            "Content-Disposition": 'attachment; filename="speech.mp3"',
        },
    )


@router.post("/tts-stream")
@limiter.limit(tts_rate_limit)
async def synthesize_stream(
    request: Request,
    body: TTSRequest,
    settings: AppSettings,
    orchestrator: Orchestrator,
) -> StreamingResponse:
    """
    Synthesize text, streaming progress as Server-Sent Events.

    Events, in order:
    - start: {totalChunks}
    - progress: {current, total, percent} once per chunk
    - complete: {audio (base64 MP3), srt}

    A failure ends the stream with a single error event and no audio.
    """
    text, voice = validate_synthesis_request(body, settings.max_text_length)
    rate = map_speed_to_rate(body.speed)
    total_chunks = get_chunk_count(text, orchestrator.max_chunk_size)

    async def event_stream() -> AsyncIterator[str]:
        yield _sse(StreamStart(total_chunks=total_chunks))
        try:
            async for item in orchestrator.iter_synthesis(text, voice, rate):
                if isinstance(item, ProgressEvent):
                    yield _sse(StreamProgress(**item.to_dict()))
                elif isinstance(item, SynthesisResult):
                    audio = base64.b64encode(item.audio).decode("ascii")
                    yield _sse(StreamComplete(audio=audio, srt=item.subtitle))
        except Exception as e:
            logger.bind(voice=voice, error=str(e)).error("tts_stream_failed")
            yield _sse(StreamError(message=STREAM_ERROR_MESSAGE))

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        },
    )
