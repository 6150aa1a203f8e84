"""Voice catalog and preview routes."""

from fastapi import APIRouter, Query, Request
from fastapi.responses import Response

from ttstudio.core.errors import MissingParameter
from ttstudio.core.rate_limit import limiter, tts_rate_limit
from ttstudio.dependencies import Adapter, Catalog
from ttstudio.schemas.voice import VoicesResponse
from ttstudio.tts.voices import get_preview_text

router = APIRouter()


@router.get("/voices", response_model=VoicesResponse)
async def list_voices(
    catalog: Catalog,
    lang: str | None = Query(default=None, description="Locale prefix, e.g. en or en-GB"),
    gender: str | None = Query(default=None, description="Male, Female or all"),
) -> VoicesResponse:
    """List voices, optionally filtered by language and gender."""
    voices = await catalog.filter_voices(lang, gender)
    languages = await catalog.get_languages()
    return VoicesResponse(voices=voices, languages=languages, total=len(voices))


@router.get("/preview")
@limiter.limit(tts_rate_limit)
async def preview_voice(
    request: Request,
    catalog: Catalog,
    adapter: Adapter,
    voice: str | None = Query(default=None),
) -> Response:
    """
    Synthesize a short sample sentence in the voice's language.

    Unknown voices fall back to the English sentence.
    """
    if not voice:
        raise MissingParameter("Voice parameter is required")

    locale = await catalog.preview_locale(voice)
    result = await adapter.synthesize_chunk(get_preview_text(locale), voice, "+0%")

    return Response(
        content=result.audio,
        media_type="audio/mpeg",
        headers={
            "Cache-Control": "public, max-age=86400",  # 1 day
        },
    )
