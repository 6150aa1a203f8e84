"""Voice catalog and preview sentences."""

import asyncio
from collections.abc import Awaitable, Callable
from functools import lru_cache
from typing import Any

import edge_tts

from ttstudio.core.errors import VoiceCatalogError
from ttstudio.core.logging import get_logger
from ttstudio.schemas.voice import Voice

logger = get_logger(__name__)

VoiceFetcher = Callable[[], Awaitable[list[dict[str, Any]]]]

DEFAULT_PREVIEW_LOCALE = "en-US"

PREVIEW_TEXTS: dict[str, str] = {
    "id": "Halo, ini adalah contoh suara saya.",
    "en": "Hello, this is a sample of my voice.",
    "ja": "こんにちは、これは私の声のサンプルです。",
    "ko": "안녕하세요, 이것은 제 목소리 샘플입니다.",
    "zh": "你好，这是我的声音样本。",
    "es": "Hola, esta es una muestra de mi voz.",
    "fr": "Bonjour, ceci est un échantillon de ma voix.",
    "de": "Hallo, dies ist eine Probe meiner Stimme.",
    "pt": "Olá, esta é uma amostra da minha voz.",
    "ar": "مرحباً، هذا نموذج لصوتي.",
    "hi": "नमस्ते, यह मेरी आवाज़ का नमूना है।",
    "ru": "Привет, это образец моего голоса.",
}


def get_preview_text(locale: str) -> str:
    """Sample sentence for a locale, keyed by its language prefix."""
    lang_code = locale.split("-")[0].lower()
    return PREVIEW_TEXTS.get(lang_code, PREVIEW_TEXTS["en"])


class VoiceCatalog:
    """
    Voice listing backed by the engine, fetched once and cached.

    The cache is filled by the first successful fetch and kept for the
    lifetime of the catalog. A failed fetch leaves it empty so the next
    caller retries.
    """

    def __init__(self, fetcher: VoiceFetcher | None = None):
        self._fetcher = fetcher or edge_tts.list_voices
        self._voices: list[Voice] | None = None
        self._lock = asyncio.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._voices is not None

    async def list_voices(self) -> list[Voice]:
        """All voices offered by the engine."""
        if self._voices is not None:
            return self._voices

        async with self._lock:
            if self._voices is None:
                try:
                    raw_voices = await self._fetcher()
                    voices = [Voice.from_engine(v) for v in raw_voices]
                except Exception as e:
                    logger.bind(error=str(e)).error("voice_catalog_fetch_failed")
                    raise VoiceCatalogError("Failed to fetch voices") from e

                self._voices = voices
                logger.bind(voice_count=len(self._voices)).info("voice_catalog_loaded")

        return self._voices

    async def filter_voices(self, lang: str | None = None, gender: str | None = None) -> list[Voice]:
        """
        Voices matching a locale prefix and gender.

        Args:
            lang: Locale prefix such as "en" or "en-GB" (case-insensitive)
            gender: "Male", "Female", or "all"/None for any
        """
        voices = await self.list_voices()

        def matches(voice: Voice) -> bool:
            match_lang = not lang or voice.locale.lower().startswith(lang.lower())
            match_gender = (
                not gender or gender == "all" or voice.gender.lower() == gender.lower()
            )
            return match_lang and match_gender

        return [v for v in voices if matches(v)]

    async def get_languages(self) -> list[str]:
        """Sorted unique locales across all voices."""
        voices = await self.list_voices()
        return sorted({v.locale for v in voices})

    async def find_voice(self, short_name: str) -> Voice | None:
        voices = await self.list_voices()
        return next((v for v in voices if v.short_name == short_name), None)

    async def preview_locale(self, short_name: str) -> str:
        """Locale used to pick the preview sentence for a voice."""
        voice = await self.find_voice(short_name)
        return voice.locale if voice else DEFAULT_PREVIEW_LOCALE

    def clear(self) -> None:
        self._voices = None


@lru_cache
def get_voice_catalog() -> VoiceCatalog:
    """The application's voice catalog."""
    return VoiceCatalog()
