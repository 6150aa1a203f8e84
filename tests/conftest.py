"""
Pytest configuration and fixtures for ttstudio tests.

Provides:
- A scripted synthesis adapter standing in for Edge TTS
- A voice catalog backed by a static voice list
- Test client for API testing
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from ttstudio.config import Settings, get_settings
from ttstudio.core.errors import SynthesisFailure
from ttstudio.dependencies import get_adapter
from ttstudio.main import app
from ttstudio.tts.base import (
    BYTES_PER_SECOND,
    TICKS_PER_MS,
    BoundaryType,
    ChunkAudio,
    SynthesisAdapter,
    WordBoundaryEvent,
)
from ttstudio.tts.voices import VoiceCatalog, get_voice_catalog


class TestSettings(Settings):
    debug: bool = True
    max_text_length: int = 50_000
    base_url: str = "http://localhost:8000"


class FakeAdapter(SynthesisAdapter):
    """
    Scripted adapter producing one second of silence-sized audio per chunk.

    Word boundaries place each word 300ms apart within its chunk.
    """

    WORD_SPACING_MS = 300
    WORD_DURATION_MS = 250

    def __init__(
        self,
        word_boundaries: bool = True,
        bytes_per_chunk: int = BYTES_PER_SECOND,
        fail_on_call: int | None = None,
        emit_events: bool = True,
    ):
        self.supports_word_boundaries = word_boundaries
        self.bytes_per_chunk = bytes_per_chunk
        self.fail_on_call = fail_on_call
        # False mimics an engine that streams audio but no word timings
        self.emit_events = emit_events
        self.calls: list[tuple[str, str, str]] = []

    async def synthesize_chunk(self, text: str, voice: str, rate: str = "+0%") -> ChunkAudio:
        self.calls.append((text, voice, rate))
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise SynthesisFailure("Engine connection dropped")

        # Tag audio with the call number so ordering is visible in the output
        marker = bytes([len(self.calls) % 256])
        audio = marker * self.bytes_per_chunk

        if not self.supports_word_boundaries:
            return ChunkAudio(audio=audio)
        if not self.emit_events:
            return ChunkAudio(audio=audio, word_boundaries=[])

        events = [
            WordBoundaryEvent(
                text=word,
                offset=i * self.WORD_SPACING_MS * TICKS_PER_MS,
                duration=self.WORD_DURATION_MS * TICKS_PER_MS,
                boundary_type=BoundaryType.WORD,
            )
            for i, word in enumerate(text.split())
        ]
        return ChunkAudio(audio=audio, word_boundaries=events)


RAW_VOICES = [
    {
        "Name": "Microsoft Server Speech Text to Speech Voice (en-US, AriaNeural)",
        "ShortName": "en-US-AriaNeural",
        "Gender": "Female",
        "Locale": "en-US",
        "FriendlyName": "Microsoft Aria Online (Natural) - English (United States)",
    },
    {
        "Name": "Microsoft Server Speech Text to Speech Voice (en-GB, RyanNeural)",
        "ShortName": "en-GB-RyanNeural",
        "Gender": "Male",
        "Locale": "en-GB",
        "FriendlyName": "Microsoft Ryan Online (Natural) - English (United Kingdom)",
    },
    {
        "Name": "Microsoft Server Speech Text to Speech Voice (fr-FR, DeniseNeural)",
        "ShortName": "fr-FR-DeniseNeural",
        "Gender": "Female",
        "Locale": "fr-FR",
        "FriendlyName": "Microsoft Denise Online (Natural) - French (France)",
    },
    {
        "Name": "Microsoft Server Speech Text to Speech Voice (ja-JP, KeitaNeural)",
        "ShortName": "ja-JP-KeitaNeural",
        "Gender": "Male",
        "Locale": "ja-JP",
        "FriendlyName": "Microsoft Keita Online (Natural) - Japanese (Japan)",
    },
]


@pytest.fixture
def raw_voices() -> list[dict]:
    return [dict(v) for v in RAW_VOICES]


@pytest.fixture
def voice_fetcher(raw_voices):
    """Async fetcher that counts how often the engine is asked for voices."""

    async def _fetch() -> list[dict]:
        _fetch.calls += 1
        return raw_voices

    _fetch.calls = 0
    return _fetch


@pytest.fixture
def voice_catalog(voice_fetcher) -> VoiceCatalog:
    return VoiceCatalog(fetcher=voice_fetcher)


@pytest.fixture
def fake_adapter() -> FakeAdapter:
    return FakeAdapter()


@pytest.fixture
def make_adapter():
    """Factory for scripted adapters."""

    def _make(**kwargs) -> FakeAdapter:
        return FakeAdapter(**kwargs)

    return _make


@pytest_asyncio.fixture
async def client(fake_adapter, voice_catalog) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client with engine and catalog overrides."""
    from ttstudio.core.rate_limit import limiter

    def override_get_settings():
        return TestSettings()

    app.dependency_overrides[get_settings] = override_get_settings
    app.dependency_overrides[get_adapter] = lambda: fake_adapter
    app.dependency_overrides[get_voice_catalog] = lambda: voice_catalog

    # Reset rate limiter storage before each test
    limiter.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
