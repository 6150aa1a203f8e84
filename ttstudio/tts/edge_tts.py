"""Microsoft Edge TTS adapter."""

import edge_tts

from ttstudio.core.errors import MalformedMetadata, SynthesisFailure
from ttstudio.core.logging import get_logger
from ttstudio.tts.base import BoundaryType, ChunkAudio, SynthesisAdapter, WordBoundaryEvent

logger = get_logger(__name__)

_BOUNDARY_TYPES = {b.value for b in BoundaryType}


class EdgeTTSAdapter(SynthesisAdapter):
    """
    Microsoft Edge TTS adapter.

    Free, high-quality text-to-speech with word-level timestamps. Audio is
    always audio-24khz-48kbitrate-mono-mp3.
    """

    def __init__(self, word_boundaries: bool = True):
        """
        Initialize Edge TTS adapter.

        Args:
            word_boundaries: Request word boundary metadata. When disabled the
                orchestrator falls back to estimated subtitle timing.
        """
        self.supports_word_boundaries = word_boundaries

    async def synthesize_chunk(self, text: str, voice: str, rate: str = "+0%") -> ChunkAudio:
        """Synthesize one chunk with Edge TTS, collecting word boundaries."""
        audio = bytearray()
        boundaries: list[WordBoundaryEvent] = []
        skipped = 0

        try:
            communicate = edge_tts.Communicate(text, voice, rate=rate, boundary="WordBoundary")
            async for item in communicate.stream():
                item_type = item.get("type")
                if item_type == "audio":
                    audio.extend(item["data"])
                elif self.supports_word_boundaries and item_type in _BOUNDARY_TYPES:
                    try:
                        boundaries.append(WordBoundaryEvent.from_stream_item(item))
                    except MalformedMetadata as e:
                        skipped += 1
                        logger.bind(error=str(e)).warning("edge_tts_boundary_discarded")
        except Exception as e:
            logger.bind(voice=voice, rate=rate, error=str(e)).error("edge_tts_synthesis_error")
            raise SynthesisFailure(f"Edge TTS synthesis failed: {e}") from e

        if not audio:
            logger.bind(voice=voice, chars=len(text)).error("edge_tts_no_audio")
            raise SynthesisFailure("Edge TTS returned no audio")

        logger.bind(
            voice=voice,
            rate=rate,
            chars=len(text),
            audio_bytes=len(audio),
            boundary_count=len(boundaries),
            skipped_boundaries=skipped,
        ).debug("edge_tts_chunk_synthesized")

        return ChunkAudio(
            audio=bytes(audio),
            word_boundaries=boundaries if self.supports_word_boundaries else None,
        )
