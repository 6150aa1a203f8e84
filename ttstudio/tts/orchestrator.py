"""Multi-chunk synthesis with progress reporting and subtitle assembly."""

import inspect
from collections.abc import AsyncIterator, Awaitable, Callable

from ttstudio.config import get_config
from ttstudio.core.errors import SynthesisFailure
from ttstudio.core.logging import get_logger
from ttstudio.tts.base import (
    ChunkResult,
    ProgressEvent,
    SynthesisAdapter,
    SynthesisResult,
    TimingMode,
    WordBoundaryEvent,
)
from ttstudio.tts.chunker import DEFAULT_MAX_CHUNK_SIZE, build_chunks
from ttstudio.tts.timing import TimingReconstructor, generate_srt
from ttstudio.tts.utils import get_synthesis_adapter, rate_to_speed

logger = get_logger(__name__)

ProgressCallback = Callable[[ProgressEvent], Awaitable[None] | None]


class SynthesisOrchestrator:
    """
    Drive chunking, per-chunk synthesis and subtitle reconstruction.

    Chunks are synthesized strictly in order. Audio and timing state belong to
    a single run and are dropped if any chunk fails.
    """

    def __init__(
        self,
        adapter: SynthesisAdapter,
        max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE,
        reconstructor: TimingReconstructor | None = None,
    ):
        self.adapter = adapter
        self.max_chunk_size = max_chunk_size
        self.reconstructor = reconstructor or TimingReconstructor()

    @property
    def timing_mode(self) -> TimingMode:
        if self.adapter.supports_word_boundaries:
            return TimingMode.WORD_BOUNDARY
        return TimingMode.ESTIMATED

    async def iter_synthesis(
        self,
        text: str,
        voice: str,
        rate: str = "+0%",
    ) -> AsyncIterator[ProgressEvent | SynthesisResult]:
        """
        Synthesize text, yielding a ProgressEvent per chunk and then the result.

        Input is assumed validated by the caller. The first failing chunk
        raises SynthesisFailure and nothing else is yielded.
        """
        chunks = build_chunks(text, self.max_chunk_size)
        total = len(chunks)
        mode = self.timing_mode

        audio_parts: list[bytes] = []
        events: list[WordBoundaryEvent] = []
        offset_ms = 0

        logger.bind(
            adapter=self.adapter.descriptor(),
            voice=voice,
            rate=rate,
            chars=len(text),
            chunk_count=total,
            timing_mode=str(mode),
        ).info("tts_run_started")

        for chunk in chunks:
            try:
                chunk_audio = await self.adapter.synthesize_chunk(chunk.text, voice, rate)
            except SynthesisFailure as e:
                e.chunk_index = chunk.index
                logger.bind(chunk=chunk.index + 1, total=total, error=e.message).error(
                    "tts_chunk_failed"
                )
                raise

            result = ChunkResult(
                chunk=chunk,
                audio=chunk_audio.audio,
                word_boundaries=chunk_audio.word_boundaries,
            )
            audio_parts.append(result.audio)

            if mode == TimingMode.WORD_BOUNDARY and result.word_boundaries:
                events.extend(event.shifted(offset_ms) for event in result.word_boundaries)

            offset_ms += result.duration_ms

            progress = ProgressEvent.after_chunk(chunk.index, total)
            logger.bind(
                chunk=progress.current,
                total=total,
                audio_bytes=len(result.audio),
                offset_ms=offset_ms,
            ).debug("tts_chunk_synthesized")
            yield progress

        audio = b"".join(audio_parts)
        # The running offset is the byte-length duration of every chunk
        duration_ms = offset_ms or self.reconstructor.estimate_duration_ms(
            text=text, speed=rate_to_speed(rate)
        )
        if mode == TimingMode.WORD_BOUNDARY and chunks and not any(e.is_word for e in events):
            # No usable word timings anywhere in the run: estimate the whole run
            logger.bind(chunk_count=total).warning("tts_word_boundaries_missing")
            mode = TimingMode.ESTIMATED

        cues = self.reconstructor.reconstruct(
            mode, text=text, events=events, total_duration_ms=duration_ms
        )

        logger.bind(
            chunk_count=total,
            audio_bytes=len(audio),
            duration_ms=duration_ms,
            cue_count=len(cues),
        ).info("tts_run_complete")

        yield SynthesisResult(
            audio=audio,
            subtitle=generate_srt(cues),
            cues=cues,
            chunk_count=total,
            duration_ms=duration_ms,
            timing_mode=mode,
        )

    async def run(
        self,
        text: str,
        voice: str,
        rate: str = "+0%",
        on_progress: ProgressCallback | None = None,
    ) -> SynthesisResult:
        """
        Synthesize text and return the assembled audio and subtitles.

        Args:
            text: Validated input text
            voice: Engine voice identifier
            rate: Signed percentage rate
            on_progress: Called (or awaited) after every completed chunk

        Returns:
            SynthesisResult with audio bytes and SRT document

        Raises:
            SynthesisFailure: if any chunk fails
        """
        result: SynthesisResult | None = None
        async for item in self.iter_synthesis(text, voice, rate):
            if isinstance(item, ProgressEvent):
                if on_progress is not None:
                    outcome = on_progress(item)
                    if inspect.isawaitable(outcome):
                        await outcome
            else:
                result = item

        if result is None:
            raise RuntimeError("Synthesis finished without a result")
        return result


def get_orchestrator(adapter: SynthesisAdapter | None = None) -> SynthesisOrchestrator:
    """Build an orchestrator from config.yml settings."""
    config = get_config()
    return SynthesisOrchestrator(
        adapter=adapter or get_synthesis_adapter(),
        max_chunk_size=config.tts.max_chunk_size,
        reconstructor=TimingReconstructor(
            words_per_cue=config.subtitles.words_per_cue,
            words_per_second=config.subtitles.words_per_second,
        ),
    )


async def synthesize_with_subtitles(
    text: str,
    voice: str,
    rate: str = "+0%",
    on_progress: ProgressCallback | None = None,
    adapter: SynthesisAdapter | None = None,
) -> SynthesisResult:
    """
    Synthesize text to audio with subtitles using configured defaults.

    Args:
        text: Validated input text
        voice: Engine voice identifier
        rate: Signed percentage rate (see map_speed_to_rate)
        on_progress: Optional progress callback
        adapter: Synthesis adapter, defaults to Edge TTS

    Returns:
        SynthesisResult with audio bytes and SRT document
    """
    return await get_orchestrator(adapter).run(text, voice, rate, on_progress)
