"""Core data model and the synthesis adapter contract."""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any

from ttstudio.core.errors import MalformedMetadata

# The engine reports offsets in 100ns ticks
TICKS_PER_MS = 10_000

# Edge TTS streams audio-24khz-48kbitrate-mono-mp3, a constant bitrate format
# that can be concatenated byte-for-byte across chunks.
AUDIO_BITRATE_BPS = 48_000
BYTES_PER_SECOND = AUDIO_BITRATE_BPS // 8


def bytes_to_duration_ms(size: int, bytes_per_second: int = BYTES_PER_SECOND) -> int:
    """Estimate the duration of a constant-bitrate audio buffer."""
    if size <= 0:
        return 0
    return round(size / bytes_per_second * 1000)


class BoundaryType(StrEnum):
    """Kinds of timing markers emitted by the engine."""

    WORD = "WordBoundary"
    PUNCTUATION = "PunctuationBoundary"
    SENTENCE = "SentenceBoundary"


class TimingMode(StrEnum):
    """How subtitle timing was reconstructed for a run."""

    WORD_BOUNDARY = "word_boundary"
    ESTIMATED = "estimated"


@dataclass(frozen=True)
class TextChunk:
    """A bounded piece of the input text, synthesized independently."""

    index: int
    text: str


@dataclass(frozen=True)
class WordBoundaryEvent:
    """One timing marker locating a spoken word in the audio."""

    text: str
    offset: int  # ticks
    duration: int  # ticks
    boundary_type: BoundaryType = BoundaryType.WORD

    @property
    def start_ms(self) -> int:
        return round(self.offset / TICKS_PER_MS)

    @property
    def end_ms(self) -> int:
        return round((self.offset + self.duration) / TICKS_PER_MS)

    @property
    def is_word(self) -> bool:
        return self.boundary_type == BoundaryType.WORD and bool(self.text.strip())

    def shifted(self, offset_ms: int) -> "WordBoundaryEvent":
        """Return a copy moved forward by offset_ms."""
        return replace(self, offset=self.offset + offset_ms * TICKS_PER_MS)

    @classmethod
    def from_stream_item(cls, item: dict[str, Any]) -> "WordBoundaryEvent":
        """
        Parse one metadata item from the engine stream.

        Raises:
            MalformedMetadata: if the payload is missing fields or has bad values
        """
        try:
            boundary_type = BoundaryType(item["type"])
            offset = int(item["offset"])
            duration = int(item["duration"])
            text = str(item["text"])
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedMetadata(f"Invalid boundary payload: {item!r}") from e

        if offset < 0 or duration < 0:
            raise MalformedMetadata(f"Negative timing in boundary payload: {item!r}")

        return cls(text=text, offset=offset, duration=duration, boundary_type=boundary_type)


@dataclass
class ChunkAudio:
    """Audio and optional word timings returned by one adapter call."""

    audio: bytes
    word_boundaries: list[WordBoundaryEvent] | None = None


@dataclass
class ChunkResult:
    """A chunk paired with its synthesized audio."""

    chunk: TextChunk
    audio: bytes
    word_boundaries: list[WordBoundaryEvent] | None = None

    @property
    def duration_ms(self) -> int:
        return bytes_to_duration_ms(len(self.audio))


@dataclass(frozen=True)
class SubtitleCue:
    """A subtitle entry with times relative to the assembled audio."""

    index: int
    start_ms: int
    end_ms: int
    text: str


@dataclass(frozen=True)
class ProgressEvent:
    """Progress after one completed chunk."""

    current: int
    total: int
    percent: int

    @classmethod
    def after_chunk(cls, index: int, total: int) -> "ProgressEvent":
        current = index + 1
        percent = math.floor(100 * current / total + 0.5)
        return cls(current=current, total=total, percent=percent)

    def to_dict(self) -> dict[str, int]:
        return {"current": self.current, "total": self.total, "percent": self.percent}


@dataclass
class SynthesisResult:
    """Assembled audio and subtitle document for one run."""

    audio: bytes
    subtitle: str
    cues: list[SubtitleCue] = field(default_factory=list)
    chunk_count: int = 0
    duration_ms: int = 0
    timing_mode: TimingMode = TimingMode.ESTIMATED


class SynthesisAdapter(ABC):
    """Abstract boundary to the external synthesis engine."""

    # Whether synthesize_chunk returns word boundary events
    supports_word_boundaries: bool = False

    @abstractmethod
    async def synthesize_chunk(self, text: str, voice: str, rate: str = "+0%") -> ChunkAudio:
        """
        Synthesize one chunk of text.

        Args:
            text: Chunk text, already within the engine's size budget
            voice: Engine voice identifier (e.g. en-US-AriaNeural)
            rate: Signed percentage rate (e.g. +25%)

        Returns:
            ChunkAudio with raw audio bytes and, when supported, word timings

        Raises:
            SynthesisFailure: if the engine call fails
        """
        pass

    def descriptor(self) -> str:
        return self.__class__.__name__
