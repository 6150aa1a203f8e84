"""Subtitle timing reconstruction and SRT serialization.

Two strategies are supported and exactly one is used per synthesis run:

- word boundaries: true per-word timings reported by the engine, already
  shifted into assembled-audio time, grouped into readable cues;
- estimation: the original text spread uniformly over the estimated audio
  duration. Pauses at punctuation are not modelled, so cue boundaries are
  linear approximations.
"""

from collections.abc import Iterable
from pathlib import Path

from ttstudio.tts.base import (
    BYTES_PER_SECOND,
    BoundaryType,
    SubtitleCue,
    TimingMode,
    WordBoundaryEvent,
    bytes_to_duration_ms,
)

DEFAULT_WORDS_PER_CUE = 10
DEFAULT_WORDS_PER_SECOND = 2.5

SENTENCE_PUNCTUATION = (".", "!", "?")


def format_timestamp(ms: int) -> str:
    """Format milliseconds as an SRT timestamp (HH:MM:SS,mmm)."""
    ms = max(0, int(ms))
    hours = ms // 3_600_000
    minutes = (ms % 3_600_000) // 60_000
    seconds = (ms % 60_000) // 1_000
    millis = ms % 1_000
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{millis:03d}"


def generate_srt(cues: Iterable[SubtitleCue]) -> str:
    """Serialize cues as an SRT document."""
    blocks = [
        f"{cue.index}\n"
        f"{format_timestamp(cue.start_ms)} --> {format_timestamp(cue.end_ms)}\n"
        f"{cue.text}\n\n"
        for cue in cues
    ]
    return "".join(blocks)


def write_srt(cues: Iterable[SubtitleCue], output_path: Path) -> None:
    """
    Generate an SRT subtitle file.

    Args:
        cues: Subtitle cues in order
        output_path: Path to save the SRT file
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(generate_srt(cues))


def _is_sentence_mark(event: WordBoundaryEvent) -> bool:
    return event.boundary_type == BoundaryType.PUNCTUATION and event.text.strip().endswith(
        SENTENCE_PUNCTUATION
    )


class TimingReconstructor:
    """Build subtitle cues from word timings or from a duration estimate."""

    def __init__(
        self,
        words_per_cue: int = DEFAULT_WORDS_PER_CUE,
        words_per_second: float = DEFAULT_WORDS_PER_SECOND,
        bytes_per_second: int = BYTES_PER_SECOND,
    ):
        if words_per_cue < 1:
            raise ValueError("words_per_cue must be positive")
        self.words_per_cue = words_per_cue
        self.words_per_second = words_per_second
        self.bytes_per_second = bytes_per_second

    def estimate_duration_ms(
        self,
        audio_size: int | None = None,
        text: str = "",
        speed: float = 1.0,
    ) -> int:
        """
        Estimate spoken duration in milliseconds.

        The audio byte length is authoritative when known, since the engine
        output is constant bitrate and already reflects the speaking rate.
        Otherwise the word count is divided by the speaking pace and the
        speed multiplier.
        """
        if audio_size:
            return bytes_to_duration_ms(audio_size, self.bytes_per_second)

        word_count = len(text.split())
        if not word_count:
            return 0
        speed = speed if speed > 0 else 1.0
        return round(word_count / self.words_per_second * 1000 / speed)

    def from_word_boundaries(self, events: Iterable[WordBoundaryEvent]) -> list[SubtitleCue]:
        """
        Group word boundary events into subtitle cues.

        A cue closes after words_per_cue words, at a word ending a sentence,
        or at a punctuation event carrying a sentence end. Punctuation and
        empty events never appear in cue text.
        """
        ordered = sorted(
            (e for e in events if e.is_word or _is_sentence_mark(e)), key=lambda e: e.offset
        )
        if not any(e.is_word for e in ordered):
            return []

        groups: list[list[WordBoundaryEvent]] = []
        current: list[WordBoundaryEvent] = []
        for event in ordered:
            if not event.is_word:
                if current:
                    groups.append(current)
                    current = []
                continue

            current.append(event)
            is_sentence_end = event.text.rstrip().endswith(SENTENCE_PUNCTUATION)
            if len(current) >= self.words_per_cue or is_sentence_end:
                groups.append(current)
                current = []

        if current:
            groups.append(current)

        cues: list[SubtitleCue] = []
        for i, group in enumerate(groups, 1):
            start = group[0].start_ms
            end = max(start, group[-1].end_ms)
            cues.append(
                SubtitleCue(
                    index=i,
                    start_ms=start,
                    end_ms=end,
                    text=" ".join(w.text.strip() for w in group),
                )
            )
        return cues

    def from_estimate(self, text: str, total_duration_ms: int) -> list[SubtitleCue]:
        """
        Spread the words of text uniformly across total_duration_ms.

        Every word gets the same share of the duration, then fixed-size groups
        of words_per_cue words form the cues.
        """
        words = text.split()
        if not words:
            return []

        ms_per_word = max(0, total_duration_ms) / len(words)
        cues: list[SubtitleCue] = []
        for i in range(0, len(words), self.words_per_cue):
            group = words[i : i + self.words_per_cue]
            start = round(i * ms_per_word)
            end = round((i + len(group)) * ms_per_word)
            cues.append(
                SubtitleCue(
                    index=len(cues) + 1,
                    start_ms=start,
                    end_ms=end,
                    text=" ".join(group),
                )
            )
        return cues

    def reconstruct(
        self,
        mode: TimingMode,
        text: str = "",
        events: Iterable[WordBoundaryEvent] = (),
        total_duration_ms: int = 0,
    ) -> list[SubtitleCue]:
        """Build cues with the strategy selected for the run."""
        if mode == TimingMode.WORD_BOUNDARY:
            return self.from_word_boundaries(events)
        return self.from_estimate(text, total_duration_ms)
