"""Text-to-speech synthesis with aligned subtitles.

Long text is split into chunks, synthesized chunk by chunk through Edge TTS,
and stitched into one MP3 track with an SRT subtitle document.
"""

from ttstudio.tts.base import (
    ChunkAudio,
    ProgressEvent,
    SubtitleCue,
    SynthesisAdapter,
    SynthesisResult,
    TextChunk,
    TimingMode,
    WordBoundaryEvent,
)
from ttstudio.tts.chunker import build_chunks, get_chunk_count, split_text
from ttstudio.tts.edge_tts import EdgeTTSAdapter
from ttstudio.tts.orchestrator import (
    SynthesisOrchestrator,
    get_orchestrator,
    synthesize_with_subtitles,
)
from ttstudio.tts.timing import TimingReconstructor, format_timestamp, generate_srt, write_srt
from ttstudio.tts.utils import get_synthesis_adapter, map_speed_to_rate, rate_to_speed
from ttstudio.tts.voices import VoiceCatalog, get_preview_text, get_voice_catalog

__all__ = [
    "ChunkAudio",
    "EdgeTTSAdapter",
    "ProgressEvent",
    "SubtitleCue",
    "SynthesisAdapter",
    "SynthesisOrchestrator",
    "SynthesisResult",
    "TextChunk",
    "TimingMode",
    "TimingReconstructor",
    "VoiceCatalog",
    "WordBoundaryEvent",
    "build_chunks",
    "format_timestamp",
    "generate_srt",
    "get_chunk_count",
    "get_orchestrator",
    "get_preview_text",
    "get_synthesis_adapter",
    "get_voice_catalog",
    "map_speed_to_rate",
    "rate_to_speed",
    "split_text",
    "synthesize_with_subtitles",
    "write_srt",
]
