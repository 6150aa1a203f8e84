"""Split long text into synthesizer-safe chunks, preferring sentence boundaries."""

from ttstudio.tts.base import TextChunk

DEFAULT_MAX_CHUNK_SIZE = 3000

# A break point must land in the back half of the window to be accepted
MIN_BREAK_RATIO = 0.5

SENTENCE_ENDINGS = (". ", "! ", "? ", ".\n", "!\n", "?\n")


def _find_break(window: str, threshold: float) -> int | None:
    """Return the split position inside window, or None to hard cut."""
    # Sentence endings split right after the punctuation mark
    sentence_end = max(window.rfind(ending) for ending in SENTENCE_ENDINGS)
    if sentence_end > threshold:
        return sentence_end + 1

    newline = window.rfind("\n")
    if newline > threshold:
        return newline

    space = window.rfind(" ")
    if space > threshold:
        return space

    return None


def split_text(text: str, max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE) -> list[str]:
    """
    Split text into ordered chunks no longer than max_chunk_size.

    Within each window of max_chunk_size characters the last sentence ending
    wins, then the last newline, then the last space, as long as it lies past
    the middle of the window. Otherwise the text is cut at exactly
    max_chunk_size. Chunks are trimmed and never empty.

    Args:
        text: Input text of any length
        max_chunk_size: Maximum characters per chunk

    Returns:
        List of chunk strings, empty for blank input
    """
    if max_chunk_size < 1:
        raise ValueError("max_chunk_size must be positive")

    remaining = (text or "").strip()
    chunks: list[str] = []
    threshold = max_chunk_size * MIN_BREAK_RATIO

    while len(remaining) > max_chunk_size:
        window = remaining[:max_chunk_size]
        split_at = _find_break(window, threshold) or max_chunk_size

        piece = remaining[:split_at].strip()
        if piece:
            chunks.append(piece)
        remaining = remaining[split_at:].strip()

    if remaining:
        chunks.append(remaining)

    return chunks


def build_chunks(text: str, max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE) -> list[TextChunk]:
    """Split text and wrap the pieces as indexed TextChunks."""
    return [
        TextChunk(index=i, text=piece) for i, piece in enumerate(split_text(text, max_chunk_size))
    ]


def get_chunk_count(text: str, max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE) -> int:
    """Number of chunks text will be synthesized in."""
    return len(split_text(text, max_chunk_size))
