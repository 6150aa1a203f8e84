"""Error taxonomy for speech synthesis.

Validation errors are raised before any work starts. Synthesis errors abort
the whole run. Malformed timing metadata is handled where it is parsed and
never leaves the adapter.
"""


class TTSError(Exception):
    """Base class for errors surfaced to API and CLI callers."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingParameter(TTSError):
    """Text or voice was not provided."""

    status_code = 400


class InputTooLarge(TTSError):
    """Text exceeds the configured maximum length."""

    status_code = 400

    def __init__(self, length: int, max_length: int) -> None:
        super().__init__(f"Text too long. Maximum {max_length} characters.")
        self.length = length
        self.max_length = max_length


class SynthesisFailure(TTSError):
    """The synthesis engine failed while producing audio for a chunk."""

    status_code = 502

    def __init__(self, message: str, chunk_index: int | None = None) -> None:
        super().__init__(message)
        self.chunk_index = chunk_index


class VoiceCatalogError(TTSError):
    """The voice list could not be fetched from the engine."""

    status_code = 503


class MalformedMetadata(ValueError):
    """A word-boundary payload from the engine could not be parsed."""
