from ttstudio.schemas.tts import (
    StreamComplete,
    StreamError,
    StreamProgress,
    StreamStart,
    TTSRequest,
)
from ttstudio.schemas.voice import Voice, VoicesResponse

__all__ = [
    "StreamComplete",
    "StreamError",
    "StreamProgress",
    "StreamStart",
    "TTSRequest",
    "Voice",
    "VoicesResponse",
]
