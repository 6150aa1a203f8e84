"""Utility functions for TTS module."""

import math
import re

from ttstudio.config import get_config
from ttstudio.tts.base import SynthesisAdapter
from ttstudio.tts.edge_tts import EdgeTTSAdapter

MIN_SPEED = 0.5
MAX_SPEED = 2.0

_RATE_PATTERN = re.compile(r"^([+-]?\d+)%$")


def map_speed_to_rate(speed: float) -> str:
    """
    Convert a speed multiplier into the engine's signed percentage rate.

    speed 0.5 to 2.0 maps to -50% to +100%; values outside are clamped.

    Examples:
        1.0 -> "+0%", 1.25 -> "+25%", 0.75 -> "-25%"
    """
    speed = min(MAX_SPEED, max(MIN_SPEED, float(speed)))
    # Round half up: 1.125 -> +13%
    percentage = math.floor((speed - 1) * 100 + 0.5)
    return f"+{percentage}%" if percentage >= 0 else f"{percentage}%"


def rate_to_speed(rate: str) -> float:
    """Convert a signed percentage rate back into a speed multiplier."""
    match = _RATE_PATTERN.match(rate.strip())
    if not match:
        raise ValueError(f"Invalid rate: {rate!r}")
    return 1 + int(match.group(1)) / 100


def get_synthesis_adapter(word_boundaries: bool | None = None) -> SynthesisAdapter:
    """
    Get the synthesis adapter configured for this application.

    Args:
        word_boundaries: Override config.yml's tts.word_boundaries

    Returns:
        SynthesisAdapter instance
    """
    if word_boundaries is None:
        word_boundaries = get_config().tts.word_boundaries
    return EdgeTTSAdapter(word_boundaries=word_boundaries)
