"""Pydantic schemas for the voice catalog."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Voice(BaseModel):
    """A synthesis voice offered by the engine."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    short_name: str
    locale: str
    language: str
    gender: str
    friendly_name: str

    @classmethod
    def from_engine(cls, data: dict[str, Any]) -> "Voice":
        """Build a Voice from an edge-tts voice listing entry."""
        locale = data["Locale"]
        return cls(
            name=data["Name"],
            short_name=data["ShortName"],
            locale=locale,
            language=locale.split("-")[0],
            gender=data.get("Gender", ""),
            friendly_name=data.get("FriendlyName", data["ShortName"]),
        )


class VoicesResponse(BaseModel):
    """Response for the voice listing endpoint."""

    voices: list[Voice]
    languages: list[str]
    total: int = Field(description="Number of voices after filtering")
