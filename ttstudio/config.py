from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    base_url: str = Field(default="http://localhost:8000")
    debug: bool = Field(default=False)

    # Synthesis
    default_voice: str = Field(default="en-US-AriaNeural")
    max_text_length: int = Field(default=50_000)
    tts_rate_limit: str = Field(default="30/minute")

    # Optional YAML overrides for chunking and subtitle pacing
    config_path: str = Field(default="config.yml")


class TTSConfig:
    """Chunking and engine configuration from config.yml."""

    def __init__(self, data: dict[str, Any]) -> None:
        self.max_chunk_size: int = data.get("max_chunk_size", 3000)
        self.word_boundaries: bool = data.get("word_boundaries", True)


class SubtitleConfig:
    """Subtitle grouping and estimation configuration from config.yml."""

    def __init__(self, data: dict[str, Any]) -> None:
        self.words_per_cue: int = data.get("words_per_cue", 10)
        # ~150 words per minute when no timing metadata is available
        self.words_per_second: float = data.get("words_per_second", 2.5)


class AppConfig:
    """Combined application configuration from .env and config.yml."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self._load_yaml()

    def _load_yaml(self) -> None:
        config_path = Path(self.settings.config_path)
        if config_path.exists():
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        else:
            data = {}

        self.tts = TTSConfig(data.get("tts", {}))
        self.subtitles = SubtitleConfig(data.get("subtitles", {}))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_config() -> AppConfig:
    """Get cached full config instance."""
    return AppConfig(get_settings())
