"""Configuration utilities for NMS fusion."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application configuration sourced from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="NMS_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    nms_threshold: float = Field(default=0.1, description="Maximum IoU allowed between kept same-class boxes.")
    log_format: str = Field(default="text")
    log_level: str = Field(default="INFO")
    synthetic_frames: int = Field(default=5, ge=0)
    synthetic_detections: int = Field(default=5, ge=0)
    synthetic_class_ids: List[int] = Field(default_factory=lambda: [1, 2, 3], min_length=1)
    seed: Optional[int] = Field(default=None, description="Seed for synthetic frame generation.")
    output_path: Optional[Path] = Field(default=None, description="Where to write filtered results JSON.")

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in {"text", "json"}:
            raise ValueError("log_format must be 'text' or 'json'")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("output_path", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Optional[Path]:
        if value is None or value == "":
            return None
        return Path(value).expanduser()


def load_settings(**overrides: object) -> AppSettings:
    """Return application settings, applying optional overrides."""

    return AppSettings(**overrides)
