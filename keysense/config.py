"""
Configuration settings for the keysense curriculum planner.

Uses Pydantic Settings for environment variable management with .env file support.
Every variable is prefixed with ``KEYSENSE_`` (e.g. ``KEYSENSE_LOG_LEVEL=DEBUG``).
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="KEYSENSE_",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Skill Decay
    # ========================================
    decay_half_life_days: float = Field(
        default=14.0,
        gt=0,
        description="Days after which an unpractised skill has fully decayed",
    )
    review_threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Decay score below which a mastered skill needs review",
    )

    # ========================================
    # Session Type Selection
    # ========================================
    challenge_day_interval: int = Field(
        default=5,
        ge=1,
        description="Every Nth completed exercise makes the next session a challenge day",
    )
    review_session_min_decayed: int = Field(
        default=3,
        ge=1,
        description="Decayed skills needed before a whole session is spent on review",
    )

    # ========================================
    # Session Composition
    # ========================================
    warm_up_slots: int = Field(
        default=2,
        ge=1,
        description="Maximum warm-up exercises",
    )
    lesson_slots: int = Field(
        default=2,
        ge=1,
        description="Lesson exercises on a new-material day (next skill + parallel skill)",
    )
    max_review_exercises: int = Field(
        default=3,
        ge=1,
        description="Maximum decayed skills reviewed in one session",
    )
    tempo_challenge_bpm_increase: int = Field(
        default=10,
        ge=1,
        description="BPM added to the learner's comfort ceiling for tempo challenges",
    )
    recent_exercise_limit: int = Field(
        default=10,
        ge=1,
        description="Length of the recently played exercise list",
    )

    # ========================================
    # Exercise Resolution
    # ========================================
    resolution_policy: Literal["static-or-ai", "ai-first-with-fallback"] = Field(
        default="static-or-ai",
        description="How lesson exercises are resolved (static content first, or AI first)",
    )
    content_dir: str | None = Field(
        default=None,
        description="Directory of authored exercise and lesson JSON (None = no static content)",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    def get_decay_config(self) -> dict[str, Any]:
        """Get decay configuration as a dictionary."""
        return {
            "half_life_days": self.decay_half_life_days,
            "review_threshold": self.review_threshold,
        }

    def get_planner_config(self) -> dict[str, Any]:
        """Get session planner configuration as a dictionary."""
        return {
            "challenge_day_interval": self.challenge_day_interval,
            "review_session_min_decayed": self.review_session_min_decayed,
            "warm_up_slots": self.warm_up_slots,
            "lesson_slots": self.lesson_slots,
            "max_review_exercises": self.max_review_exercises,
            "tempo_challenge_bpm_increase": self.tempo_challenge_bpm_increase,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
