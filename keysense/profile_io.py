"""
Learner profile snapshots as JSON.

The pydantic documents validate snapshot files; the planner core only
sees the frozen ``LearnerProfile`` records built from them.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from keysense.learning import LearnerProfile, MasterySkillRecord, TempoRange


class ProfileFormatError(Exception):
    """A profile snapshot could not be read."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        super().__init__(message)


# ========================================
# Snapshot Documents
# ========================================


class SkillRecordDocument(BaseModel):
    """Stored mastery record for one skill."""

    last_practiced_at: datetime
    mastered_at: datetime | None = None
    completion_count: int = Field(default=0, ge=0)
    decay_score: float = Field(default=1.0, ge=0.0, le=1.0)


class TempoRangeDocument(BaseModel):
    min: int = Field(default=40, gt=0)
    max: int = Field(default=80, gt=0)


class ProfileDocument(BaseModel):
    """Stored learner profile."""

    mastered_skills: list[str] = Field(default_factory=list)
    skill_mastery_data: dict[str, SkillRecordDocument] = Field(default_factory=dict)
    weak_notes: list[int] = Field(default_factory=list)
    tempo_range: TempoRangeDocument = Field(default_factory=TempoRangeDocument)
    recent_exercise_ids: list[str] = Field(default_factory=list)
    total_exercises_completed: int = Field(default=0, ge=0)
    note_accuracy: dict[int, float] = Field(default_factory=dict)
    note_attempts: dict[int, int] = Field(default_factory=dict)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


# ========================================
# Conversion
# ========================================


def profile_from_dict(data: dict[str, Any]) -> LearnerProfile:
    """
    Build a LearnerProfile from snapshot data.

    Raises:
        ProfileFormatError: If the data does not match the snapshot schema
    """
    try:
        doc = ProfileDocument.model_validate(data)
    except ValidationError as e:
        raise ProfileFormatError(f"Invalid profile: {e}") from e

    records = {
        skill_id: MasterySkillRecord(
            last_practiced_at=_as_utc(record.last_practiced_at),
            mastered_at=_as_utc(record.mastered_at),
            completion_count=record.completion_count,
            decay_score=record.decay_score,
        )
        for skill_id, record in doc.skill_mastery_data.items()
    }
    return LearnerProfile(
        mastered_skills=tuple(dict.fromkeys(doc.mastered_skills)),
        skill_mastery_data=records,
        weak_notes=tuple(doc.weak_notes),
        tempo_range=TempoRange(min_bpm=doc.tempo_range.min, max_bpm=doc.tempo_range.max),
        recent_exercise_ids=tuple(doc.recent_exercise_ids),
        total_exercises_completed=doc.total_exercises_completed,
        note_accuracy=dict(doc.note_accuracy),
        note_attempts=dict(doc.note_attempts),
    )


def profile_to_dict(profile: LearnerProfile) -> dict[str, Any]:
    """Snapshot data for a LearnerProfile (JSON-compatible)."""
    doc = ProfileDocument(
        mastered_skills=list(profile.mastered_skills),
        skill_mastery_data={
            skill_id: SkillRecordDocument(
                last_practiced_at=record.last_practiced_at,
                mastered_at=record.mastered_at,
                completion_count=record.completion_count,
                decay_score=record.decay_score,
            )
            for skill_id, record in profile.skill_mastery_data.items()
        },
        weak_notes=list(profile.weak_notes),
        tempo_range=TempoRangeDocument(
            min=profile.tempo_range.min_bpm, max=profile.tempo_range.max_bpm
        ),
        recent_exercise_ids=list(profile.recent_exercise_ids),
        total_exercises_completed=profile.total_exercises_completed,
        note_accuracy=dict(profile.note_accuracy),
        note_attempts=dict(profile.note_attempts),
    )
    return doc.model_dump(mode="json")


# ========================================
# Files
# ========================================


def load_profile(path: Path | str, missing_ok: bool = False) -> LearnerProfile:
    """
    Read a profile snapshot file.

    Args:
        path: JSON file
        missing_ok: Return a fresh profile when the file does not exist

    Raises:
        ProfileFormatError: If the file is unreadable or invalid
    """
    path = Path(path)
    if not path.exists():
        if missing_ok:
            logger.info(f"No profile at {path}, starting fresh")
            return LearnerProfile()
        raise ProfileFormatError(f"Profile not found: {path}", path)

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ProfileFormatError(f"Failed to read {path}: {e}", path) from e

    if not isinstance(data, dict):
        raise ProfileFormatError(f"Expected a JSON object in {path}", path)

    try:
        return profile_from_dict(data)
    except ProfileFormatError as e:
        e.path = path
        raise


def save_profile(profile: LearnerProfile, path: Path | str) -> Path:
    """Write a profile snapshot file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(profile_to_dict(profile), f, indent=2)
    logger.debug(f"Profile saved to {path}")
    return path
