"""
Learner state records.

All records are frozen: updates produce new records (see
``mastery_tracker`` and ``profile_updates``), so a profile snapshot can be
shared between planners and threads without copying.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

DEFAULT_TEMPO_MIN = 40
DEFAULT_TEMPO_MAX = 80


@dataclass(frozen=True)
class MasterySkillRecord:
    """
    Practice history for one skill.

    ``decay_score`` is a cached value for display only; decay is always
    recomputed from ``last_practiced_at`` when it matters.
    """

    last_practiced_at: datetime
    mastered_at: datetime | None = None  # None while still being learned
    completion_count: int = 0
    decay_score: float = 1.0

    @property
    def is_mastered(self) -> bool:
        return self.mastered_at is not None


@dataclass(frozen=True)
class TempoRange:
    """Comfortable tempo range in BPM."""

    min_bpm: int = DEFAULT_TEMPO_MIN
    max_bpm: int = DEFAULT_TEMPO_MAX


@dataclass(frozen=True)
class LearnerProfile:
    """
    Snapshot of a learner's state.

    ``mastered_skills`` keeps mastery order (oldest first).
    ``recent_exercise_ids`` is most-recent first.
    """

    mastered_skills: tuple[str, ...] = ()
    skill_mastery_data: Mapping[str, MasterySkillRecord] = field(default_factory=dict)
    weak_notes: tuple[int, ...] = ()
    tempo_range: TempoRange = field(default_factory=TempoRange)
    recent_exercise_ids: tuple[str, ...] = ()
    total_exercises_completed: int = 0
    note_accuracy: Mapping[int, float] = field(default_factory=dict)
    note_attempts: Mapping[int, int] = field(default_factory=dict)

    def is_mastered(self, skill_id: str) -> bool:
        return skill_id in self.mastered_skills

    def get_record(self, skill_id: str) -> MasterySkillRecord | None:
        return self.skill_mastery_data.get(skill_id)


@dataclass(frozen=True)
class NoteResult:
    """Accuracy for one pitch within a scored exercise."""

    midi_note: int
    accuracy: float


@dataclass(frozen=True)
class ExerciseResult:
    """Outcome of one scored exercise, as reported by the scoring engine."""

    tempo: int
    score: float  # 0-1
    note_results: tuple[NoteResult, ...] = ()
