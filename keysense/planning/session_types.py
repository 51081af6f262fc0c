"""
Session type selection.

Rules, in priority order:
1. Every Nth completed exercise (5, 10, 15, ...) is a challenge day
2. Three or more decayed skills make a review day
3. One or two decayed skills make a mixed day (review + new material)
4. Otherwise, new material

A challenge day wins even when the review conditions also hold.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum

from loguru import logger

from keysense.config import Settings, get_settings
from keysense.learning import MasterySkillRecord, MasteryTracker


class SessionType(str, Enum):
    """Kind of practice session."""

    NEW_MATERIAL = "new-material"
    REVIEW = "review"
    CHALLENGE = "challenge"
    MIXED = "mixed"


@dataclass(frozen=True)
class PlannerConfig:
    """Session selection and composition tuning."""

    challenge_day_interval: int = 5
    review_session_min_decayed: int = 3
    warm_up_slots: int = 2
    lesson_slots: int = 2
    max_review_exercises: int = 3
    tempo_challenge_bpm_increase: int = 10

    def __post_init__(self):
        """Reject values the settings layer would refuse (all must be >= 1)."""
        for name, value in asdict(self).items():
            if value < 1:
                raise ValueError(f"PlannerConfig.{name} must be at least 1, got {value}")

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> PlannerConfig:
        settings = settings or get_settings()
        return cls(**settings.get_planner_config())


def is_challenge_day(total_completed: int, interval: int = 5) -> bool:
    """Every ``interval``-th completed exercise; an interval below 1 means never."""
    if interval < 1:
        return False
    return total_completed > 0 and total_completed % interval == 0


def select_session_type(
    mastered_ids: Iterable[str],
    records: Mapping[str, MasterySkillRecord],
    total_completed: int,
    tracker: MasteryTracker | None = None,
    config: PlannerConfig | None = None,
    now: datetime | None = None,
) -> SessionType:
    """
    Choose the session type for a learner.

    Args:
        mastered_ids: Mastered skill ids
        records: Mastery records by skill id
        total_completed: Exercises completed so far
        tracker: Decay model (default graph and decay settings if None)
        config: Selection thresholds (defaults if None)
        now: Evaluation time (UTC now if None)

    Returns:
        SessionType
    """
    config = config or PlannerConfig()

    if is_challenge_day(total_completed, config.challenge_day_interval):
        logger.debug(f"Challenge day at {total_completed} completed exercises")
        return SessionType.CHALLENGE

    tracker = tracker or MasteryTracker()
    decayed = tracker.count_decayed(mastered_ids, records, now)

    if decayed >= config.review_session_min_decayed:
        session_type = SessionType.REVIEW
    elif decayed >= 1:
        session_type = SessionType.MIXED
    else:
        session_type = SessionType.NEW_MATERIAL

    logger.debug(f"Session type {session_type.value}: {decayed} decayed skills")
    return session_type
