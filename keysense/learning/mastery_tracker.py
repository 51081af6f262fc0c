"""
Mastery Tracker: skill decay and mastery promotion.

Decay is linear: a skill practised today scores 1.0 and reaches 0.0
``half_life_days`` later. A mastered skill whose score drops below
``review_threshold`` needs review.

All operations are pure. Updates return a new ``LearnerProfile`` inside a
``PracticeResult`` together with any ``SkillMasteredEvent`` raised.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from datetime import UTC, datetime

from loguru import logger

from keysense.config import Settings, get_settings
from keysense.curriculum import SkillGraph, SkillNode, get_skill_graph
from keysense.learning.events import SkillMasteredEvent
from keysense.learning.records import LearnerProfile, MasterySkillRecord

HALF_LIFE_DAYS = 14.0
REVIEW_THRESHOLD = 0.5
SECONDS_PER_DAY = 86400.0


@dataclass(frozen=True)
class DecayConfig:
    """Decay tuning."""

    half_life_days: float = HALF_LIFE_DAYS
    review_threshold: float = REVIEW_THRESHOLD

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> DecayConfig:
        settings = settings or get_settings()
        return cls(**settings.get_decay_config())


@dataclass(frozen=True)
class PracticeResult:
    """Outcome of a mastery update."""

    profile: LearnerProfile
    record: MasterySkillRecord | None
    newly_mastered: bool = False
    events: tuple[SkillMasteredEvent, ...] = ()


# ============================================================================
# Pure decay helpers
# ============================================================================


def utc_now() -> datetime:
    return datetime.now(UTC)


def days_since(timestamp: datetime, now: datetime | None = None) -> float:
    """
    Days elapsed since ``timestamp``.

    Naive datetimes are treated as UTC.
    """
    if now is None:
        now = utc_now()
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return (now - timestamp).total_seconds() / SECONDS_PER_DAY


def decay_score(
    record: MasterySkillRecord,
    now: datetime | None = None,
    half_life_days: float = HALF_LIFE_DAYS,
) -> float:
    """
    Linear decay score in [0, 1].

    A timestamp in the future counts as practised now.
    """
    days = max(0.0, days_since(record.last_practiced_at, now))
    return max(0.0, 1.0 - days / half_life_days)


# ============================================================================
# Tracker
# ============================================================================


class MasteryTracker:
    """
    Decay queries and mastery promotion over a skill graph.

    Skill ids unknown to the graph are ignored (logged, no change).
    """

    def __init__(
        self,
        graph: SkillGraph | None = None,
        config: DecayConfig | None = None,
    ):
        self.graph = graph or get_skill_graph()
        self.config = config or DecayConfig()

    # ========================================
    # Queries
    # ========================================

    def decay(self, record: MasterySkillRecord, now: datetime | None = None) -> float:
        return decay_score(record, now, self.config.half_life_days)

    def needs_review(self, record: MasterySkillRecord, now: datetime | None = None) -> bool:
        return self.decay(record, now) < self.config.review_threshold

    def get_skills_needing_review(
        self,
        mastered_ids: Iterable[str],
        records: Mapping[str, MasterySkillRecord],
        now: datetime | None = None,
    ) -> list[SkillNode]:
        """
        Mastered skills whose decay is below the review threshold.

        Skills without a record, or unknown to the graph, are skipped.

        Returns:
            Nodes ordered by staleness, least recently practised first
        """
        if now is None:
            now = utc_now()

        mastered = set(mastered_ids)
        stale: list[tuple[SkillNode, MasterySkillRecord]] = []
        for node in self.graph:
            if node.id not in mastered:
                continue
            record = records.get(node.id)
            if record is None:
                continue
            if self.needs_review(record, now):
                stale.append((node, record))

        # Stable sort: equally stale skills stay in curriculum order
        stale.sort(key=lambda pair: days_since(pair[1].last_practiced_at, now), reverse=True)
        return [node for node, _ in stale]

    def count_decayed(
        self,
        mastered_ids: Iterable[str],
        records: Mapping[str, MasterySkillRecord],
        now: datetime | None = None,
    ) -> int:
        return len(self.get_skills_needing_review(mastered_ids, records, now))

    def calculate_decayed_skills(
        self, profile: LearnerProfile, now: datetime | None = None
    ) -> list[str]:
        """Ids of the profile's mastered skills that need review, stalest first."""
        nodes = self.get_skills_needing_review(
            profile.mastered_skills, profile.skill_mastery_data, now
        )
        return [node.id for node in nodes]

    def refresh_decay_scores(
        self, profile: LearnerProfile, now: datetime | None = None
    ) -> LearnerProfile:
        """Recompute the cached ``decay_score`` of every record."""
        if now is None:
            now = utc_now()
        records = {
            skill_id: replace(record, decay_score=self.decay(record, now))
            for skill_id, record in profile.skill_mastery_data.items()
        }
        return replace(profile, skill_mastery_data=records)

    # ========================================
    # Updates
    # ========================================

    def record_practice(
        self,
        profile: LearnerProfile,
        skill_id: str,
        passed: bool,
        now: datetime | None = None,
    ) -> PracticeResult:
        """
        Record one practice attempt of a skill.

        Every attempt refreshes ``last_practiced_at`` and resets decay;
        passing attempts also count towards ``required_completions``.
        Reaching the required count promotes the skill to mastered.
        """
        node = self.graph.get_by_id(skill_id)
        if node is None:
            logger.warning(f"Ignoring practice for unknown skill: {skill_id}")
            return PracticeResult(profile=profile, record=None)

        if now is None:
            now = utc_now()

        existing = profile.get_record(skill_id)
        count = existing.completion_count if existing else 0
        if passed:
            count += 1

        record = MasterySkillRecord(
            last_practiced_at=now,
            mastered_at=existing.mastered_at if existing else None,
            completion_count=count,
            decay_score=1.0,
        )
        profile = replace(
            profile, skill_mastery_data={**profile.skill_mastery_data, skill_id: record}
        )
        logger.debug(
            f"Practice {skill_id}: passed={passed}, "
            f"completions={count}/{node.required_completions}"
        )

        if passed and count >= node.required_completions and not profile.is_mastered(skill_id):
            return self._promote(profile, node, record, now)
        return PracticeResult(profile=profile, record=record)

    def mark_mastered(
        self,
        profile: LearnerProfile,
        skill_id: str,
        now: datetime | None = None,
    ) -> PracticeResult:
        """
        Promote a skill to mastered directly.

        A skill that is already mastered is left untouched.
        """
        if profile.is_mastered(skill_id):
            return PracticeResult(profile=profile, record=profile.get_record(skill_id))

        node = self.graph.get_by_id(skill_id)
        if node is None:
            logger.warning(f"Ignoring mastery of unknown skill: {skill_id}")
            return PracticeResult(profile=profile, record=None)

        if now is None:
            now = utc_now()

        existing = profile.get_record(skill_id)
        record = MasterySkillRecord(
            last_practiced_at=now,
            completion_count=existing.completion_count if existing else 0,
        )
        return self._promote(profile, node, record, now)

    def _promote(
        self,
        profile: LearnerProfile,
        node: SkillNode,
        record: MasterySkillRecord,
        now: datetime,
    ) -> PracticeResult:
        record = replace(record, mastered_at=now, last_practiced_at=now, decay_score=1.0)
        profile = replace(
            profile,
            mastered_skills=profile.mastered_skills + (node.id,),
            skill_mastery_data={**profile.skill_mastery_data, node.id: record},
        )
        event = SkillMasteredEvent(
            skill_id=node.id,
            skill_name=node.name,
            mastered_at=now,
            completion_count=record.completion_count,
        )
        logger.info(f"Mastered {node.id} after {record.completion_count} completions")
        return PracticeResult(profile=profile, record=record, newly_mastered=True, events=(event,))
