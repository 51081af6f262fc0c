"""
Exercise resolution: turn a target skill into an ExerciseRef.

Fallback chain for static content:
1. An authored exercise for the skill that was not played recently
2. Any authored exercise for the skill
3. An AI generation request

Exercises already in the plan are skipped while another authored exercise
remains, and reused before resorting to generation.

The content loader is a collaborator; if it raises, the lookup is treated
as "no authored exercise" and resolution moves down the chain.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any

from loguru import logger

from keysense.content import ContentLoader, ExerciseContent, InMemoryContentLoader
from keysense.curriculum import SkillNode

AI_GENERATED_ID = "ai-generated"


class ExerciseSource(str, Enum):
    """Where an exercise comes from."""

    STATIC = "static"
    AI = "ai"
    AI_WITH_FALLBACK = "ai-with-fallback"


class ResolutionPolicy(str, Enum):
    """How lesson exercises are resolved."""

    STATIC_OR_AI = "static-or-ai"
    AI_FIRST_WITH_FALLBACK = "ai-first-with-fallback"


@dataclass(frozen=True)
class ExerciseRef:
    """
    Pointer to an authored exercise or a request for a generated one.

    ``reason`` is shown to the learner as-is.
    """

    exercise_id: str
    source: ExerciseSource
    skill_node_id: str
    reason: str
    fallback_exercise_id: str | None = None

    @property
    def is_generated(self) -> bool:
        return self.source != ExerciseSource.STATIC

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["source"] = self.source.value
        return data


def ai_exercise_id(kind: str, skill_id: str) -> str:
    """Placeholder id for a generation request, e.g. ``ai-review-white-keys``."""
    return f"ai-{kind}-{skill_id}"


class ExerciseResolver:
    """
    Resolves skills to exercises under a resolution policy.

    Args:
        loader: Content collaborator (empty content if None)
        policy: STATIC_OR_AI or AI_FIRST_WITH_FALLBACK
    """

    def __init__(
        self,
        loader: ContentLoader | None = None,
        policy: ResolutionPolicy | str = ResolutionPolicy.STATIC_OR_AI,
    ):
        self.loader = loader if loader is not None else InMemoryContentLoader()
        self.policy = ResolutionPolicy(policy)

    def get_exercise(self, exercise_id: str) -> ExerciseContent | None:
        """Look up authored content, treating loader failures as missing."""
        try:
            return self.loader.get_exercise(exercise_id)
        except Exception as e:
            logger.warning(f"Content lookup failed for {exercise_id}: {e}")
            return None

    def has_exercise(self, exercise_id: str) -> bool:
        return self.get_exercise(exercise_id) is not None

    def find_static(
        self,
        skill: SkillNode,
        recent: Collection[str] = (),
        exclude: Collection[str] = (),
    ) -> str | None:
        """
        Best authored exercise for a skill.

        Args:
            skill: Target skill
            recent: Recently played exercise ids (avoided if possible)
            exclude: Exercise ids that must not be returned

        Returns:
            Exercise id, or None when nothing authored qualifies
        """
        authored = [
            exercise_id
            for exercise_id in skill.target_exercise_ids
            if exercise_id not in exclude and self.has_exercise(exercise_id)
        ]
        for exercise_id in authored:
            if exercise_id not in recent:
                return exercise_id
        return authored[0] if authored else None

    def resolve(
        self,
        skill: SkillNode,
        *,
        reason: str,
        ai_reason: str | None = None,
        kind: str = "lesson",
        recent: Collection[str] = (),
        exclude: Collection[str] = (),
    ) -> ExerciseRef:
        """
        Resolve one exercise for a skill. Never fails.

        Args:
            skill: Target skill
            reason: Learner-facing reason for an authored exercise
            ai_reason: Learner-facing reason for a generated one
            kind: Label used in generated exercise ids
            recent: Recently played exercise ids
            exclude: Exercise ids already used in the plan (reused only when
                the skill has no other authored exercise)
        """
        static_id = self.find_static(skill, recent, exclude)
        if static_id is None and exclude:
            static_id = self.find_static(skill, recent)
        ai_reason = ai_reason or f"AI exercise for: {skill.name}"

        if self.policy == ResolutionPolicy.AI_FIRST_WITH_FALLBACK:
            return ExerciseRef(
                exercise_id=ai_exercise_id(kind, skill.id),
                source=ExerciseSource.AI_WITH_FALLBACK if static_id else ExerciseSource.AI,
                skill_node_id=skill.id,
                reason=ai_reason,
                fallback_exercise_id=static_id,
            )

        if static_id is not None:
            return ExerciseRef(
                exercise_id=static_id,
                source=ExerciseSource.STATIC,
                skill_node_id=skill.id,
                reason=reason,
            )

        logger.debug(f"No authored exercise for {skill.id}, requesting generation")
        return ExerciseRef(
            exercise_id=ai_exercise_id(kind, skill.id),
            source=ExerciseSource.AI,
            skill_node_id=skill.id,
            reason=ai_reason,
        )
