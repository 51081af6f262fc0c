"""
Session Planner: compose a daily practice session.

A session has three sections, each always non-empty:
- warm-up: weak-note work from mastered skills, then a recent-skill review,
  then a fixed root-skill fallback
- lesson: depends on the session type (new material, review, mixed, challenge)
- challenge: the deepest available skill, or a tempo push on the deepest
  mastered skill once the curriculum is exhausted

Every decision appends a human-readable line to the plan's reasoning.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from loguru import logger

from keysense.content import ContentLoader
from keysense.curriculum import (
    SkillCategory,
    SkillGraph,
    SkillNode,
    get_skill_graph,
    midi_to_note_name,
)
from keysense.learning import LearnerProfile, MasteryTracker
from keysense.planning.exercise_resolver import (
    AI_GENERATED_ID,
    ExerciseRef,
    ExerciseResolver,
    ExerciseSource,
    ResolutionPolicy,
    ai_exercise_id,
)
from keysense.planning.session_types import PlannerConfig, SessionType, select_session_type

CATEGORY_PRIORITY: dict[SkillCategory, int] = {
    SkillCategory.NOTE_FINDING: 0,
    SkillCategory.INTERVALS: 1,
    SkillCategory.RHYTHM: 2,
    SkillCategory.SCALES: 3,
    SkillCategory.BLACK_KEYS: 4,
    SkillCategory.KEY_SIGNATURES: 5,
    SkillCategory.CHORDS: 6,
    SkillCategory.HAND_INDEPENDENCE: 7,
    SkillCategory.ARPEGGIOS: 8,
    SkillCategory.EXPRESSION: 9,
    SkillCategory.SIGHT_READING: 10,
    SkillCategory.SONGS: 11,
}
UNKNOWN_CATEGORY_PRIORITY = len(CATEGORY_PRIORITY)

FALLBACK_WARM_UP_ID = "lesson-01-ex-01"
WEAK_NOTES_SHOWN = 3


def category_priority(category: SkillCategory | str) -> int:
    return CATEGORY_PRIORITY.get(category, UNKNOWN_CATEGORY_PRIORITY)


@dataclass(frozen=True)
class SessionPlan:
    """A proposed practice session with its justification."""

    session_type: SessionType
    warm_up: tuple[ExerciseRef, ...]
    lesson: tuple[ExerciseRef, ...]
    challenge: tuple[ExerciseRef, ...]
    reasoning: tuple[str, ...] = field(default_factory=tuple)

    @property
    def exercises(self) -> list[ExerciseRef]:
        """All exercises in play order."""
        return [*self.warm_up, *self.lesson, *self.challenge]

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_type": self.session_type.value,
            "warm_up": [ref.to_dict() for ref in self.warm_up],
            "lesson": [ref.to_dict() for ref in self.lesson],
            "challenge": [ref.to_dict() for ref in self.challenge],
            "reasoning": list(self.reasoning),
        }


def get_next_skill_to_learn(
    mastered_ids: Iterable[str], graph: SkillGraph | None = None
) -> SkillNode | None:
    """
    The next skill to learn: shallowest available, then by category priority.

    Returns:
        SkillNode, or None when every skill is mastered
    """
    graph = graph or get_skill_graph()
    ranked = _rank_shallowest(graph, graph.get_available_skills(mastered_ids))
    return ranked[0] if ranked else None


def _rank_shallowest(graph: SkillGraph, nodes: Iterable[SkillNode]) -> list[SkillNode]:
    return sorted(nodes, key=lambda n: (graph.get_depth(n.id), category_priority(n.category)))


def _rank_deepest(graph: SkillGraph, nodes: Iterable[SkillNode]) -> list[SkillNode]:
    return sorted(nodes, key=lambda n: (-graph.get_depth(n.id), category_priority(n.category)))


class SessionPlanner:
    """
    Builds SessionPlans from learner snapshots.

    The planner holds no learner state; one instance can serve any number
    of learners concurrently.
    """

    def __init__(
        self,
        graph: SkillGraph | None = None,
        loader: ContentLoader | None = None,
        policy: ResolutionPolicy | str = ResolutionPolicy.STATIC_OR_AI,
        config: PlannerConfig | None = None,
        tracker: MasteryTracker | None = None,
    ):
        self.graph = graph or get_skill_graph()
        self.config = config or PlannerConfig()
        self.tracker = tracker or MasteryTracker(self.graph)
        self.resolver = ExerciseResolver(loader, policy)

    def get_next_skill_to_learn(self, mastered_ids: Iterable[str]) -> SkillNode | None:
        return get_next_skill_to_learn(mastered_ids, self.graph)

    def generate_session_plan(
        self,
        profile: LearnerProfile,
        mastered_ids: Sequence[str] | None = None,
        now: datetime | None = None,
    ) -> SessionPlan:
        """
        Plan today's session for a learner.

        Args:
            profile: Learner snapshot (never modified)
            mastered_ids: Mastered skill ids, oldest first
                (``profile.mastered_skills`` if None)
            now: Evaluation time for decay (UTC now if None)

        Returns:
            SessionPlan with non-empty sections and at least three reasoning lines
        """
        if mastered_ids is None:
            mastered_ids = profile.mastered_skills
        mastered = [skill_id for skill_id in mastered_ids if skill_id in self.graph]

        session_type = select_session_type(
            mastered,
            profile.skill_mastery_data,
            profile.total_exercises_completed,
            tracker=self.tracker,
            config=self.config,
            now=now,
        )
        build = _PlanBuilder(self, profile, mastered, now)

        if session_type == SessionType.REVIEW:
            lesson = build.review_day()
        elif session_type == SessionType.CHALLENGE:
            lesson = build.challenge_day()
        elif session_type == SessionType.MIXED:
            lesson = build.mixed_day()
        else:
            lesson = build.new_material_day()

        plan = SessionPlan(
            session_type=session_type,
            warm_up=tuple(build.warm_up),
            lesson=tuple(lesson),
            challenge=tuple(build.challenge),
            reasoning=tuple(build.reasoning),
        )
        logger.debug(
            f"Planned {session_type.value} session: "
            f"{len(plan.warm_up)}/{len(plan.lesson)}/{len(plan.challenge)} exercises"
        )
        return plan


class _PlanBuilder:
    """Working state for one plan. Sections are built in play order."""

    def __init__(
        self,
        planner: SessionPlanner,
        profile: LearnerProfile,
        mastered: list[str],
        now: datetime | None,
    ):
        self.graph = planner.graph
        self.config = planner.config
        self.tracker = planner.tracker
        self.resolver = planner.resolver
        self.profile = profile
        self.mastered = mastered
        self.mastered_set = set(mastered)
        self.recent = set(profile.recent_exercise_ids)
        self.now = now

        self.reasoning: list[str] = []
        self.used: set[str] = set()
        self.warm_up: list[ExerciseRef] = []
        self.challenge: list[ExerciseRef] = []

    # ========================================
    # Session types
    # ========================================

    def new_material_day(self) -> list[ExerciseRef]:
        self.reasoning.append("New material day: learning the next skill")
        self._build_warm_up()
        lesson = self._new_material_lesson(self.config.lesson_slots)
        self._build_challenge(extra=False)
        return lesson

    def challenge_day(self) -> list[ExerciseRef]:
        self.reasoning.append("Challenge day!")
        self._build_warm_up()
        lesson = self._new_material_lesson(self.config.lesson_slots)
        self._build_challenge(extra=True)
        return lesson

    def review_day(self) -> list[ExerciseRef]:
        decayed = self._decayed()
        self.reasoning.append(f"Review day: {len(decayed)} skills need refreshing")
        self._build_warm_up()

        lesson = self._review_lesson(decayed[: self.config.max_review_exercises])
        if lesson:
            self.reasoning.append(
                f"Reviewing {_plural(len(lesson), 'decayed skill')}: "
                f"{', '.join(ref.skill_node_id for ref in lesson)}"
            )
        new_material = self._new_material_lesson(1, announce=False)
        lesson.extend(new_material)
        self.reasoning.append(f"Plus new material: {new_material[0].reason}")

        self._build_challenge(extra=False)
        return lesson

    def mixed_day(self) -> list[ExerciseRef]:
        self.reasoning.append("Today: new material + review")
        self._build_warm_up()

        lesson = self._review_lesson(self._decayed()[:1])
        if lesson:
            self.reasoning.append(f"Reviewing decayed skill: {lesson[0].skill_node_id}")
        lesson.extend(self._new_material_lesson(1))

        self._build_challenge(extra=False)
        return lesson

    # ========================================
    # Warm-up
    # ========================================

    def _build_warm_up(self) -> None:
        weak_ref = self._weak_note_exercise()
        if weak_ref is not None:
            self._add(self.warm_up, weak_ref)
            shown = ", ".join(
                midi_to_note_name(n) for n in self.profile.weak_notes[:WEAK_NOTES_SHOWN]
            )
            self.reasoning.append(f"Warm-up targets weak notes: {shown}")

        if len(self.warm_up) < self.config.warm_up_slots:
            skill = self._most_recently_mastered()
            exercise_id = (
                self.resolver.find_static(skill, self.recent, self.used) if skill else None
            )
            if skill is not None and exercise_id is not None:
                self._add(
                    self.warm_up,
                    ExerciseRef(
                        exercise_id=exercise_id,
                        source=ExerciseSource.STATIC,
                        skill_node_id=skill.id,
                        reason=f"Review recently learned: {skill.name}",
                    ),
                )
                self.reasoning.append(f"Warm-up reviews recent skill: {skill.name}")

        if not self.warm_up:
            # Not reserved: a first lesson may reuse the root exercise
            self.warm_up.append(self._fallback_warm_up())

    def _weak_note_exercise(self) -> ExerciseRef | None:
        weak = set(self.profile.weak_notes)
        if not weak:
            return None
        for skill_id in reversed(self.mastered):
            skill = self.graph.get_by_id(skill_id)
            if skill is None:
                continue
            for exercise_id in skill.target_exercise_ids:
                exercise = self.resolver.get_exercise(exercise_id)
                if exercise is not None and exercise.note_set & weak:
                    return ExerciseRef(
                        exercise_id=exercise_id,
                        source=ExerciseSource.STATIC,
                        skill_node_id=skill.id,
                        reason=f"Strengthens weak notes in {skill.name}",
                    )
        return None

    def _most_recently_mastered(self) -> SkillNode | None:
        if not self.mastered:
            return None
        records = self.profile.skill_mastery_data
        dated = [
            (records[skill_id].mastered_at, position)
            for position, skill_id in enumerate(self.mastered)
            if skill_id in records and records[skill_id].mastered_at is not None
        ]
        if dated:
            _, position = max(dated)
            return self.graph.get_by_id(self.mastered[position])
        return self.graph.get_by_id(self.mastered[-1])

    def _fallback_warm_up(self) -> ExerciseRef:
        roots = self.graph.get_roots()
        if not roots:
            self.reasoning.append("Warm-up fallback: free practice")
            return _placeholder("Basic warm-up: free practice")
        root = roots[0]
        exercise_id = root.target_exercise_ids[0] if root.has_exercises else FALLBACK_WARM_UP_ID
        self.reasoning.append(f"Warm-up fallback: {root.name}")
        return ExerciseRef(
            exercise_id=exercise_id,
            source=ExerciseSource.STATIC,
            skill_node_id=root.id,
            reason=f"Basic warm-up: {root.name}",
        )

    # ========================================
    # Lesson
    # ========================================

    def _new_material_lesson(self, slots: int, announce: bool = True) -> list[ExerciseRef]:
        refs: list[ExerciseRef] = []
        next_skill = get_next_skill_to_learn(self.mastered, self.graph)

        if next_skill is None:
            deepest = self._deepest_mastered()
            if deepest is None:
                ref = _placeholder("Practice session: generated exercise")
            else:
                ref = ExerciseRef(
                    exercise_id=ai_exercise_id("review", deepest.id),
                    source=ExerciseSource.AI,
                    skill_node_id=deepest.id,
                    reason=f"All skills mastered, generating review of {deepest.name}",
                )
            self._add(refs, ref)
            if announce:
                self.reasoning.append("All skills mastered: lesson uses AI-generated exercises")
            return refs

        ref = self.resolver.resolve(
            next_skill,
            reason=f"Learn: {next_skill.name}",
            ai_reason=f"AI exercise for: {next_skill.name}",
            recent=self.recent,
            exclude=self.used,
        )
        self._add(refs, ref)
        if announce:
            self.reasoning.append(
                f"Lesson focuses on: {next_skill.name} ({next_skill.category.value})"
            )
            if ref.is_generated:
                self.reasoning.append(f"Requesting AI generation for {next_skill.name}")

        if len(refs) < slots:
            found = self._parallel_exercise(next_skill)
            if found is not None:
                skill, parallel = found
                self._add(refs, parallel)
                if announce:
                    self.reasoning.append(f"Parallel skill added: {skill.name}")
        return refs

    def _parallel_exercise(self, next_skill: SkillNode) -> tuple[SkillNode, ExerciseRef] | None:
        available = self.graph.get_available_skills(self.mastered)
        for skill in _rank_shallowest(self.graph, available):
            if skill.id == next_skill.id:
                continue
            exercise_id = self.resolver.find_static(skill, self.recent, self.used)
            if exercise_id is not None:
                return skill, ExerciseRef(
                    exercise_id=exercise_id,
                    source=ExerciseSource.STATIC,
                    skill_node_id=skill.id,
                    reason=f"Also working on: {skill.name}",
                )
        return None

    def _decayed(self) -> list[SkillNode]:
        return self.tracker.get_skills_needing_review(
            self.mastered, self.profile.skill_mastery_data, self.now
        )

    def _review_lesson(self, skills: list[SkillNode]) -> list[ExerciseRef]:
        refs: list[ExerciseRef] = []
        for skill in skills:
            ref = self.resolver.resolve(
                skill,
                reason=f"Review: {skill.name} (skill needs refreshing)",
                ai_reason=f"Review: {skill.name} (AI-generated review)",
                kind="review",
                recent=self.recent,
                exclude=self.used,
            )
            self._add(refs, ref)
        return refs

    # ========================================
    # Challenge
    # ========================================

    def _build_challenge(self, extra: bool) -> None:
        available = [s for s in self.graph.get_available_skills(self.mastered) if s.has_exercises]
        candidates = _rank_deepest(self.graph, available)

        if not candidates:
            self._add(self.challenge, self._tempo_challenge())
            return

        first = candidates[0]
        self._add(self.challenge, self._resolve_challenge(first))
        self.reasoning.append(f"Challenge targets advanced skill: {first.name}")

        if extra:
            chosen = {ref.exercise_id for ref in self.challenge}
            for skill in candidates[1:]:
                ref = self._resolve_challenge(skill)
                if ref.exercise_id not in chosen:
                    self._add(self.challenge, ref)
                    self.reasoning.append(f"Extra challenge: {skill.name}")
                    break

    def _resolve_challenge(self, skill: SkillNode) -> ExerciseRef:
        return self.resolver.resolve(
            skill,
            reason=f"Challenge: {skill.name}",
            ai_reason=f"Challenge: {skill.name} (AI-generated)",
            kind="challenge",
            recent=self.recent,
            exclude=self.used,
        )

    def _tempo_challenge(self) -> ExerciseRef:
        bpm = self.profile.tempo_range.max_bpm + self.config.tempo_challenge_bpm_increase
        target = self._deepest_mastered() or next(iter(self.graph.get_roots()), None)
        self.reasoning.append(f"Challenge: AI exercise at elevated tempo ({bpm} BPM)")
        if target is None:
            return _placeholder(f"Tempo challenge at {bpm} BPM")
        return ExerciseRef(
            exercise_id=ai_exercise_id("tempo", target.id),
            source=ExerciseSource.AI,
            skill_node_id=target.id,
            reason=f"Tempo challenge: {target.name} at {bpm} BPM",
        )

    # ========================================
    # Helpers
    # ========================================

    def _deepest_mastered(self) -> SkillNode | None:
        nodes = [self.graph.get_by_id(skill_id) for skill_id in self.mastered]
        ranked = _rank_deepest(self.graph, [n for n in nodes if n is not None])
        return ranked[0] if ranked else None

    def _add(self, section: list[ExerciseRef], ref: ExerciseRef) -> None:
        section.append(ref)
        self.used.add(ref.exercise_id)


def _placeholder(reason: str) -> ExerciseRef:
    return ExerciseRef(
        exercise_id=AI_GENERATED_ID,
        source=ExerciseSource.AI,
        skill_node_id="general-practice",
        reason=reason,
    )


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"
