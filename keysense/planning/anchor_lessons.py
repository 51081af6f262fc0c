"""
Anchor lessons: authored milestone lessons unlocked by skill mastery.
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from keysense.content import ContentLoader
from keysense.curriculum import SkillGraph, get_skill_graph

# Skills that must be mastered before each milestone lesson opens
ANCHOR_LESSON_PREREQUISITES: dict[str, tuple[str, ...]] = {
    "lesson-01": (),
    "lesson-02": ("find-middle-c", "keyboard-geography", "white-keys"),
    "lesson-03": ("rh-cde", "rh-cdefg"),
    "lesson-04": ("c-position-review", "lh-scale-descending", "steady-bass"),
    "lesson-05": ("both-hands-review",),
    "lesson-06": ("scale-review", "both-hands-review"),
    "lesson-07": ("beginner-songs", "intermediate-songs"),
    "lesson-08": ("find-black-keys", "half-steps-whole-steps"),
    "lesson-09": ("g-major-hands",),
    "lesson-10": ("key-signature-reading",),
    "lesson-11": ("a-minor-melodies",),
    "lesson-12": ("minor-vs-major",),
    "lesson-13": ("minor-songs",),
    "lesson-14": ("minor-triads", "major-triads-root"),
    "lesson-15": ("progression-i-v-vi-iv",),
    "lesson-16": ("chord-transitions",),
    "lesson-17": ("syncopation-intro",),
    "lesson-18": ("6-8-time",),
    "lesson-19": ("mixed-rhythms",),
    "lesson-20": ("hands-arpeggio",),
    "lesson-21": ("expressive-songs",),
    "lesson-22": ("bb-major-scale", "d-major-scale"),
    "lesson-23": ("sight-reading-mixed",),
    "lesson-24": ("intermediate-pop", "intermediate-classical"),
}


def should_unlock_anchor_lesson(
    mastered_ids: Iterable[str],
    loader: ContentLoader,
    graph: SkillGraph | None = None,
) -> str | None:
    """
    First authored lesson that is open and still teaches something new.

    A lesson is open when all its milestone skills are mastered, and
    still useful when one of its exercises trains an unmastered skill.
    Lessons without a milestone entry are always open.

    Returns:
        Lesson id, or None
    """
    graph = graph or get_skill_graph()
    mastered = set(mastered_ids)

    try:
        lessons = loader.get_lessons()
    except Exception as e:
        logger.warning(f"Lesson lookup failed: {e}")
        return None

    for lesson in lessons:
        prerequisites = ANCHOR_LESSON_PREREQUISITES.get(lesson.id, ())
        if not all(skill_id in mastered for skill_id in prerequisites):
            continue
        try:
            exercises = loader.get_lesson_exercises(lesson.id)
        except Exception as e:
            logger.warning(f"Exercise lookup failed for {lesson.id}: {e}")
            continue
        for exercise in exercises:
            skills = graph.get_skills_for_exercise(exercise.id)
            if any(skill.id not in mastered for skill in skills):
                logger.debug(f"Anchor lesson unlocked: {lesson.id}")
                return lesson.id
    return None
