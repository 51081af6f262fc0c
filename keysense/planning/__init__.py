"""
Planning: session type selection and session composition.
"""

from keysense.planning.anchor_lessons import (
    ANCHOR_LESSON_PREREQUISITES,
    should_unlock_anchor_lesson,
)
from keysense.planning.exercise_resolver import (
    ExerciseRef,
    ExerciseResolver,
    ExerciseSource,
    ResolutionPolicy,
)
from keysense.planning.session_planner import (
    CATEGORY_PRIORITY,
    SessionPlan,
    SessionPlanner,
    category_priority,
    get_next_skill_to_learn,
)
from keysense.planning.session_types import (
    PlannerConfig,
    SessionType,
    is_challenge_day,
    select_session_type,
)

__all__ = [
    # Session types
    "SessionType",
    "PlannerConfig",
    "select_session_type",
    "is_challenge_day",
    # Resolution
    "ExerciseRef",
    "ExerciseResolver",
    "ExerciseSource",
    "ResolutionPolicy",
    # Planner
    "SessionPlan",
    "SessionPlanner",
    "CATEGORY_PRIORITY",
    "category_priority",
    "get_next_skill_to_learn",
    # Anchor lessons
    "ANCHOR_LESSON_PREREQUISITES",
    "should_unlock_anchor_lesson",
]
