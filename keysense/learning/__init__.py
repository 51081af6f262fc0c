"""
Learning: learner state, decay and mastery promotion.
"""

from keysense.learning.events import MasteryEventBus, MasteryHandler, SkillMasteredEvent
from keysense.learning.mastery_tracker import (
    DecayConfig,
    MasteryTracker,
    PracticeResult,
    days_since,
    decay_score,
)
from keysense.learning.profile_updates import (
    add_recent_exercise,
    adjust_tempo_range,
    record_exercise_result,
    recalculate_weak_notes,
    reset_profile,
    update_note_accuracy,
)
from keysense.learning.records import (
    ExerciseResult,
    LearnerProfile,
    MasterySkillRecord,
    NoteResult,
    TempoRange,
)

__all__ = [
    # Records
    "LearnerProfile",
    "MasterySkillRecord",
    "TempoRange",
    "ExerciseResult",
    "NoteResult",
    # Decay and mastery
    "DecayConfig",
    "MasteryTracker",
    "PracticeResult",
    "decay_score",
    "days_since",
    # Profile updates
    "add_recent_exercise",
    "update_note_accuracy",
    "recalculate_weak_notes",
    "adjust_tempo_range",
    "record_exercise_result",
    "reset_profile",
    # Events
    "SkillMasteredEvent",
    "MasteryEventBus",
    "MasteryHandler",
]
