"""
Profile updates driven by scored exercises.

Pure functions: each takes a ``LearnerProfile`` and returns a new one.
"""

from __future__ import annotations

from dataclasses import replace

from keysense.learning.records import ExerciseResult, LearnerProfile, TempoRange

RECENT_EXERCISE_LIMIT = 10
NOTE_ACCURACY_WINDOW = 20
WEAK_NOTE_THRESHOLD = 0.7

TEMPO_STEP = 5
TEMPO_FLOOR = 30
TEMPO_CEILING = 200
TEMPO_RAISE_SCORE = 0.85
TEMPO_LOWER_SCORE = 0.6
TEMPO_EDGE_MARGIN = 10


def add_recent_exercise(
    profile: LearnerProfile, exercise_id: str, limit: int = RECENT_EXERCISE_LIMIT
) -> LearnerProfile:
    """Push an exercise to the front of the recency list (deduplicated, capped)."""
    recent = (exercise_id,) + tuple(e for e in profile.recent_exercise_ids if e != exercise_id)
    return replace(profile, recent_exercise_ids=recent[:limit])


def update_note_accuracy(
    profile: LearnerProfile, midi_note: int, accuracy: float
) -> LearnerProfile:
    """
    Fold one accuracy sample into the note's rolling average.

    The average weights the last ``NOTE_ACCURACY_WINDOW`` samples; the first
    sample for a note is taken as-is.
    """
    accuracy = min(1.0, max(0.0, accuracy))
    attempts = profile.note_attempts.get(midi_note, 0) + 1
    previous = profile.note_accuracy.get(midi_note, accuracy)
    weight = min(attempts, NOTE_ACCURACY_WINDOW)
    updated = previous + (accuracy - previous) / weight

    return replace(
        profile,
        note_accuracy={**profile.note_accuracy, midi_note: updated},
        note_attempts={**profile.note_attempts, midi_note: attempts},
    )


def recalculate_weak_notes(profile: LearnerProfile) -> LearnerProfile:
    """Weak notes are those below ``WEAK_NOTE_THRESHOLD``, weakest first."""
    weak = sorted(
        (note for note, acc in profile.note_accuracy.items() if acc < WEAK_NOTE_THRESHOLD),
        key=lambda note: (profile.note_accuracy[note], note),
    )
    return replace(profile, weak_notes=tuple(weak))


def adjust_tempo_range(tempo_range: TempoRange, tempo: int, score: float) -> TempoRange:
    """
    Nudge the comfort range from one result.

    Strong play near the ceiling raises it; weak play near the floor lowers it.
    """
    min_bpm, max_bpm = tempo_range.min_bpm, tempo_range.max_bpm
    if score > TEMPO_RAISE_SCORE and tempo >= max_bpm - TEMPO_EDGE_MARGIN:
        max_bpm = min(TEMPO_CEILING, max_bpm + TEMPO_STEP)
    elif score < TEMPO_LOWER_SCORE and tempo <= min_bpm + TEMPO_EDGE_MARGIN:
        min_bpm = max(TEMPO_FLOOR, min_bpm - TEMPO_STEP)
    return TempoRange(min_bpm=min_bpm, max_bpm=max_bpm)


def record_exercise_result(
    profile: LearnerProfile,
    result: ExerciseResult,
    exercise_id: str | None = None,
    recent_limit: int = RECENT_EXERCISE_LIMIT,
) -> LearnerProfile:
    """
    Apply a scored exercise to the profile.

    Updates per-note accuracy and weak notes, the tempo range, the completed
    count and (when ``exercise_id`` is given) the recency list.
    """
    for note_result in result.note_results:
        profile = update_note_accuracy(profile, note_result.midi_note, note_result.accuracy)
    profile = recalculate_weak_notes(profile)

    profile = replace(
        profile,
        tempo_range=adjust_tempo_range(profile.tempo_range, result.tempo, result.score),
        total_exercises_completed=profile.total_exercises_completed + 1,
    )
    if exercise_id is not None:
        profile = add_recent_exercise(profile, exercise_id, recent_limit)
    return profile


def reset_profile() -> LearnerProfile:
    """A fresh profile with no progress."""
    return LearnerProfile()
