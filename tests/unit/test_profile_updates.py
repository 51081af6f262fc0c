"""
Unit tests for exercise-result profile updates.
"""

import pytest

from keysense.learning import (
    ExerciseResult,
    LearnerProfile,
    NoteResult,
    TempoRange,
    add_recent_exercise,
    adjust_tempo_range,
    record_exercise_result,
    reset_profile,
    update_note_accuracy,
)


class TestRecentExercises:
    def test_most_recent_first(self):
        profile = add_recent_exercise(LearnerProfile(), "ex-1")
        profile = add_recent_exercise(profile, "ex-2")
        assert profile.recent_exercise_ids == ("ex-2", "ex-1")

    def test_deduplicates(self):
        profile = LearnerProfile(recent_exercise_ids=("ex-2", "ex-1"))
        assert add_recent_exercise(profile, "ex-1").recent_exercise_ids == ("ex-1", "ex-2")

    def test_capped_at_ten(self):
        profile = LearnerProfile()
        for i in range(15):
            profile = add_recent_exercise(profile, f"ex-{i}")
        assert len(profile.recent_exercise_ids) == 10
        assert profile.recent_exercise_ids[0] == "ex-14"
        assert profile.recent_exercise_ids[-1] == "ex-5"


class TestNoteAccuracy:
    def test_first_sample_taken_as_is(self):
        profile = update_note_accuracy(LearnerProfile(), 60, 0.4)
        assert profile.note_accuracy[60] == pytest.approx(0.4)
        assert profile.note_attempts[60] == 1

    def test_running_mean(self):
        profile = update_note_accuracy(LearnerProfile(), 60, 1.0)
        profile = update_note_accuracy(profile, 60, 0.0)
        assert profile.note_accuracy[60] == pytest.approx(0.5)

    def test_window_limits_history(self):
        profile = LearnerProfile(note_accuracy={60: 1.0}, note_attempts={60: 50})
        profile = update_note_accuracy(profile, 60, 0.0)
        # weight 1/20 once the window is full
        assert profile.note_accuracy[60] == pytest.approx(0.95)


class TestTempoRange:
    def test_raise_ceiling_after_strong_fast_play(self):
        assert adjust_tempo_range(TempoRange(40, 80), tempo=75, score=0.9) == TempoRange(40, 85)

    def test_ceiling_capped(self):
        assert adjust_tempo_range(TempoRange(40, 198), tempo=198, score=0.95).max_bpm == 200

    def test_lower_floor_after_weak_slow_play(self):
        assert adjust_tempo_range(TempoRange(40, 80), tempo=45, score=0.5) == TempoRange(35, 80)

    def test_floor_capped(self):
        assert adjust_tempo_range(TempoRange(32, 80), tempo=32, score=0.2).min_bpm == 30

    def test_unchanged_in_the_middle(self):
        assert adjust_tempo_range(TempoRange(40, 80), tempo=60, score=0.9) == TempoRange(40, 80)


class TestRecordExerciseResult:
    def test_updates_everything(self):
        result = ExerciseResult(
            tempo=78,
            score=0.9,
            note_results=(NoteResult(60, 0.95), NoteResult(62, 0.5), NoteResult(64, 0.6)),
        )
        profile = record_exercise_result(LearnerProfile(), result, exercise_id="lesson-01-ex-01")

        assert profile.weak_notes == (62, 64)
        assert profile.tempo_range.max_bpm == 85
        assert profile.total_exercises_completed == 1
        assert profile.recent_exercise_ids == ("lesson-01-ex-01",)

    def test_without_exercise_id(self):
        profile = record_exercise_result(LearnerProfile(), ExerciseResult(tempo=60, score=0.7))
        assert profile.recent_exercise_ids == ()
        assert profile.total_exercises_completed == 1


def test_reset_profile():
    profile = reset_profile()
    assert profile == LearnerProfile()
    assert profile.mastered_skills == ()
