"""
Unit tests for profile snapshot files.
"""

import json
from datetime import UTC, datetime

import pytest

from keysense.learning import LearnerProfile, MasterySkillRecord, TempoRange
from keysense.profile_io import (
    ProfileFormatError,
    load_profile,
    profile_from_dict,
    profile_to_dict,
    save_profile,
)

SNAPSHOT = {
    "mastered_skills": ["find-middle-c", "keyboard-geography"],
    "skill_mastery_data": {
        "find-middle-c": {
            "mastered_at": "2026-02-01T10:00:00Z",
            "last_practiced_at": "2026-02-10T10:00:00Z",
            "completion_count": 3,
        },
        "keyboard-geography": {
            "mastered_at": "2026-02-05T10:00:00",
            "last_practiced_at": "2026-02-05T10:00:00",
            "completion_count": 1,
        },
    },
    "weak_notes": [61, 63],
    "tempo_range": {"min": 45, "max": 90},
    "recent_exercise_ids": ["lesson-01-ex-02"],
    "total_exercises_completed": 12,
    "note_accuracy": {"61": 0.4},
}


class TestProfileFromDict:
    def test_reads_snapshot(self):
        profile = profile_from_dict(SNAPSHOT)

        assert profile.mastered_skills == ("find-middle-c", "keyboard-geography")
        assert profile.get_record("find-middle-c").completion_count == 3
        assert profile.tempo_range == TempoRange(45, 90)
        assert profile.weak_notes == (61, 63)
        assert profile.note_accuracy == {61: 0.4}
        assert profile.total_exercises_completed == 12

    def test_naive_timestamps_become_utc(self):
        record = profile_from_dict(SNAPSHOT).get_record("keyboard-geography")
        assert record.last_practiced_at == datetime(2026, 2, 5, 10, tzinfo=UTC)

    def test_empty_snapshot_is_new_learner(self):
        assert profile_from_dict({}) == LearnerProfile()

    def test_invalid_snapshot(self):
        with pytest.raises(ProfileFormatError):
            profile_from_dict({"total_exercises_completed": -1})

    def test_record_requires_practice_time(self):
        with pytest.raises(ProfileFormatError):
            profile_from_dict({"skill_mastery_data": {"white-keys": {"completion_count": 1}}})


class TestProfileToDict:
    def test_json_compatible(self, now):
        profile = LearnerProfile(
            mastered_skills=("white-keys",),
            skill_mastery_data={
                "white-keys": MasterySkillRecord(last_practiced_at=now, mastered_at=now)
            },
            note_accuracy={60: 0.8},
        )
        data = profile_to_dict(profile)

        json.dumps(data)
        assert data["mastered_skills"] == ["white-keys"]
        assert data["tempo_range"] == {"min": 40, "max": 80}
        assert profile_from_dict(data) == profile


class TestProfileFiles:
    def test_save_and_load(self, tmp_path):
        profile = profile_from_dict(SNAPSHOT)
        path = save_profile(profile, tmp_path / "nested" / "me.json")
        assert load_profile(path) == profile

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProfileFormatError):
            load_profile(tmp_path / "missing.json")

    def test_missing_file_ok(self, tmp_path):
        assert load_profile(tmp_path / "missing.json", missing_ok=True) == LearnerProfile()

    def test_bad_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{oops")
        with pytest.raises(ProfileFormatError) as exc:
            load_profile(path)
        assert exc.value.path == path

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]")
        with pytest.raises(ProfileFormatError):
            load_profile(path)
