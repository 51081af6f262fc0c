"""
Unit tests for decay scoring and mastery promotion.

Time is pinned with ``now=`` so decay is deterministic.
"""

from datetime import timedelta

import pytest

from keysense.learning import (
    DecayConfig,
    LearnerProfile,
    MasterySkillRecord,
    MasteryTracker,
    decay_score,
)


class TestDecayScore:
    def test_fresh_practice_scores_one(self, now):
        record = MasterySkillRecord(last_practiced_at=now)
        assert decay_score(record, now) == 1.0

    def test_linear_decay(self, now, days_ago):
        record = MasterySkillRecord(last_practiced_at=days_ago(7))
        assert decay_score(record, now) == pytest.approx(0.5)

    def test_clamps_to_zero(self, now, days_ago):
        record = MasterySkillRecord(last_practiced_at=days_ago(15))
        assert decay_score(record, now) == 0.0

    def test_future_timestamp_counts_as_now(self, now):
        record = MasterySkillRecord(last_practiced_at=now + timedelta(days=2))
        assert decay_score(record, now) == 1.0

    def test_naive_timestamp_treated_as_utc(self, now):
        record = MasterySkillRecord(last_practiced_at=now.replace(tzinfo=None) - timedelta(days=7))
        assert decay_score(record, now) == pytest.approx(0.5)

    def test_custom_half_life(self, now, days_ago):
        tracker = MasteryTracker(config=DecayConfig(half_life_days=28))
        record = MasterySkillRecord(last_practiced_at=days_ago(14))
        assert tracker.decay(record, now) == pytest.approx(0.5)


class TestSkillsNeedingReview:
    def test_fifteen_days_needs_review(self, tracker, mastered_record, now):
        records = {"white-keys": mastered_record(15)}
        stale = tracker.get_skills_needing_review(["white-keys"], records, now)
        assert [n.id for n in stale] == ["white-keys"]

    def test_practiced_now_excluded(self, tracker, mastered_record, now):
        records = {"white-keys": mastered_record(0)}
        assert tracker.get_skills_needing_review(["white-keys"], records, now) == []

    def test_threshold_boundary(self, tracker, mastered_record, now):
        # decay exactly 0.5 is not below the threshold
        records = {"white-keys": mastered_record(7), "rh-cde": mastered_record(8)}
        stale = tracker.get_skills_needing_review(["white-keys", "rh-cde"], records, now)
        assert [n.id for n in stale] == ["rh-cde"]

    def test_most_stale_first(self, tracker, mastered_record, now):
        records = {"white-keys": mastered_record(20), "rh-cde": mastered_record(30)}
        stale = tracker.get_skills_needing_review(["white-keys", "rh-cde"], records, now)
        assert [n.id for n in stale] == ["rh-cde", "white-keys"]

    def test_missing_record_excluded(self, tracker, mastered_record, now):
        records = {"white-keys": mastered_record(20)}
        stale = tracker.get_skills_needing_review(["white-keys", "rh-cde"], records, now)
        assert [n.id for n in stale] == ["white-keys"]

    def test_unmastered_record_ignored(self, tracker, mastered_record, now):
        records = {"white-keys": mastered_record(20)}
        assert tracker.get_skills_needing_review([], records, now) == []

    def test_ties_keep_curriculum_order(self, tracker, mastered_record, now):
        records = {"rh-cde": mastered_record(20), "find-middle-c": mastered_record(20)}
        stale = tracker.get_skills_needing_review(["rh-cde", "find-middle-c"], records, now)
        assert [n.id for n in stale] == ["find-middle-c", "rh-cde"]

    def test_count_decayed(self, tracker, mastered_record, now):
        records = {
            "find-middle-c": mastered_record(20),
            "keyboard-geography": mastered_record(1),
            "white-keys": mastered_record(30),
        }
        assert tracker.count_decayed(records.keys(), records, now) == 2


class TestRecordPractice:
    def test_pass_masters_single_completion_skill(self, tracker, now):
        result = tracker.record_practice(LearnerProfile(), "find-middle-c", passed=True, now=now)

        assert result.newly_mastered
        assert result.profile.mastered_skills == ("find-middle-c",)
        assert result.record.mastered_at == now
        assert result.record.completion_count == 1
        assert [e.skill_id for e in result.events] == ["find-middle-c"]
        assert result.events[0].skill_name == "Find Middle C"

    def test_two_completions_required(self, tracker, now):
        first = tracker.record_practice(LearnerProfile(), "hands-together-basic", True, now)
        assert not first.newly_mastered
        assert first.events == ()
        assert "hands-together-basic" not in first.profile.mastered_skills
        assert first.record.completion_count == 1

        second = tracker.record_practice(first.profile, "hands-together-basic", True, now)
        assert second.newly_mastered
        assert second.profile.is_mastered("hands-together-basic")
        assert second.events[0].completion_count == 2

    def test_failed_practice_never_counts(self, tracker, now):
        profile = LearnerProfile()
        for _ in range(3):
            result = tracker.record_practice(profile, "find-middle-c", passed=False, now=now)
            profile = result.profile

        record = profile.get_record("find-middle-c")
        assert record.completion_count == 0
        assert not profile.is_mastered("find-middle-c")

    def test_failed_practice_resets_decay(self, tracker, mastered_record, now):
        profile = LearnerProfile(
            mastered_skills=("find-middle-c",),
            skill_mastery_data={"find-middle-c": mastered_record(20)},
        )
        result = tracker.record_practice(profile, "find-middle-c", passed=False, now=now)

        assert result.record.last_practiced_at == now
        assert result.record.decay_score == 1.0
        assert result.record.mastered_at == profile.get_record("find-middle-c").mastered_at
        assert tracker.get_skills_needing_review(
            result.profile.mastered_skills, result.profile.skill_mastery_data, now
        ) == []

    def test_already_mastered_emits_no_event(self, tracker, mastered_record, now):
        profile = LearnerProfile(
            mastered_skills=("find-middle-c",),
            skill_mastery_data={"find-middle-c": mastered_record(3)},
        )
        result = tracker.record_practice(profile, "find-middle-c", passed=True, now=now)

        assert not result.newly_mastered
        assert result.events == ()
        assert result.profile.mastered_skills == ("find-middle-c",)
        assert result.record.completion_count == 2

    def test_input_profile_untouched(self, tracker, now):
        profile = LearnerProfile()
        tracker.record_practice(profile, "find-middle-c", passed=True, now=now)
        assert profile.mastered_skills == ()
        assert profile.skill_mastery_data == {}

    def test_unknown_skill_is_noop(self, tracker, now):
        profile = LearnerProfile()
        result = tracker.record_practice(profile, "no-such-skill", passed=True, now=now)
        assert result.profile is profile
        assert result.record is None
        assert result.events == ()


class TestMarkMastered:
    def test_promotes(self, tracker, now):
        result = tracker.mark_mastered(LearnerProfile(), "white-keys", now)
        assert result.newly_mastered
        assert result.profile.mastered_skills == ("white-keys",)
        assert result.profile.get_record("white-keys").mastered_at == now

    def test_idempotent(self, tracker, now):
        once = tracker.mark_mastered(LearnerProfile(), "white-keys", now)
        twice = tracker.mark_mastered(once.profile, "white-keys", now + timedelta(days=3))

        assert twice.profile is once.profile
        assert not twice.newly_mastered
        assert twice.events == ()

    def test_unknown_skill_is_noop(self, tracker, now):
        profile = LearnerProfile()
        assert tracker.mark_mastered(profile, "ghost", now).profile is profile


class TestDashboardQueries:
    def test_calculate_decayed_skills(self, tracker, mastered_record, now):
        profile = LearnerProfile(
            mastered_skills=("find-middle-c", "keyboard-geography"),
            skill_mastery_data={
                "find-middle-c": mastered_record(10),
                "keyboard-geography": mastered_record(2),
            },
        )
        assert tracker.calculate_decayed_skills(profile, now) == ["find-middle-c"]

    def test_refresh_decay_scores(self, tracker, mastered_record, now):
        profile = LearnerProfile(
            mastered_skills=("find-middle-c",),
            skill_mastery_data={"find-middle-c": mastered_record(7)},
        )
        refreshed = tracker.refresh_decay_scores(profile, now)

        assert refreshed.get_record("find-middle-c").decay_score == pytest.approx(0.5)
        assert profile.get_record("find-middle-c").decay_score == 1.0
