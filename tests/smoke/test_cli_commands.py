"""
Smoke Tests for CLI Commands.

These tests verify that CLI commands run without errors and produce output.
They don't validate correctness deeply - just that commands work.

Usage:
    pytest tests/smoke/test_cli_commands.py -v
    pytest tests/smoke/test_cli_commands.py -v -m smoke
"""

import json

import pytest
from typer.testing import CliRunner

from keysense.cli import app
from keysense.config import get_settings
from keysense.profile_io import load_profile

# Mark all tests in this module as smoke tests
pytestmark = pytest.mark.smoke

runner = CliRunner()


@pytest.fixture
def new_profile(tmp_path):
    path = tmp_path / "new.json"
    path.write_text("{}")
    return path


@pytest.fixture
def stale_profile(tmp_path):
    path = tmp_path / "stale.json"
    stamp = "2020-01-01T00:00:00Z"
    path.write_text(
        json.dumps(
            {
                "mastered_skills": ["find-middle-c", "keyboard-geography"],
                "skill_mastery_data": {
                    sid: {"mastered_at": stamp, "last_practiced_at": stamp, "completion_count": 1}
                    for sid in ("find-middle-c", "keyboard-geography")
                },
                "total_exercises_completed": 3,
            }
        )
    )
    return path


@pytest.fixture
def content_dir(tmp_path):
    exercises = tmp_path / "content" / "exercises" / "lesson-01"
    exercises.mkdir(parents=True)
    (exercises / "ex-01.json").write_text(json.dumps({"id": "lesson-01-ex-01", "notes": [60]}))
    return tmp_path / "content"


class TestCLIHelp:
    """Test that help commands work."""

    def test_main_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "plan" in result.stdout
        assert "practice" in result.stdout

    def test_plan_help(self):
        result = runner.invoke(app, ["plan", "--help"])
        assert result.exit_code == 0
        assert "--policy" in result.stdout


class TestPlanningCommands:
    def test_plan_new_learner(self, new_profile):
        result = runner.invoke(app, ["plan", str(new_profile)])
        assert result.exit_code == 0, result.stdout
        assert "new-material" in result.stdout
        assert "Why this plan" in result.stdout

    def test_plan_json(self, new_profile):
        result = runner.invoke(app, ["plan", str(new_profile), "--json"])
        assert result.exit_code == 0, result.stdout

        data = json.loads(result.stdout)
        assert data["session_type"] == "new-material"
        assert data["warm_up"] and data["lesson"] and data["challenge"]

    def test_plan_ai_first_with_content(self, new_profile, content_dir):
        result = runner.invoke(
            app,
            [
                "plan",
                str(new_profile),
                "--json",
                "--policy",
                "ai-first-with-fallback",
                "--content-dir",
                str(content_dir),
            ],
        )
        assert result.exit_code == 0, result.stdout

        lesson = json.loads(result.stdout)["lesson"][0]
        assert lesson["source"] == "ai-with-fallback"
        assert lesson["fallback_exercise_id"] == "lesson-01-ex-01"

    def test_plan_review_day(self, stale_profile):
        result = runner.invoke(app, ["plan", str(stale_profile), "--json"])
        assert result.exit_code == 0, result.stdout
        assert json.loads(result.stdout)["session_type"] == "mixed"

    def test_plan_missing_profile(self, tmp_path):
        result = runner.invoke(app, ["plan", str(tmp_path / "missing.json")])
        assert result.exit_code == 1

    def test_plan_invalid_profile(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"total_exercises_completed": "lots"}))
        result = runner.invoke(app, ["plan", str(path)])
        assert result.exit_code == 1

    def test_next(self, new_profile):
        result = runner.invoke(app, ["next", str(new_profile)])
        assert result.exit_code == 0
        assert "Find Middle C" in result.stdout

    def test_review(self, stale_profile):
        result = runner.invoke(app, ["review", str(stale_profile)])
        assert result.exit_code == 0
        assert "Skills Needing Review (2)" in result.stdout

    def test_review_nothing_due(self, new_profile):
        result = runner.invoke(app, ["review", str(new_profile)])
        assert result.exit_code == 0
        assert "No skills need review" in result.stdout


class TestCurriculumCommands:
    def test_validate(self):
        result = runner.invoke(app, ["validate"])
        assert result.exit_code == 0
        assert "Skill graph valid" in result.stdout
        assert "100 skills" in result.stdout

    def test_validate_with_content(self, content_dir):
        result = runner.invoke(app, ["validate", "--content-dir", str(content_dir)])
        assert result.exit_code == 0
        assert "99 skills without authored exercises" in result.stdout

    def test_skills_by_category(self):
        result = runner.invoke(app, ["skills", "--category", "sight-reading"])
        assert result.exit_code == 0
        assert "Curriculum (3 skills)" in result.stdout

    def test_skills_bad_category(self):
        result = runner.invoke(app, ["skills", "--category", "polka"])
        assert result.exit_code != 0


class TestPracticeCommand:
    def test_practice_creates_profile_and_masters(self, tmp_path):
        path = tmp_path / "me.json"
        result = runner.invoke(app, ["practice", str(path), "find-middle-c"])

        assert result.exit_code == 0, result.stdout
        assert "Mastered: Find Middle C" in result.stdout
        assert load_profile(path).mastered_skills == ("find-middle-c",)

    def test_failed_practice_does_not_master(self, tmp_path):
        path = tmp_path / "me.json"
        result = runner.invoke(app, ["practice", str(path), "find-middle-c", "--failed"])

        assert result.exit_code == 0
        assert "Mastered" not in result.stdout
        assert load_profile(path).mastered_skills == ()

    def test_unknown_skill(self, tmp_path):
        path = tmp_path / "me.json"
        result = runner.invoke(app, ["practice", str(path), "ghost-skill"])
        assert result.exit_code == 1
        assert not path.exists()

    def test_exercise_joins_recent_list(self, tmp_path):
        path = tmp_path / "me.json"
        runner.invoke(app, ["practice", str(path), "find-middle-c", "-e", "lesson-01-ex-01"])
        runner.invoke(app, ["practice", str(path), "find-middle-c", "-e", "lesson-01-ex-02"])

        assert load_profile(path).recent_exercise_ids == ("lesson-01-ex-02", "lesson-01-ex-01")

    def test_recent_list_limit_from_settings(self, tmp_path, monkeypatch):
        monkeypatch.setenv("KEYSENSE_RECENT_EXERCISE_LIMIT", "2")
        get_settings.cache_clear()
        try:
            path = tmp_path / "me.json"
            for exercise_id in ("ex-1", "ex-2", "ex-3"):
                result = runner.invoke(
                    app, ["practice", str(path), "find-middle-c", "--exercise", exercise_id]
                )
                assert result.exit_code == 0, result.stdout
        finally:
            get_settings.cache_clear()

        assert load_profile(path).recent_exercise_ids == ("ex-3", "ex-2")
