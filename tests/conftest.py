"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
from datetime import UTC, datetime, timedelta

import pytest

from keysense.content import ExerciseContent, InMemoryContentLoader, LessonManifest
from keysense.curriculum import SkillCategory, SkillGraph, SkillNode, get_skill_graph
from keysense.learning import LearnerProfile, MasterySkillRecord, MasteryTracker

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def days_ago():
    """Timestamp factory relative to NOW."""

    def _days_ago(days: float) -> datetime:
        return NOW - timedelta(days=days)

    return _days_ago


@pytest.fixture
def mastered_record(days_ago):
    """Record factory: a mastered skill last practised N days before NOW."""

    def _record(days_idle: float, completions: int = 1) -> MasterySkillRecord:
        return MasterySkillRecord(
            last_practiced_at=days_ago(days_idle),
            mastered_at=days_ago(days_idle),
            completion_count=completions,
        )

    return _record


@pytest.fixture(scope="session")
def graph():
    """The validated year-one curriculum."""
    return get_skill_graph()


@pytest.fixture
def tracker(graph):
    return MasteryTracker(graph)


@pytest.fixture
def empty_profile():
    return LearnerProfile()


@pytest.fixture
def small_graph():
    """
    Diamond-with-tail graph:

        root -> a -> b -> d
        root -> c ------> d
    """
    return SkillGraph(
        [
            SkillNode("root", "Root", SkillCategory.NOTE_FINDING, target_exercise_ids=("ex-root",)),
            SkillNode("a", "A", SkillCategory.INTERVALS, ("root",), ("ex-a",)),
            SkillNode("b", "B", SkillCategory.SCALES, ("a",), ("ex-b",)),
            SkillNode("c", "C", SkillCategory.RHYTHM, ("root",), ("ex-c",)),
            SkillNode("d", "D", SkillCategory.SONGS, ("b", "c"), ("ex-d",), required_completions=2),
        ]
    )


@pytest.fixture
def small_content():
    """Authored content for the small graph (no exercise for skill d)."""
    return InMemoryContentLoader(
        exercises=[
            ExerciseContent("ex-root", "Find Root", notes=(60,)),
            ExerciseContent("ex-a", "Exercise A", notes=(60, 62, 64)),
            ExerciseContent("ex-b", "Exercise B", notes=(65, 67)),
            ExerciseContent("ex-c", "Exercise C", notes=(60, 60, 60)),
        ],
        lessons=[LessonManifest.from_dict({"id": "lesson-01", "exercises": ["ex-root", "ex-a"]})],
    )
