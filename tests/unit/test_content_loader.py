"""
Unit tests for content loading.
"""

import json

import pytest

from keysense.content import (
    ContentLoader,
    ExerciseContent,
    InMemoryContentLoader,
    JsonContentLoader,
    LessonManifest,
    load_content,
)


@pytest.fixture
def content_dir(tmp_path):
    exercises = tmp_path / "exercises" / "lesson-01"
    exercises.mkdir(parents=True)
    (exercises / "exercise-01.json").write_text(
        json.dumps(
            {
                "id": "lesson-01-ex-01",
                "metadata": {"title": "Find Middle C", "difficulty": 1},
                "notes": [{"note": 60, "startBeat": 0}, {"note": 60, "startBeat": 1}],
            }
        )
    )
    (exercises / "exercise-02.json").write_text(
        json.dumps({"id": "lesson-01-ex-02", "notes": [60, 62, 64]})
    )
    (exercises / "broken.json").write_text("{not json")

    lessons = tmp_path / "lessons"
    lessons.mkdir()
    (lessons / "lesson-01.json").write_text(
        json.dumps(
            {
                "id": "lesson-01",
                "metadata": {"title": "Getting Started"},
                "exercises": [
                    {"id": "lesson-01-ex-02", "order": 2},
                    {"id": "lesson-01-ex-01", "order": 1},
                    {"id": "lesson-01-test", "order": 3, "test": True},
                ],
            }
        )
    )
    return tmp_path


class TestExerciseContent:
    def test_from_dict_note_events(self):
        exercise = ExerciseContent.from_dict(
            {"id": "x", "metadata": {"title": "X", "difficulty": 2}, "notes": [{"note": 61}]}
        )
        assert exercise.title == "X"
        assert exercise.difficulty == 2
        assert exercise.notes == (61,)
        assert exercise.note_set == frozenset({61})

    def test_missing_id(self):
        with pytest.raises(KeyError):
            ExerciseContent.from_dict({"notes": []})


class TestLessonManifest:
    def test_practice_ids_in_order_without_tests(self):
        lesson = LessonManifest.from_dict(
            {
                "id": "l",
                "exercises": [
                    {"id": "b", "order": 2},
                    {"id": "a", "order": 1},
                    {"id": "t", "order": 0, "test": True},
                ],
            }
        )
        assert lesson.practice_exercise_ids == ["a", "b"]

    def test_plain_id_list(self):
        lesson = LessonManifest.from_dict({"id": "l", "exercises": ["a", "b"]})
        assert lesson.practice_exercise_ids == ["a", "b"]


class TestInMemoryContentLoader:
    def test_satisfies_protocol(self):
        assert isinstance(InMemoryContentLoader(), ContentLoader)

    def test_lookup(self, small_content):
        assert small_content.get_exercise("ex-a").title == "Exercise A"
        assert small_content.get_exercise("missing") is None
        assert small_content.total_exercises == 4

    def test_lesson_exercises(self, small_content):
        assert [e.id for e in small_content.get_lesson_exercises("lesson-01")] == ["ex-root", "ex-a"]
        assert small_content.get_lesson_exercises("lesson-99") == []


class TestJsonContentLoader:
    def test_loads_and_skips_broken_files(self, content_dir):
        loader = JsonContentLoader(content_dir)
        assert loader.load() == 2
        assert loader.get_exercise("lesson-01-ex-01").notes == (60, 60)
        assert loader.get_exercise("lesson-01-ex-02").note_set == frozenset({60, 62, 64})

    def test_lessons(self, content_dir):
        loader = load_content(content_dir)
        assert [lesson.id for lesson in loader.get_lessons()] == ["lesson-01"]
        assert [e.id for e in loader.get_lesson_exercises("lesson-01")] == [
            "lesson-01-ex-01",
            "lesson-01-ex-02",
        ]

    def test_missing_directory(self, tmp_path):
        loader = JsonContentLoader(tmp_path / "nope")
        assert loader.load() == 0
        assert loader.get_lessons() == []

    def test_no_directory_gives_empty_loader(self):
        loader = load_content(None)
        assert loader.get_exercise("lesson-01-ex-01") is None
