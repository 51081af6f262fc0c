"""
Content Loader: authored exercise and lesson lookup.

The planner only ever reads content through the ``ContentLoader``
protocol. Two implementations are provided:
- InMemoryContentLoader: dictionaries handed in by the caller
- JsonContentLoader: JSON files discovered under a content directory

Layout expected by JsonContentLoader::

    content/
        exercises/lesson-01/exercise-01-find-middle-c.json
        lessons/lesson-01.json
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from loguru import logger

# =============================================================================
# Content Data Classes
# =============================================================================


@dataclass(frozen=True)
class ExerciseContent:
    """An authored exercise, reduced to what the planner needs."""

    id: str
    title: str = ""
    notes: tuple[int, ...] = ()  # MIDI note numbers in play order
    difficulty: int = 1

    @property
    def note_set(self) -> frozenset[int]:
        return frozenset(self.notes)

    @classmethod
    def from_dict(cls, data: dict) -> ExerciseContent:
        """
        Create exercise content from a JSON dictionary.

        Notes may be plain MIDI numbers or note events with a ``note`` key.
        """
        metadata = data.get("metadata") or {}
        notes: list[int] = []
        for event in data.get("notes") or []:
            if isinstance(event, dict):
                if "note" in event:
                    notes.append(int(event["note"]))
            else:
                notes.append(int(event))

        return cls(
            id=data["id"],
            title=metadata.get("title") or data.get("title", ""),
            notes=tuple(notes),
            difficulty=int(metadata.get("difficulty", data.get("difficulty", 1))),
        )


@dataclass(frozen=True)
class LessonEntry:
    """One exercise slot in a lesson manifest."""

    id: str
    order: int = 0
    test: bool = False


@dataclass(frozen=True)
class LessonManifest:
    """A lesson: an ordered group of exercises."""

    id: str
    title: str = ""
    exercises: tuple[LessonEntry, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict) -> LessonManifest:
        metadata = data.get("metadata") or {}
        entries = []
        for position, entry in enumerate(data.get("exercises") or []):
            if isinstance(entry, str):
                entries.append(LessonEntry(id=entry, order=position))
            else:
                entries.append(
                    LessonEntry(
                        id=entry["id"],
                        order=int(entry.get("order", position)),
                        test=bool(entry.get("test", False)),
                    )
                )
        return cls(
            id=data["id"],
            title=metadata.get("title") or data.get("title", ""),
            exercises=tuple(entries),
        )

    @property
    def practice_exercise_ids(self) -> list[str]:
        """Non-test exercise ids in lesson order."""
        return [e.id for e in sorted(self.exercises, key=lambda e: e.order) if not e.test]


# =============================================================================
# Loader Protocol
# =============================================================================


@runtime_checkable
class ContentLoader(Protocol):
    """
    Read-only access to authored content.

    Any call may return None/empty: content for later tiers may not be
    authored yet.
    """

    def get_exercise(self, exercise_id: str) -> ExerciseContent | None: ...

    def get_lessons(self) -> list[LessonManifest]: ...

    def get_lesson_exercises(self, lesson_id: str) -> list[ExerciseContent]: ...


class InMemoryContentLoader:
    """Content loader backed by in-memory collections."""

    def __init__(
        self,
        exercises: Iterable[ExerciseContent] = (),
        lessons: Iterable[LessonManifest] = (),
    ):
        self._exercises: dict[str, ExerciseContent] = {e.id: e for e in exercises}
        self._lessons: dict[str, LessonManifest] = {lesson.id: lesson for lesson in lessons}

    @property
    def total_exercises(self) -> int:
        return len(self._exercises)

    def add_exercise(self, exercise: ExerciseContent) -> None:
        self._exercises[exercise.id] = exercise

    def add_lesson(self, lesson: LessonManifest) -> None:
        self._lessons[lesson.id] = lesson

    def get_exercise(self, exercise_id: str) -> ExerciseContent | None:
        return self._exercises.get(exercise_id)

    def get_lessons(self) -> list[LessonManifest]:
        return sorted(self._lessons.values(), key=lambda lesson: lesson.id)

    def get_lesson_exercises(self, lesson_id: str) -> list[ExerciseContent]:
        lesson = self._lessons.get(lesson_id)
        if lesson is None:
            return []
        return [
            self._exercises[eid] for eid in lesson.practice_exercise_ids if eid in self._exercises
        ]


class JsonContentLoader(InMemoryContentLoader):
    """
    Content loader that reads exercise and lesson JSON from disk.

    Unreadable files are logged and skipped.
    """

    def __init__(self, content_dir: Path | str):
        super().__init__()
        self.content_dir = Path(content_dir)
        self._files_loaded: list[Path] = []

    def load(self) -> int:
        """
        Load all exercises and lessons under the content directory.

        Returns:
            Number of exercises loaded
        """
        self._exercises.clear()
        self._lessons.clear()
        self._files_loaded.clear()

        if not self.content_dir.is_dir():
            logger.warning(f"Content directory not found: {self.content_dir}")
            return 0

        for path in sorted(self.content_dir.glob("exercises/**/*.json")):
            data = self._read_json(path)
            if data is None:
                continue
            try:
                self.add_exercise(ExerciseContent.from_dict(data))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Invalid exercise file {path}: {e}")
                continue
            self._files_loaded.append(path)

        for path in sorted(self.content_dir.glob("lessons/*.json")):
            data = self._read_json(path)
            if data is None:
                continue
            try:
                self.add_lesson(LessonManifest.from_dict(data))
            except (KeyError, TypeError, ValueError) as e:
                logger.error(f"Invalid lesson file {path}: {e}")
                continue
            self._files_loaded.append(path)

        logger.info(
            f"Content loaded: {self.total_exercises} exercises, "
            f"{len(self._lessons)} lessons from {self.content_dir}"
        )
        return self.total_exercises

    def _read_json(self, path: Path) -> dict | None:
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load {path}: {e}")
            return None
        if not isinstance(data, dict):
            logger.error(f"Expected a JSON object in {path}")
            return None
        return data


def load_content(content_dir: Path | str | None) -> ContentLoader:
    """Build a loader for a content directory, or an empty loader for None."""
    if content_dir is None:
        return InMemoryContentLoader()
    loader = JsonContentLoader(content_dir)
    loader.load()
    return loader
