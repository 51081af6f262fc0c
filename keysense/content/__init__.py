"""
Content: read-only access to authored exercises and lessons.
"""

from keysense.content.loader import (
    ContentLoader,
    ExerciseContent,
    InMemoryContentLoader,
    JsonContentLoader,
    LessonEntry,
    LessonManifest,
    load_content,
)

__all__ = [
    "ContentLoader",
    "ExerciseContent",
    "LessonEntry",
    "LessonManifest",
    "InMemoryContentLoader",
    "JsonContentLoader",
    "load_content",
]
