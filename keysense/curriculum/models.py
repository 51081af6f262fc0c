"""
Curriculum data models.

Skill nodes are immutable: the curriculum is defined once at import time
and never changes while the process runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal


class SkillCategory(str, Enum):
    """Pedagogical category of a skill node."""

    NOTE_FINDING = "note-finding"
    INTERVALS = "intervals"
    SCALES = "scales"
    CHORDS = "chords"
    RHYTHM = "rhythm"
    HAND_INDEPENDENCE = "hand-independence"
    SONGS = "songs"
    BLACK_KEYS = "black-keys"
    KEY_SIGNATURES = "key-signatures"
    EXPRESSION = "expression"
    ARPEGGIOS = "arpeggios"
    SIGHT_READING = "sight-reading"

    @property
    def display_name(self) -> str:
        """Human-readable name."""
        return self.value.replace("-", " ").title()


@dataclass(frozen=True)
class SkillNode:
    """
    One learnable unit in the curriculum graph.

    Prerequisites are stored as an ordered tuple of skill ids so iteration
    over them is deterministic.
    """

    id: str
    name: str
    category: SkillCategory
    prerequisites: tuple[str, ...] = ()
    target_exercise_ids: tuple[str, ...] = ()
    mastery_threshold: float = 0.7
    tier: int = 1
    required_completions: int = 1
    description: str = ""

    @property
    def is_root(self) -> bool:
        """True for nodes without prerequisites."""
        return not self.prerequisites

    @property
    def has_exercises(self) -> bool:
        return bool(self.target_exercise_ids)


Hand = Literal["left", "right", "both"]


@dataclass(frozen=True)
class GenerationHints:
    """Brief handed to the AI exercise generator for a single skill."""

    skill_id: str
    prompt_hint: str
    hand: Hand | None = None
    min_difficulty: int = 1
    max_difficulty: int = 1
    target_midi: tuple[int, ...] = field(default_factory=tuple)


_NOTE_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")


def midi_to_note_name(midi_note: int) -> str:
    """Scientific pitch name, e.g. 60 -> "C4"."""
    return f"{_NOTE_NAMES[midi_note % 12]}{midi_note // 12 - 1}"
