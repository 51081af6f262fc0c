"""
Curriculum: the skill dependency graph.

Components:
- SkillNode / SkillCategory: immutable curriculum data model
- SKILL_TREE: the year-one piano curriculum (100 nodes)
- SkillGraph: availability, depth, lookup and validation queries
"""

from keysense.curriculum.models import (
    GenerationHints,
    SkillCategory,
    SkillNode,
    midi_to_note_name,
)
from keysense.curriculum.skill_data import SKILL_TREE
from keysense.curriculum.skill_graph import (
    CycleError,
    DanglingPrerequisiteError,
    DuplicateSkillError,
    InvalidSkillError,
    SkillGraph,
    SkillGraphError,
    get_skill_graph,
)

__all__ = [
    # Data
    "SKILL_TREE",
    "SkillNode",
    "SkillCategory",
    "GenerationHints",
    "midi_to_note_name",
    # Graph
    "SkillGraph",
    "get_skill_graph",
    # Errors
    "SkillGraphError",
    "CycleError",
    "DanglingPrerequisiteError",
    "DuplicateSkillError",
    "InvalidSkillError",
]
