"""
Skill Graph: prerequisite DAG queries over the curriculum.

Provides:
- Lookup by id, exercise and category
- Availability (skills whose prerequisites are all mastered)
- Depth (longest path from a root), via topological dynamic programming
- Structural validation (duplicates, dangling prerequisites, cycles)

The graph is fixed after construction, so the depth table is computed
once and shared by every reader.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from functools import lru_cache

from loguru import logger

from keysense.curriculum.models import GenerationHints, Hand, SkillCategory, SkillNode
from keysense.curriculum.skill_data import SKILL_TREE

MIN_TIER = 1
MAX_TIER = 15

# MIDI range of an 88-key piano (A0..C8)
LOWEST_MIDI = 21
HIGHEST_MIDI = 108

_MAJOR_STEPS = (0, 2, 4, 5, 7, 9, 11, 12)
_MINOR_STEPS = (0, 2, 3, 5, 7, 8, 10, 12)

# Skill-id prefix -> (root note, scale steps)
_SCALE_ROOTS: dict[str, tuple[int, tuple[int, ...]]] = {
    "c-major": (60, _MAJOR_STEPS),
    "g-major": (55, _MAJOR_STEPS),
    "f-major": (53, _MAJOR_STEPS),
    "d-major": (62, _MAJOR_STEPS),
    "bb-major": (58, _MAJOR_STEPS),
    "a-minor": (57, _MINOR_STEPS),
    "d-minor": (62, _MINOR_STEPS),
    "e-minor": (64, _MINOR_STEPS),
}

_C4_WHITE_KEYS = (60, 62, 64, 65, 67, 69, 71, 72)
_C4_BLACK_KEYS = (61, 63, 66, 68, 70)


# =============================================================================
# Errors
# =============================================================================


class SkillGraphError(Exception):
    """Raised when the skill graph is structurally broken."""

    def __init__(self, message: str, skill_id: str | None = None):
        super().__init__(message)
        self.skill_id = skill_id


class CycleError(SkillGraphError):
    """A prerequisite chain loops back on itself."""


class DanglingPrerequisiteError(SkillGraphError):
    """A prerequisite id does not refer to any node."""


class DuplicateSkillError(SkillGraphError):
    """Two nodes share the same id."""


class InvalidSkillError(SkillGraphError):
    """A node field is out of range."""


# =============================================================================
# Skill Graph
# =============================================================================


class SkillGraph:
    """
    Immutable directed acyclic graph of skill nodes.

    Usage:
        graph = SkillGraph(SKILL_TREE)
        graph.validate()
        available = graph.get_available_skills(mastered_ids)
    """

    def __init__(self, nodes: Iterable[SkillNode]):
        self._nodes: tuple[SkillNode, ...] = tuple(nodes)
        self._by_id: dict[str, SkillNode] = {}
        self._duplicate_ids: list[str] = []

        for node in self._nodes:
            if node.id in self._by_id:
                self._duplicate_ids.append(node.id)
                continue
            self._by_id[node.id] = node

        # Filled on first depth query
        self._depths: dict[str, int] | None = None

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[SkillNode]:
        return iter(self._by_id.values())

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._by_id

    @property
    def nodes(self) -> list[SkillNode]:
        """All nodes in definition order."""
        return list(self._by_id.values())

    @property
    def ids(self) -> list[str]:
        return list(self._by_id)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_by_id(self, skill_id: str) -> SkillNode | None:
        """Look up a skill node by id. Returns None if not found."""
        return self._by_id.get(skill_id)

    def get_roots(self) -> list[SkillNode]:
        """Nodes with no prerequisites."""
        return [node for node in self._by_id.values() if node.is_root]

    def get_available_skills(self, mastered_ids: Iterable[str]) -> list[SkillNode]:
        """
        Return unmastered nodes whose prerequisites have ALL been mastered.

        With nothing mastered this is the list of root nodes; with
        everything mastered it is empty.

        Args:
            mastered_ids: Ids of mastered skills (any iterable)

        Returns:
            Available nodes in definition order
        """
        mastered = set(mastered_ids)
        return [
            node
            for node in self._by_id.values()
            if node.id not in mastered
            and all(prereq in mastered for prereq in node.prerequisites)
        ]

    def get_skills_for_exercise(self, exercise_id: str) -> list[SkillNode]:
        """Return all nodes that list the exercise as a target."""
        return [
            node for node in self._by_id.values() if exercise_id in node.target_exercise_ids
        ]

    def get_skills_by_category(self, category: SkillCategory | str) -> list[SkillNode]:
        """Return all nodes in a category."""
        try:
            wanted = SkillCategory(category)
        except ValueError:
            return []
        return [node for node in self._by_id.values() if node.category == wanted]

    def get_depth(self, skill_id: str) -> int:
        """
        Longest-path distance from any root to the node.

        Roots (and unknown ids) have depth 0.
        """
        if self._depths is None:
            self._depths = self._compute_depths()
        return self._depths.get(skill_id, 0)

    def topological_order(self) -> list[str]:
        """Skill ids ordered so every node follows all of its prerequisites."""
        order, _ = self._kahn_order()
        self._ensure_complete(order)
        return order

    # -------------------------------------------------------------------------
    # Generation hints
    # -------------------------------------------------------------------------

    def get_generation_hints(self, skill_id: str) -> GenerationHints | None:
        """
        Build the brief the AI exercise generator receives for a skill.

        Returns None for unknown skills.
        """
        node = self._by_id.get(skill_id)
        if node is None:
            return None

        band = min(3, 1 + (node.tier - 1) // 5)
        return GenerationHints(
            skill_id=node.id,
            prompt_hint=(
                f"{node.name} ({node.category.display_name}, tier {node.tier}): "
                f"{node.description or node.name}"
            ),
            hand=_infer_hand(node),
            min_difficulty=band,
            max_difficulty=min(3, band + 1),
            target_midi=_infer_target_midi(node),
        )

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> bool:
        """
        Check structural integrity of the graph.

        Checks, in order: duplicate ids, field ranges, dangling
        prerequisites, presence of a root, and cycles (iterative DFS
        with an explicit in-progress set).

        Returns:
            True if the graph is valid

        Raises:
            SkillGraphError: Subclass describing the first violation found
        """
        if self._duplicate_ids:
            dup = self._duplicate_ids[0]
            raise DuplicateSkillError(f"Duplicate skill id: {dup}", skill_id=dup)

        for node in self._by_id.values():
            _check_fields(node)
            for prereq in node.prerequisites:
                if prereq not in self._by_id:
                    raise DanglingPrerequisiteError(
                        f"Skill {node.id} lists unknown prerequisite: {prereq}",
                        skill_id=node.id,
                    )

        if self._by_id and not self.get_roots():
            first = next(iter(self._by_id))
            raise InvalidSkillError("Skill graph has no root node", skill_id=first)

        self._check_acyclic()
        logger.debug(f"Skill graph valid: {len(self._by_id)} nodes")
        return True

    def _check_acyclic(self) -> None:
        visited: set[str] = set()
        in_progress: set[str] = set()

        for start in self._by_id:
            if start in visited:
                continue

            in_progress.add(start)
            stack = [(start, iter(self._by_id[start].prerequisites))]

            while stack:
                node_id, prereqs = stack[-1]
                for prereq in prereqs:
                    if prereq in in_progress:
                        raise CycleError(
                            f"Cycle detected involving skill: {prereq}", skill_id=prereq
                        )
                    if prereq in visited or prereq not in self._by_id:
                        continue
                    in_progress.add(prereq)
                    stack.append((prereq, iter(self._by_id[prereq].prerequisites)))
                    break
                else:
                    stack.pop()
                    in_progress.discard(node_id)
                    visited.add(node_id)

    # -------------------------------------------------------------------------
    # Depth
    # -------------------------------------------------------------------------

    def _kahn_order(self) -> tuple[list[str], dict[str, int]]:
        """
        Topological order plus longest-path depth per processed node.

        Unknown prerequisites are ignored. Nodes on a cycle never reach
        in-degree zero and are left out of the order.
        """
        dependents: dict[str, list[str]] = {sid: [] for sid in self._by_id}
        pending: dict[str, int] = {}
        for node in self._by_id.values():
            known = [p for p in node.prerequisites if p in self._by_id]
            pending[node.id] = len(known)
            for prereq in known:
                dependents[prereq].append(node.id)

        depths = {sid: 0 for sid, count in pending.items() if count == 0}
        queue = deque(depths)
        order: list[str] = []

        while queue:
            current = queue.popleft()
            order.append(current)
            for child in dependents[current]:
                depths[child] = max(depths.get(child, 0), depths[current] + 1)
                pending[child] -= 1
                if pending[child] == 0:
                    queue.append(child)

        return order, depths

    def _compute_depths(self) -> dict[str, int]:
        order, depths = self._kahn_order()
        self._ensure_complete(order)
        return depths

    def _ensure_complete(self, order: list[str]) -> None:
        if len(order) == len(self._by_id):
            return
        ordered = set(order)
        stuck = next(sid for sid in self._by_id if sid not in ordered)
        raise CycleError(f"Cycle detected involving skill: {stuck}", skill_id=stuck)


# =============================================================================
# Helpers
# =============================================================================


def _check_fields(node: SkillNode) -> None:
    if not 0.0 <= node.mastery_threshold <= 1.0:
        raise InvalidSkillError(
            f"Skill {node.id} has mastery threshold {node.mastery_threshold} outside 0-1",
            skill_id=node.id,
        )
    if not MIN_TIER <= node.tier <= MAX_TIER:
        raise InvalidSkillError(
            f"Skill {node.id} has tier {node.tier} outside {MIN_TIER}-{MAX_TIER}",
            skill_id=node.id,
        )
    if node.required_completions < 1:
        raise InvalidSkillError(
            f"Skill {node.id} requires {node.required_completions} completions (minimum 1)",
            skill_id=node.id,
        )


def _infer_hand(node: SkillNode) -> Hand | None:
    sid = node.id
    if sid.startswith("rh-") or sid.endswith("-rh"):
        return "right"
    if sid.startswith("lh-") or sid.endswith("-lh"):
        return "left"
    if node.category == SkillCategory.HAND_INDEPENDENCE or "hands" in sid:
        return "both"
    return None


def _infer_target_midi(node: SkillNode) -> tuple[int, ...]:
    if node.category == SkillCategory.NOTE_FINDING:
        return _C4_WHITE_KEYS
    if node.category == SkillCategory.BLACK_KEYS:
        return _C4_BLACK_KEYS
    for prefix, (root, steps) in _SCALE_ROOTS.items():
        if node.id.startswith(prefix):
            notes = (root + step for step in steps)
            return tuple(n for n in notes if LOWEST_MIDI <= n <= HIGHEST_MIDI)
    return ()


@lru_cache(maxsize=1)
def get_skill_graph() -> SkillGraph:
    """
    Get the validated year-one curriculum graph.

    Validation runs once per process; a broken graph raises here and is
    never handed to the planner.
    """
    graph = SkillGraph(SKILL_TREE)
    graph.validate()
    return graph
