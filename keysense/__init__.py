"""
keysense - adaptive piano curriculum planner.

Decides what a learner should practise next: a skill dependency graph,
a decay-based mastery model and a session planner that composes
warm-up, lesson and challenge exercises with learner-facing reasons.
"""

__version__ = "0.1.0"
