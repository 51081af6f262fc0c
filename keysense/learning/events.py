"""
Mastery events.

The mastery core never applies rewards itself. It returns
``SkillMasteredEvent`` values, and the orchestration layer publishes them
on a ``MasteryEventBus`` for reward, achievement and persistence handlers.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime

from loguru import logger


@dataclass(frozen=True)
class SkillMasteredEvent:
    """A skill crossed its mastery threshold."""

    skill_id: str
    skill_name: str
    mastered_at: datetime
    completion_count: int


MasteryHandler = Callable[[SkillMasteredEvent], None]


class MasteryEventBus:
    """
    Synchronous publish/subscribe hub for mastery events.

    A failing handler is logged and does not stop delivery to the others.
    """

    def __init__(self) -> None:
        self._handlers: list[MasteryHandler] = []

    @property
    def handler_count(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: MasteryHandler) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def unsubscribe(self, handler: MasteryHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def publish(self, events: Iterable[SkillMasteredEvent]) -> int:
        """
        Deliver events to every subscribed handler, in subscription order.

        Returns:
            Number of successful handler deliveries
        """
        delivered = 0
        for event in events:
            logger.info(f"Skill mastered: {event.skill_name} ({event.skill_id})")
            for handler in list(self._handlers):
                try:
                    handler(event)
                except Exception:
                    logger.exception(f"Mastery handler failed for {event.skill_id}")
                    continue
                delivered += 1
        return delivered
