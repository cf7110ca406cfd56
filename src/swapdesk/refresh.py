"""Data refresh after trade settlement.

Settled trades invalidate cached balances, history and PnL. Subscribers
register per topic; invalidation is fire-and-forget.
"""

import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from enum import Enum
from typing import Callable, Iterable

logger = logging.getLogger(__name__)


class Topic(str, Enum):
    BALANCES = "balances"
    HISTORY = "history"
    PNL = "pnl"


ALL_TOPICS = frozenset(Topic)


class DataRefresh(ABC):
    """Requests invalidation of cached account data."""

    @abstractmethod
    def invalidate(self, topics: Iterable[Topic] = ALL_TOPICS) -> None:
        pass


class RefreshBus(DataRefresh):
    """In-process topic invalidation bus."""

    def __init__(self):
        self._subscribers: dict[Topic, list[Callable[[], None]]] = defaultdict(list)
        self.invalidation_count = 0

    def subscribe(self, topic: Topic, callback: Callable[[], None]) -> None:
        self._subscribers[Topic(topic)].append(callback)

    def invalidate(self, topics: Iterable[Topic] = ALL_TOPICS) -> None:
        """Call every subscriber of each topic. Subscriber errors are logged, not raised."""
        topics = [Topic(t) for t in topics]
        self.invalidation_count += 1
        for topic in topics:
            for callback in self._subscribers.get(topic, []):
                try:
                    callback()
                except Exception as e:
                    logger.error(f"Refresh subscriber for {topic.value} failed: {e}")
        logger.debug(f"Invalidated topics: {', '.join(sorted(t.value for t in topics))}")
