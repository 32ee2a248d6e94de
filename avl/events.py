"""
Structural events emitted by the AVL tree.

The tree reports what it does (node created, rotation performed, node
deleted, search missed) to an observer instead of printing. Observers are a
side channel: the tree behaves identically with or without one.
"""

import logging
from abc import ABC
from typing import Any, List, Optional, Tuple


class TreeObserver(ABC):
    """Base observer. Every hook is a no-op; override the ones you need."""

    def on_insert(self, key: Any) -> None:
        pass

    def on_duplicate(self, key: Any) -> None:
        pass

    def on_imbalance(self, key: Any, case: str) -> None:
        pass

    def on_rotate(self, direction: str, key: Any) -> None:
        pass

    def on_successor(self, key: Any, successor: Any) -> None:
        pass

    def on_delete(self, key: Any) -> None:
        pass

    def on_delete_miss(self, key: Any) -> None:
        pass

    def on_search_hit(self, key: Any) -> None:
        pass

    def on_search_miss(self, key: Any) -> None:
        pass


class NullObserver(TreeObserver):
    """Observer that ignores everything. Used when no observer is given."""


class LoggingObserver(TreeObserver):
    """Reports every structural event through the logging module."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        self.logger = logger or logging.getLogger(__name__)
        self.level = level

    def _log(self, message: str, *args: Any) -> None:
        self.logger.log(self.level, message, *args)

    def on_insert(self, key: Any) -> None:
        self._log("Created new node with key %s", key)

    def on_duplicate(self, key: Any) -> None:
        self._log("Duplicate key %s ignored", key)

    def on_imbalance(self, key: Any, case: str) -> None:
        self._log("%s imbalance detected at node %s", case.title(), key)

    def on_rotate(self, direction: str, key: Any) -> None:
        self._log("Performed %s rotation on node %s", direction, key)

    def on_successor(self, key: Any, successor: Any) -> None:
        self._log("Replacing node %s with successor %s", key, successor)

    def on_delete(self, key: Any) -> None:
        self._log("Deleted node with key %s", key)

    def on_delete_miss(self, key: Any) -> None:
        self._log("Node with key %s not found for deletion", key)

    def on_search_hit(self, key: Any) -> None:
        self._log("Found node with key %s", key)

    def on_search_miss(self, key: Any) -> None:
        self._log("Reached null node while searching for %s", key)


class EventRecorder(TreeObserver):
    """Records events as (name, args) tuples, in the order they happened."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, Tuple[Any, ...]]] = []

    def count(self, name: str) -> int:
        return sum(1 for event, _ in self.events if event == name)

    def names(self) -> List[str]:
        return [event for event, _ in self.events]

    def clear(self) -> None:
        self.events = []

    def on_insert(self, key: Any) -> None:
        self.events.append(("insert", (key,)))

    def on_duplicate(self, key: Any) -> None:
        self.events.append(("duplicate", (key,)))

    def on_imbalance(self, key: Any, case: str) -> None:
        self.events.append(("imbalance", (key, case)))

    def on_rotate(self, direction: str, key: Any) -> None:
        self.events.append(("rotate", (direction, key)))

    def on_successor(self, key: Any, successor: Any) -> None:
        self.events.append(("successor", (key, successor)))

    def on_delete(self, key: Any) -> None:
        self.events.append(("delete", (key,)))

    def on_delete_miss(self, key: Any) -> None:
        self.events.append(("delete_miss", (key,)))

    def on_search_hit(self, key: Any) -> None:
        self.events.append(("search_hit", (key,)))

    def on_search_miss(self, key: Any) -> None:
        self.events.append(("search_miss", (key,)))
