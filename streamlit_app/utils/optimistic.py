"""
Snapshot and restore for optimistic UI updates.

Usage:
    with OptimisticTransaction(state, "favorites", "search.suggestions"):
        state.favorites.append(placeholder)      # shown immediately
        api.add_favorite(token, payload)         # raises -> both attributes restored

The named attributes (dotted paths allowed) are deep-copied on entry. If the block
raises, every attribute is put back exactly as it was and the exception propagates.
"""

import copy
import logging
from typing import Any, Dict, Tuple

logger = logging.getLogger(__name__)


class OptimisticTransaction:
    """Deep-copy snapshot of some attributes of a state object, restored on failure."""

    def __init__(self, target: Any, *paths: str) -> None:
        if not paths:
            raise ValueError("OptimisticTransaction needs at least one attribute path")
        self.target = target
        self.paths = paths
        self._snapshot: Dict[str, Any] = {}
        self.active = False

    def _resolve(self, path: str) -> Tuple[Any, str]:
        owner = self.target
        *parents, attr = path.split(".")
        for name in parents:
            owner = getattr(owner, name)
        return owner, attr

    def begin(self) -> "OptimisticTransaction":
        self._snapshot = {}
        for path in self.paths:
            owner, attr = self._resolve(path)
            self._snapshot[path] = copy.deepcopy(getattr(owner, attr))
        self.active = True
        return self

    def commit(self) -> None:
        self._snapshot = {}
        self.active = False

    def rollback(self) -> None:
        if not self.active:
            return
        for path, value in self._snapshot.items():
            owner, attr = self._resolve(path)
            setattr(owner, attr, copy.deepcopy(value))
        logger.debug("Rolled back optimistic update of %s", ", ".join(self.paths))
        self.commit()

    def __enter__(self) -> "OptimisticTransaction":
        return self.begin()

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            self.rollback()
        else:
            self.commit()
        return False
