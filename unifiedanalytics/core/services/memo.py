"""
Projection Cache - Skips recomputation while the raw payload and view options are unchanged.

Keys on the *identity* of the raw payload: a new payload object always recomputes,
even if its contents are equal. The cached payload is held alongside the result so
that a recycled id() can never serve a stale view.
"""

import logging
from collections import OrderedDict
from collections.abc import Callable
from typing import Any, TypeVar

from unifiedanalytics.core.domain.options import ProjectionOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProjectionCache:
    """
    Bounded LRU memoizer for pipeline views. Not thread-safe; one cache per caller.
    """

    def __init__(self, max_entries: int = 32):
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self.max_entries = max_entries
        self._entries: OrderedDict[tuple, tuple[Any, Any]] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get_or_compute(
        self,
        payload: Any,
        options: ProjectionOptions,
        compute: Callable[[], T],
    ) -> T:
        """
        Return the cached result for (payload, options), computing it on a miss.

        Args:
            payload: Raw payload object; compared by identity
            options: View options; compared by value
            compute: Zero-argument callable producing the result
        """
        key = (id(payload), options.cache_key())
        entry = self._entries.get(key)
        if entry is not None and entry[0] is payload:
            self._entries.move_to_end(key)
            self.hits += 1
            logger.debug(f"Projection cache hit for metric '{options.metric.value}'")
            return entry[1]

        self.misses += 1
        result = compute()
        self._entries[key] = (payload, result)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
        return result

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0
