"""
Sparse Count Tables

This module contains the two count tables shared by every language model:
a flat counter (key -> count) and a conditional counter
(context -> key -> count). Lookups never fail; a missing key simply has
count 0.
"""

from collections import Counter
from typing import Dict, Hashable, Iterator, List, Optional, Tuple


class SparseCounter:
    """
    Maps keys to non-negative real counts.

    Keys that were incremented by 0 are kept, so ``size()`` reports every
    key ever seen. The total is cached and recomputed lazily after the
    counter changes.
    """

    def __init__(self):
        self._counts: Counter = Counter()
        self._total: Optional[float] = None

    def increment(self, key: Hashable, amount: float = 1.0) -> None:
        """Add ``amount`` to the count for ``key``, creating it if absent."""
        self._counts[key] += amount
        self._total = None

    def get_count(self, key: Hashable) -> float:
        return self._counts.get(key, 0.0)

    def total_count(self) -> float:
        """Sum of all counts."""
        if self._total is None:
            self._total = float(sum(self._counts.values()))
        return self._total

    def size(self) -> int:
        """Number of distinct keys."""
        return len(self._counts)

    def keys(self) -> List[Hashable]:
        return list(self._counts.keys())

    def items(self) -> List[Tuple[Hashable, float]]:
        return list(self._counts.items())

    def most_common(self, k: Optional[int] = None) -> List[Tuple[Hashable, float]]:
        return self._counts.most_common(k)

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._counts

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._counts)

    def __repr__(self) -> str:
        return f"SparseCounter(size={self.size()}, total={self.total_count()})"


class ConditionalCounter:
    """
    Two-level counter: context -> token -> count.

    Used for bigram tables (previous word -> word) and, nested once more,
    for the trigram table.
    """

    def __init__(self):
        self._counters: Dict[Hashable, SparseCounter] = {}
        self._total: Optional[float] = None

    def increment(self, context: Hashable, token: Hashable, amount: float = 1.0) -> None:
        counter = self._counters.get(context)
        if counter is None:
            counter = SparseCounter()
            self._counters[context] = counter
        counter.increment(token, amount)
        self._total = None

    def get_count(self, context: Hashable, token: Hashable) -> float:
        counter = self._counters.get(context)
        if counter is None:
            return 0.0
        return counter.get_count(token)

    def context_counter(self, context: Hashable) -> SparseCounter:
        """
        Return the inner counter for ``context``.

        An unseen context yields a fresh empty counter that is not stored,
        so callers cannot grow the table by looking things up.
        """
        counter = self._counters.get(context)
        if counter is None:
            return SparseCounter()
        return counter

    def total_count(self) -> float:
        """Grand total over every (context, token) pair."""
        if self._total is None:
            self._total = float(sum(c.total_count() for c in self._counters.values()))
        return self._total

    def contexts(self) -> List[Hashable]:
        return list(self._counters.keys())

    def size(self) -> int:
        """Number of distinct contexts."""
        return len(self._counters)

    def __contains__(self, context: Hashable) -> bool:
        return context in self._counters

    def __len__(self) -> int:
        return len(self._counters)

    def __repr__(self) -> str:
        return f"ConditionalCounter(contexts={self.size()}, total={self.total_count()})"
