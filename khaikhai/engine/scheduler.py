"""Comparison scheduling strategies.

A scheduler owns the queue of pairs still to be asked about. Before a pair
is handed out it is checked against the inference oracle; pairs whose order
already follows from earlier answers are dropped and reported as skipped.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections import deque
from typing import NamedTuple

from ..config import Settings, Strategy
from .graph import PreferenceGraph
from .inference import can_infer
from .resolver import is_determined, resolve, unranked

logger = logging.getLogger(__name__)


class ComparisonPair(NamedTuple):
    """Two distinct items awaiting a decision, in presentation order."""
    first: str
    second: str

    def other(self, item: str) -> str:
        """Return the item of the pair that is not ``item``."""
        if item == self.first:
            return self.second
        if item == self.second:
            return self.first
        raise ValueError(f"{item!r} is not part of {self}")


class ComparisonScheduler(ABC):
    """Base class for scheduling strategies.

    Subclasses provide the seed batch, follow-up batches and the progress
    total. The base class handles queueing, inference filtering and folding
    answers into the graph.
    """

    strategy: Strategy

    def __init__(self, graph: PreferenceGraph, settings: Settings | None = None):
        """Initialize the scheduler and queue the seed batch.

        Args:
            graph: Session preference graph (shared with the session)
            settings: Engine settings
        """
        self.graph = graph
        self.settings = settings or Settings()
        self.items: tuple[str, ...] = graph.items
        self._pending: deque[ComparisonPair] = deque()
        self._exhausted = False
        self.reset()

    @property
    @abstractmethod
    def total(self) -> int:
        """Expected number of comparisons, for progress display."""

    @abstractmethod
    def seed(self) -> list[ComparisonPair]:
        """Pairs to queue when the session starts."""

    @abstractmethod
    def next_batch(self) -> list[ComparisonPair]:
        """Pairs to queue once the current queue runs dry.

        An empty list ends the session.
        """

    def reset(self) -> None:
        """Drop all queued pairs and queue the seed batch again."""
        self._pending = deque(self.seed())
        self._exhausted = False

    @property
    def pending(self) -> list[ComparisonPair]:
        """Queued pairs, not yet filtered through inference."""
        return list(self._pending)

    @property
    def exhausted(self) -> bool:
        """Whether the scheduler has nothing left to ask."""
        return self._exhausted

    def next_pair(self) -> tuple[ComparisonPair | None, int]:
        """Pop the next pair whose order is still unknown.

        Returns:
            Tuple of (pair or None when finished, number of pairs skipped
            because their order could already be inferred)
        """
        skipped = 0
        while not self._exhausted:
            while self._pending:
                pair = self._pending.popleft()
                if can_infer(self.graph, pair.first, pair.second):
                    logger.debug("Skipping %s vs %s: order already known", pair.first, pair.second)
                    skipped += 1
                    continue
                return pair, skipped

            batch = self.next_batch()
            if not batch:
                self._exhausted = True
                break
            logger.debug("Queued %d follow-up comparisons", len(batch))
            self._pending.extend(batch)

        return None, skipped

    def record(self, preferred: str, less_preferred: str) -> None:
        """Fold an answer into the graph."""
        self.graph.add_edge(preferred, less_preferred)


class TournamentScheduler(ComparisonScheduler):
    """Round-robin: every pair once, in row-major item order.

    Always yields a complete ranking when the answers are consistent,
    because each pair is either asked or inferred.
    """

    strategy = Strategy.TOURNAMENT

    @property
    def total(self) -> int:
        n = len(self.items)
        return n * (n - 1) // 2

    def seed(self) -> list[ComparisonPair]:
        pairs = []
        for i, first in enumerate(self.items):
            for second in self.items[i + 1:]:
                pairs.append(ComparisonPair(first, second))
        return pairs

    def next_batch(self) -> list[ComparisonPair]:
        return []


class QuicksortScheduler(ComparisonScheduler):
    """Pivot-based batches aiming for about n*log2(n) questions.

    The first item is compared against everything else. After that, each
    time the queue runs dry the current ranking decides the next small
    batch: unranked items are triangulated against the start, middle and
    end of the ranking, otherwise open pairs between neighbouring places
    in the ranking are asked about directly.
    """

    strategy = Strategy.QUICKSORT

    @property
    def total(self) -> int:
        n = len(self.items)
        return math.ceil(n * math.log2(n)) if n > 1 else 0

    def seed(self) -> list[ComparisonPair]:
        pivot = self.items[0]
        return [ComparisonPair(pivot, item) for item in self.items[1:]]

    def next_batch(self) -> list[ComparisonPair]:
        ranking = resolve(self.graph, self.items)
        if is_determined(self.graph, ranking, self.items):
            return []

        batch = self._triangulate(ranking)
        if not batch:
            batch = self._undetermined_pairs(ranking)
        if not batch:
            logger.debug("No informative comparison left; stopping with %d/%d ranked",
                         len(ranking), len(self.items))
        return batch

    def _triangulate(self, ranking: list[str]) -> list[ComparisonPair]:
        """Compare the first placeable unranked item against spread-out ranks."""
        if not ranking:
            return []

        last = len(ranking) - 1
        indices = list(dict.fromkeys([0, len(ranking) // 2, last]))

        for pivot in unranked(ranking, self.items):
            batch = [
                ComparisonPair(pivot, ranking[idx])
                for idx in indices
                if not can_infer(self.graph, pivot, ranking[idx])
            ]
            if batch:
                return batch[:self.settings.triangulation_batch]
        return []

    def _undetermined_pairs(self, ranking: list[str]) -> list[ComparisonPair]:
        """Neighbouring places in the ranking whose order is still open.

        A ranking is a topological order, so once every neighbouring pair
        is inferable the whole ranking is a chain and nothing else is open.
        """
        batch = [
            ComparisonPair(first, second)
            for first, second in zip(ranking, ranking[1:])
            if not can_infer(self.graph, first, second)
        ]
        return batch[:self.settings.triangulation_batch]


SCHEDULERS: dict[Strategy, type[ComparisonScheduler]] = {
    Strategy.TOURNAMENT: TournamentScheduler,
    Strategy.QUICKSORT: QuicksortScheduler,
}


def create_scheduler(graph: PreferenceGraph, settings: Settings | None = None) -> ComparisonScheduler:
    """Create the scheduler for the graph's item count.

    Args:
        graph: Session preference graph
        settings: Engine settings (strategy ``AUTO`` picks by item count)

    Returns:
        Scheduler instance
    """
    settings = settings or Settings()
    strategy = settings.select_strategy(len(graph.items))
    return SCHEDULERS[strategy](graph, settings)
