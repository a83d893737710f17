"""Ranking session handle.

A ``RankingSession`` is the only entry point a host needs: it owns the
preference graph, the scheduler, progress counters and the pair currently
shown to the user. Every mutation goes through it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import NamedTuple

from ..config import Settings, Strategy
from .errors import InvalidInput
from .graph import PreferenceGraph
from .resolver import is_complete, resolve, unranked
from .scheduler import ComparisonPair, ComparisonScheduler, create_scheduler

logger = logging.getLogger(__name__)


class Progress(NamedTuple):
    """Comparisons completed (asked or inferred) against the expected total.

    ``total`` is exact for the tournament strategy and an estimate for the
    quicksort strategy, so ``completed`` may end above or below it.
    """
    completed: int
    total: int

    @property
    def percentage(self) -> int:
        """Completion percentage, clamped to 0-100."""
        if self.total <= 0:
            return 0
        return max(0, min(100, round(self.completed / self.total * 100)))


@dataclass(frozen=True)
class RankingResult:
    """Snapshot of a session's outcome, handed to output formatters."""
    ranking: list[str]
    items: list[str]
    strategy: Strategy
    progress: Progress
    questions_asked: int = 0
    preferences: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        """Whether every item made it into the ranking."""
        return is_complete(self.ranking, self.items)

    @property
    def unranked(self) -> list[str]:
        """Items left out of a partial ranking, in original order."""
        return unranked(self.ranking, self.items)


def validate_items(items: Sequence[str]) -> list[str]:
    """Check an item set is usable for a session.

    Raises:
        InvalidInput: If there are fewer than 2 items, or any name is empty
            or duplicated
    """
    items = list(items)
    if len(items) < 2:
        raise InvalidInput("You need at least 2 items to start the game")

    seen: set[str] = set()
    for item in items:
        if not isinstance(item, str) or not item.strip():
            raise InvalidInput("Item names must be non-empty strings")
        if item in seen:
            raise InvalidInput(f"Duplicate item: {item!r}")
        seen.add(item)
    return items


class RankingSession:
    """One user ranking one item set.

    Usage::

        session = start_session(["Tea", "Coffee", "Juice"])
        pair = session.next_comparison()
        while pair is not None:
            session.answer(pair.first)
            pair = session.next_comparison()
        print(session.current_ranking())
    """

    def __init__(self, items: Sequence[str], settings: Settings | None = None):
        """Initialize a session.

        Args:
            items: Unique item names, in the order they were entered
            settings: Engine settings

        Raises:
            InvalidInput: If the item set is invalid
        """
        self.items = validate_items(items)
        self.settings = settings or Settings()
        self._graph = PreferenceGraph(self.items)
        self._scheduler: ComparisonScheduler = create_scheduler(self._graph, self.settings)
        self._current: ComparisonPair | None = None
        self._completed = 0
        self._questions = 0

        logger.debug("Started %s session with %d items",
                     self.strategy.value, len(self.items))

    @property
    def strategy(self) -> Strategy:
        """Scheduling strategy fixed at session start."""
        return self._scheduler.strategy

    @property
    def progress(self) -> Progress:
        return Progress(self._completed, self._scheduler.total)

    @property
    def questions_asked(self) -> int:
        """Comparisons actually answered by the user."""
        return self._questions

    @property
    def current_pair(self) -> ComparisonPair | None:
        """Pair awaiting an answer, if one has been handed out."""
        return self._current

    @property
    def is_finished(self) -> bool:
        """Whether the scheduler has run out of pairs to ask about."""
        return self._current is None and self._scheduler.exhausted

    def next_comparison(self) -> ComparisonPair | None:
        """Return the pair to show the user next.

        Pairs whose order can already be inferred are skipped and counted
        as completed. While a pair is outstanding the same pair is returned.

        Returns:
            The next pair, or None once the session is finished
        """
        if self._current is not None:
            return self._current

        pair, skipped = self._scheduler.next_pair()
        self._completed += skipped
        self._current = pair

        if pair is None:
            ranking = self.current_ranking()
            if is_complete(ranking, self.items):
                logger.debug("Session finished after %d questions", self._questions)
            else:
                logger.warning(
                    "Session finished with a partial ranking (%d of %d items)",
                    len(ranking), len(self.items),
                )
        return pair

    def answer(self, chosen: str) -> None:
        """Record the user's choice for the current pair.

        Args:
            chosen: One of the two items of the pair last returned by
                ``next_comparison``

        Raises:
            InvalidInput: If no pair is outstanding or ``chosen`` is not in it
        """
        pair = self._current
        if pair is None:
            raise InvalidInput("There is no comparison awaiting an answer")
        if chosen not in pair:
            raise InvalidInput(
                f"{chosen!r} is not one of the compared items "
                f"({pair.first!r} or {pair.second!r})"
            )

        self._scheduler.record(chosen, pair.other(chosen))
        self._completed += 1
        self._questions += 1
        self._current = None

    def current_ranking(self) -> list[str]:
        """Best-known ranking; partial if the order is not fully known yet."""
        return resolve(self._graph, self.items)

    def result(self) -> RankingResult:
        """Snapshot the session for output."""
        return RankingResult(
            ranking=self.current_ranking(),
            items=list(self.items),
            strategy=self.strategy,
            progress=self.progress,
            questions_asked=self._questions,
            preferences=self._graph.to_dict(),
        )

    def reset(self) -> None:
        """Forget all answers and start over with the same items."""
        self._graph.reset()
        self._scheduler.reset()
        self._current = None
        self._completed = 0
        self._questions = 0

    def __repr__(self) -> str:
        return (
            f"RankingSession(items={len(self.items)}, strategy={self.strategy.value}, "
            f"progress={self._completed}/{self._scheduler.total})"
        )


def start_session(items: Sequence[str], settings: Settings | None = None) -> RankingSession:
    """Convenience function to start a ranking session.

    Args:
        items: Unique item names
        settings: Engine settings

    Returns:
        New session

    Raises:
        InvalidInput: If fewer than 2 items or duplicate/empty names
    """
    return RankingSession(items, settings)
