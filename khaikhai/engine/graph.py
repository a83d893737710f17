"""Directed preference graph.

An edge ``A -> B`` records that the user chose ``A`` over ``B`` directly.
Transitive facts are never stored; they are derived by the inference
module on demand.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .errors import InvalidInput


class PreferenceGraph:
    """Adjacency-list graph of direct "preferred over" facts.

    Every session item is a key, even with no outgoing edges. Cycles are
    neither prevented nor detected: a contradictory answer sequence simply
    produces one, and the resolver drops the items caught in it.
    """

    def __init__(self, items: Iterable[str]):
        """Initialize an empty graph over a fixed item set.

        Args:
            items: Session items in their original order
        """
        self._items: tuple[str, ...] = tuple(items)
        self._adjacency: dict[str, list[str]] = {}
        self.reset()

    @property
    def items(self) -> tuple[str, ...]:
        """Session items in their original order."""
        return self._items

    def reset(self) -> None:
        """Clear all edges, leaving one empty entry per item."""
        self._adjacency = {item: [] for item in self._items}

    def add_edge(self, preferred: str, less_preferred: str) -> bool:
        """Record that ``preferred`` beats ``less_preferred``.

        Re-adding an existing edge is a no-op. The opposite edge is not
        consulted, so the first answer for an ordered pair wins.

        Args:
            preferred: Item the user chose
            less_preferred: Item the user passed over

        Returns:
            True if a new edge was inserted, False if it already existed

        Raises:
            InvalidInput: If either item is unknown or both are the same item
        """
        self._check_item(preferred)
        self._check_item(less_preferred)
        if preferred == less_preferred:
            raise InvalidInput(f"An item cannot be preferred over itself: {preferred!r}")

        successors = self._adjacency[preferred]
        if less_preferred in successors:
            return False
        successors.append(less_preferred)
        return True

    def neighbors(self, item: str) -> list[str]:
        """Items that ``item`` directly beats (empty if none or unknown)."""
        return list(self._adjacency.get(item, ()))

    def has_edge(self, preferred: str, less_preferred: str) -> bool:
        """Whether the direct edge ``preferred -> less_preferred`` exists."""
        return less_preferred in self._adjacency.get(preferred, ())

    def edges(self) -> Iterator[tuple[str, str]]:
        """Iterate over ``(preferred, less_preferred)`` edges in item order."""
        for item in self._items:
            for successor in self._adjacency[item]:
                yield item, successor

    def to_dict(self) -> dict[str, list[str]]:
        """Plain-dict copy of the adjacency lists."""
        return {item: list(successors) for item, successors in self._adjacency.items()}

    def __contains__(self, item: object) -> bool:
        return item in self._adjacency

    def __len__(self) -> int:
        return sum(len(successors) for successors in self._adjacency.values())

    def __repr__(self) -> str:
        return f"PreferenceGraph(items={len(self._items)}, edges={len(self)})"

    def _check_item(self, item: str) -> None:
        if item not in self._adjacency:
            raise InvalidInput(f"Unknown item: {item!r}")
