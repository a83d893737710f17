"""Ranking resolution.

Turns the preference graph into the best-known ordering of the session
items using Kahn's topological sort.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Sequence

from .graph import PreferenceGraph
from .inference import can_infer


def resolve(graph: PreferenceGraph, items: Sequence[str]) -> list[str]:
    """Compute the current ranking, best first.

    Items whose in-degree is zero at the same time are emitted in strict
    FIFO order, seeded from the original item order, so the result is a
    single deterministic linearization.

    Items caught in a cycle never reach zero in-degree and are left out;
    the ranking is then shorter than ``items``. That is the designed
    signal for a contradiction, not an error.

    Args:
        graph: Preference graph
        items: Session items in their original order

    Returns:
        Ranked items, most preferred first
    """
    in_degree = {item: 0 for item in items}
    for _, less_preferred in graph.edges():
        in_degree[less_preferred] = in_degree.get(less_preferred, 0) + 1

    queue = deque(item for item in items if in_degree[item] == 0)
    ranking: list[str] = []

    while queue:
        current = queue.popleft()
        ranking.append(current)
        for neighbor in graph.neighbors(current):
            in_degree[neighbor] -= 1
            if in_degree[neighbor] == 0:
                queue.append(neighbor)

    return ranking


def is_complete(ranking: Sequence[str], items: Sequence[str]) -> bool:
    """Whether the ranking contains every session item."""
    return len(ranking) == len(items)


def unranked(ranking: Sequence[str], items: Sequence[str]) -> list[str]:
    """Items missing from ``ranking``, in original item order."""
    ranked = set(ranking)
    return [item for item in items if item not in ranked]


def is_determined(graph: PreferenceGraph, ranking: Sequence[str], items: Sequence[str]) -> bool:
    """Whether ``ranking`` is the only order consistent with the graph.

    True when every item is ranked and each adjacent pair is already
    inferable. A topological order can list every item while still leaving
    neighbours unrelated; this is the stricter test.
    """
    if not is_complete(ranking, items):
        return False
    return all(can_infer(graph, a, b) for a, b in zip(ranking, ranking[1:]))
