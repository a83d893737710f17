"""Transitive inference over the preference graph.

Answers whether the relative order of two items already follows from the
recorded answers, so the scheduler can skip asking about it.
"""

from __future__ import annotations

from .graph import PreferenceGraph


def is_preferred(graph: PreferenceGraph, a: str, b: str) -> bool:
    """Check whether ``a`` is known to beat ``b``, directly or transitively.

    Uses an explicit-stack depth-first search with a visited set, so an
    accidental cycle cannot loop forever and large item sets do not hit the
    recursion limit.

    Args:
        graph: Preference graph to search
        a: Candidate winner
        b: Candidate loser

    Returns:
        True if a path ``a -> ... -> b`` exists
    """
    if graph.has_edge(a, b):
        return True

    visited = {a}
    stack = [a]
    while stack:
        current = stack.pop()
        for neighbor in graph.neighbors(current):
            if neighbor == b:
                return True
            if neighbor not in visited:
                visited.add(neighbor)
                stack.append(neighbor)
    return False


def can_infer(graph: PreferenceGraph, a: str, b: str) -> bool:
    """Check whether the order of ``a`` and ``b`` is already determined.

    Symmetric in its arguments. Never mutates the graph.
    """
    if graph.has_edge(a, b) or graph.has_edge(b, a):
        return True
    return is_preferred(graph, a, b) or is_preferred(graph, b, a)
