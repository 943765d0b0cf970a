"""
Friendship community analysis — pure functions only.

Communities are the connected components of the undirected friendship graph.
A community's activity is the length, in edges, of the longest simple path
that can be walked inside it. Longest paths are found by exhaustive
backtracking from every member; the cost is exponential on dense, cyclic
components and nothing here bounds it.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

log = logging.getLogger(__name__)

AdjacencyMap = dict[str, list[str]]


class DanglingEdgeError(AssertionError):
    """An edge names a user that is not part of the supplied user set."""


def build_adjacency(
    user_ids: Iterable[str],
    edges: Iterable[tuple[str, str]],
) -> AdjacencyMap:
    """
    Build a symmetric adjacency map covering every user, isolated ones included.

    Edge direction is ignored, repeated edges collapse to one neighbor entry
    and self-loops are skipped. Neighbor lists keep first-seen order so that
    traversals are reproducible.
    """
    adjacency: AdjacencyMap = {uid: [] for uid in user_ids}
    seen: set[tuple[str, str]] = set()

    for a, b in edges:
        if a not in adjacency or b not in adjacency:
            missing = a if a not in adjacency else b
            raise DanglingEdgeError(f"friendship {a!r}-{b!r} references unknown user {missing!r}")
        if a == b:
            log.debug("Skipping self-loop on %s", a)
            continue
        key = (a, b) if a <= b else (b, a)
        if key in seen:
            continue
        seen.add(key)
        adjacency[a].append(b)
        adjacency[b].append(a)

    return adjacency


def find_components(user_ids: Iterable[str], adjacency: AdjacencyMap) -> list[list[str]]:
    """
    Partition users into connected components by depth-first traversal.

    Users are visited in the order given; each component lists its members
    in DFS preorder starting from its first-seen member.
    """
    visited: set[str] = set()
    components: list[list[str]] = []

    for start in user_ids:
        if start in visited:
            continue
        visited.add(start)
        component = [start]
        stack = [iter(adjacency[start])]
        while stack:
            for nxt in stack[-1]:
                if nxt not in visited:
                    visited.add(nxt)
                    component.append(nxt)
                    stack.append(iter(adjacency[nxt]))
                    break
            else:
                stack.pop()
        components.append(component)

    return components


def longest_path_from_source(
    adjacency: AdjacencyMap,
    source: str,
    on_path: set[str] | None = None,
) -> int:
    """
    Length in edges of the longest simple path starting at ``source``.

    on_path — vertices that may not be entered; defaults to {source}. The set
              is extended while descending and restored on backtrack, so the
              caller gets it back unchanged.

    Returns 0 when no neighbor can be entered.
    """
    if on_path is None:
        on_path = {source}

    longest = 0
    path: list[str] = []
    stack = [iter(adjacency[source])]

    while stack:
        for nxt in stack[-1]:
            if nxt not in on_path:
                on_path.add(nxt)
                path.append(nxt)
                stack.append(iter(adjacency[nxt]))
                if len(path) > longest:
                    longest = len(path)
                break
        else:
            stack.pop()
            if path:
                on_path.discard(path.pop())

    return longest


def longest_path(component: Iterable[str], adjacency: AdjacencyMap) -> int:
    """Longest simple path inside a component, trying every member as the start."""
    best = 0
    for uid in component:
        length = longest_path_from_source(adjacency, uid)
        if length > best:
            best = length
    return best


def rank_communities(
    components: Sequence[list[str]],
    adjacency: AdjacencyMap,
) -> tuple[list[int], int, list[list[str]]]:
    """
    Score every component and keep all of those tied at the maximum.

    Returns (scores aligned with components, maximum score, most active).
    The maximum is -1 when there are no components.
    """
    scores: list[int] = []
    best = -1
    most_active: list[list[str]] = []

    for component in components:
        score = longest_path(component, adjacency)
        scores.append(score)
        if score > best:
            best = score
            most_active = [component]
        elif score == best:
            most_active.append(component)

    return scores, best, most_active


def compute_communities(
    users: Sequence[str],
    edges: Iterable[tuple[str, str]],
) -> tuple[int, list[list[str]]]:
    """Return (number of communities, communities)."""
    adjacency = build_adjacency(users, edges)
    components = find_components(users, adjacency)
    return len(components), components


def most_active_communities(
    users: Sequence[str],
    edges: Iterable[tuple[str, str]],
) -> list[list[str]]:
    """Communities whose longest path equals the maximum over all communities."""
    adjacency = build_adjacency(users, edges)
    components = find_components(users, adjacency)
    _, _, most_active = rank_communities(components, adjacency)
    return most_active


def detect_communities(
    users: Sequence[str],
    edges: Iterable[tuple[str, str]],
) -> dict:
    """
    Full community report for the API.

    users — user ids in a stable order
    edges — (user_id, user_id) friendship pairs, direction ignored
    Returns communities with their longest path and a most-active flag.
    """
    adjacency = build_adjacency(users, edges)
    components = find_components(users, adjacency)
    scores, best, most_active = rank_communities(components, adjacency)

    communities_out = [
        {
            "id":           i,
            "size":         len(component),
            "members":      component,
            "longest_path": score,
            "most_active":  score == best,
        }
        for i, (component, score) in enumerate(zip(components, scores))
    ]

    return {
        "communities":      communities_out,
        "community_count":  len(components),
        "most_active":      most_active,
        "max_longest_path": max(best, 0),
        "total_users":      len(adjacency),
    }
