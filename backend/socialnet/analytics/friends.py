"""
Friend-count ranking — pure functions only.
"""
from __future__ import annotations

import networkx as nx


def rank_by_friend_count(
    users: list[dict],
    pairs: list[tuple[str, str]],
    minimum: int = 0,
) -> list[dict]:
    """
    Users with at least ``minimum`` friends, most-connected first.

    users — list of dicts: {id, first_name, last_name, email}
    pairs — friendship pairs (user_id, user_id)
    Ties on friend count are ordered by first name, then last name.
    """
    G = nx.Graph()
    G.add_nodes_from(u["id"] for u in users)
    G.add_edges_from((a, b) for a, b in pairs if a != b)

    ranked = []
    for u in users:
        degree = G.degree(u["id"])
        if degree >= minimum:
            ranked.append({**u, "friend_count": degree})

    ranked.sort(key=lambda u: (-u["friend_count"], u["first_name"], u["last_name"]))
    return ranked
