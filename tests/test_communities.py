"""
Unit tests for analytics/communities.py — pure functions only, no DB required.

Tests cover:
  - build_adjacency: symmetry, isolated users, duplicates, self-loops, dangling edges
  - find_components: partition, DFS member order, merge behaviour
  - longest_path_from_source / longest_path: chains, stars, cycles, cliques
  - rank_communities / most_active_communities: ties and the empty graph
  - detect_communities: report shape
"""
import itertools

import networkx as nx
import pytest

from socialnet.analytics.communities import (
    DanglingEdgeError,
    build_adjacency,
    compute_communities,
    detect_communities,
    find_components,
    longest_path,
    longest_path_from_source,
    most_active_communities,
    rank_communities,
)


# ── helpers ────────────────────────────────────────────────────────────────────

def chain(n, prefix="c"):
    users = [f"{prefix}{i}" for i in range(n)]
    return users, list(zip(users, users[1:]))


def star(leaves):
    users = ["hub"] + [f"leaf{i}" for i in range(leaves)]
    return users, [("hub", leaf) for leaf in users[1:]]


SCENARIO_USERS = list("ABCDEFG")
SCENARIO_EDGES = [("A", "C"), ("A", "D"), ("B", "C"), ("B", "D"), ("B", "E"), ("F", "G")]


# ── build_adjacency ────────────────────────────────────────────────────────────

class TestBuildAdjacency:
    def test_symmetric_regardless_of_direction(self):
        adj = build_adjacency(["a", "b", "c"], [("b", "a"), ("b", "c")])
        assert adj == {"a": ["b"], "b": ["a", "c"], "c": ["b"]}

    def test_isolated_users_present(self):
        adj = build_adjacency(["a", "b", "lonely"], [("a", "b")])
        assert adj["lonely"] == []

    def test_duplicate_edges_collapse(self):
        adj = build_adjacency(["a", "b"], [("a", "b"), ("b", "a"), ("a", "b")])
        assert adj == {"a": ["b"], "b": ["a"]}

    def test_self_loop_ignored(self):
        adj = build_adjacency(["a", "b"], [("a", "a"), ("a", "b")])
        assert adj == {"a": ["b"], "b": ["a"]}

    def test_dangling_edge_fails_fast(self):
        with pytest.raises(DanglingEdgeError):
            build_adjacency(["a"], [("a", "ghost")])

    def test_dangling_edge_is_assertion_class(self):
        with pytest.raises(AssertionError):
            build_adjacency([], [("x", "y")])


# ── find_components ────────────────────────────────────────────────────────────

class TestFindComponents:
    def test_scenario_partition(self):
        adj = build_adjacency(SCENARIO_USERS, SCENARIO_EDGES)
        components = find_components(SCENARIO_USERS, adj)
        assert [set(c) for c in components] == [set("ABCDE"), {"F", "G"}]

    def test_members_in_dfs_preorder(self):
        adj = build_adjacency(SCENARIO_USERS, SCENARIO_EDGES)
        components = find_components(SCENARIO_USERS, adj)
        # A -> C -> B -> D, then back up to B -> E
        assert components[0] == ["A", "C", "B", "D", "E"]

    def test_no_edges_gives_singletons(self):
        users = [f"u{i}" for i in range(6)]
        count, components = compute_communities(users, [])
        assert count == 6
        assert components == [[u] for u in users]

    def test_empty_graph(self):
        assert compute_communities([], []) == (0, [])

    def test_partition_matches_networkx(self):
        users = [f"u{i}" for i in range(12)]
        edges = [("u0", "u1"), ("u1", "u2"), ("u3", "u4"), ("u5", "u6"),
                 ("u6", "u7"), ("u7", "u5"), ("u9", "u2"), ("u10", "u11")]
        _, components = compute_communities(users, edges)

        flat = [u for c in components for u in c]
        assert sorted(flat) == sorted(users)
        assert len(flat) == len(set(flat))

        G = nx.Graph()
        G.add_nodes_from(users)
        G.add_edges_from(edges)
        expected = {frozenset(c) for c in nx.connected_components(G)}
        assert {frozenset(c) for c in components} == expected

    def test_adding_bridge_merges_two_components(self):
        users = list("abcdef")
        edges = [("a", "b"), ("c", "d"), ("e", "f")]
        before, _ = compute_communities(users, edges)
        after, _ = compute_communities(users, edges + [("b", "c")])
        assert after == before - 1

    def test_long_chain_does_not_recurse(self):
        users, edges = chain(5000)
        count, components = compute_communities(users, edges)
        assert count == 1
        assert components[0] == users


# ── longest path ───────────────────────────────────────────────────────────────

class TestLongestPath:
    def test_isolated_vertex_is_zero(self):
        adj = build_adjacency(["x"], [])
        assert longest_path_from_source(adj, "x") == 0
        assert longest_path(["x"], adj) == 0

    def test_single_edge(self):
        adj = build_adjacency(["F", "G"], [("F", "G")])
        assert longest_path(["F", "G"], adj) == 1

    @pytest.mark.parametrize("k", [2, 3, 5, 8])
    def test_chain_is_k_minus_one(self, k):
        users, edges = chain(k)
        adj = build_adjacency(users, edges)
        assert longest_path(users, adj) == k - 1

    def test_chain_from_middle_reaches_far_end(self):
        users, edges = chain(7)
        adj = build_adjacency(users, edges)
        assert longest_path_from_source(adj, "c2") == 4

    @pytest.mark.parametrize("leaves", [2, 3, 6, 10])
    def test_star_is_two(self, leaves):
        users, edges = star(leaves)
        adj = build_adjacency(users, edges)
        assert longest_path(users, adj) == 2
        assert longest_path_from_source(adj, "hub") == 1

    def test_single_leaf_star_is_one(self):
        users, edges = star(1)
        adj = build_adjacency(users, edges)
        assert longest_path(users, adj) == 1

    def test_cycle_walks_all_the_way_round(self):
        users = list("abcde")
        edges = list(zip(users, users[1:] + users[:1]))
        adj = build_adjacency(users, edges)
        assert longest_path(users, adj) == 4

    def test_complete_graph_is_hamiltonian(self):
        users = [f"k{i}" for i in range(6)]
        adj = build_adjacency(users, itertools.combinations(users, 2))
        assert longest_path(users, adj) == 5

    def test_scenario_values(self):
        adj = build_adjacency(SCENARIO_USERS, SCENARIO_EDGES)
        # E-B-C-A-D
        assert longest_path(list("ABCDE"), adj) == 4
        assert longest_path(["F", "G"], adj) == 1

    def test_on_path_set_is_restored(self):
        adj = build_adjacency(SCENARIO_USERS, SCENARIO_EDGES)
        on_path = {"E"}
        assert longest_path_from_source(adj, "E", on_path) == 4
        assert on_path == {"E"}

    def test_on_path_blocks_vertices(self):
        users, edges = chain(5)
        adj = build_adjacency(users, edges)
        assert longest_path_from_source(adj, "c0", {"c0", "c3"}) == 2


# ── ranking ────────────────────────────────────────────────────────────────────

class TestRanking:
    def test_scenario_most_active(self):
        most_active = most_active_communities(SCENARIO_USERS, SCENARIO_EDGES)
        assert len(most_active) == 1
        assert set(most_active[0]) == set("ABCDE")

    def test_all_isolated_ties_everyone(self):
        users = ["a", "b", "c"]
        assert most_active_communities(users, []) == [["a"], ["b"], ["c"]]

    def test_ties_kept_in_component_order(self):
        users = ["a", "b", "c", "d", "e"]
        edges = [("a", "b"), ("d", "e")]
        assert most_active_communities(users, edges) == [["a", "b"], ["d", "e"]]

    def test_strictly_greater_resets_retained(self):
        users = ["a", "b", "c", "d", "e"]
        edges = [("a", "b"), ("c", "d"), ("d", "e")]
        assert most_active_communities(users, edges) == [["c", "d", "e"]]

    def test_empty_graph(self):
        assert most_active_communities([], []) == []
        assert rank_communities([], {}) == ([], -1, [])

    def test_every_returned_component_shares_the_maximum(self):
        users = [f"u{i}" for i in range(10)]
        edges = [("u0", "u1"), ("u1", "u2"), ("u3", "u4"), ("u4", "u5"), ("u7", "u8")]
        adj = build_adjacency(users, edges)
        components = find_components(users, adj)
        scores, best, most_active = rank_communities(components, adj)
        assert most_active
        assert best == max(scores) == 2
        assert all(longest_path(c, adj) == best for c in most_active)


# ── detect_communities ─────────────────────────────────────────────────────────

class TestDetectCommunities:
    def test_report_shape(self):
        report = detect_communities(SCENARIO_USERS, SCENARIO_EDGES)
        assert report["community_count"] == 2
        assert report["total_users"] == 7
        assert report["max_longest_path"] == 4
        big, small = report["communities"]
        assert big["size"] == 5 and big["longest_path"] == 4 and big["most_active"]
        assert small["members"] == ["F", "G"]
        assert small["longest_path"] == 1 and not small["most_active"]

    def test_empty_report(self):
        report = detect_communities([], [])
        assert report["communities"] == []
        assert report["most_active"] == []
        assert report["max_longest_path"] == 0
