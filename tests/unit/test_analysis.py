"""Tests for networkx views and graph metrics."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from unittest.mock import patch

import networkx as nx
import pytest

from followgraph.analysis import compute_metrics, friendship_graph, summarize_user, to_digraph
from followgraph.errors import NotFoundError
from followgraph.graph import RelationshipGraph
from followgraph.models import User
from followgraph.schemas import GraphMetrics


@pytest.fixture
def triangle(registered, alice, bob, carol):
    """alice <-> bob, alice -> carol."""
    registered.follow_user(alice, bob)
    registered.follow_user(bob, alice)
    registered.follow_user(alice, carol)
    return registered


class TestToDigraph:
    def test_nodes_and_edges(self, triangle, alice, bob, carol, dave):
        G = to_digraph(triangle)

        assert isinstance(G, nx.DiGraph)
        assert set(G.nodes()) == {alice.id, bob.id, carol.id, dave.id}
        assert set(G.edges()) == {(alice.id, bob.id), (bob.id, alice.id), (alice.id, carol.id)}

    def test_node_names(self, triangle, alice):
        G = to_digraph(triangle)
        assert G.nodes[alice.id]["name"] == "alice"

    def test_digraph_is_a_snapshot(self, triangle, carol, dave):
        G = to_digraph(triangle)
        triangle.follow_user(carol, dave)
        assert not G.has_edge(carol.id, dave.id)


class TestFriendshipGraph:
    def test_only_mutual_pairs(self, triangle, alice, bob, carol):
        G = friendship_graph(to_digraph(triangle))

        assert isinstance(G, nx.Graph)
        assert G.has_edge(alice.id, bob.id)
        assert not G.has_edge(alice.id, carol.id)
        assert G.number_of_edges() == 1

    def test_keeps_isolated_users(self, triangle, dave):
        assert dave.id in friendship_graph(to_digraph(triangle))

    def test_self_follow_is_self_loop(self, registered, alice):
        registered.follow_user(alice, alice)
        G = friendship_graph(to_digraph(registered))
        assert G.has_edge(alice.id, alice.id)


class TestComputeMetrics:
    def test_metrics(self, triangle):
        metrics = compute_metrics(triangle)

        assert isinstance(metrics, GraphMetrics)
        assert metrics.user_count == 4
        assert metrics.follow_count == 3
        assert metrics.friendship_count == 1
        assert metrics.density == pytest.approx(3 / 12)
        assert metrics.reciprocity == pytest.approx(2 / 3)

    def test_empty_graph(self, graph):
        metrics = compute_metrics(graph)

        assert metrics.user_count == 0
        assert metrics.follow_count == 0
        assert metrics.density == 0.0
        assert metrics.reciprocity == 0.0

    def test_users_without_edges(self, registered):
        metrics = compute_metrics(registered)
        assert metrics.follow_count == 0
        assert metrics.reciprocity == 0.0


class TestSummarizeUser:
    def test_summary_counts(self, triangle, alice):
        summary = summarize_user(triangle, alice)

        assert summary.id == alice.id
        assert summary.name == "alice"
        assert summary.follower_count == 1
        assert summary.followee_count == 2
        assert summary.friend_count == 1
        assert summary.unfollowing_count == 1

    def test_summary_uses_registered_name(self, triangle, alice):
        summary = summarize_user(triangle, User(id=alice.id, name="other"))
        assert summary.name == "alice"

    def test_unregistered_user(self, triangle):
        with pytest.raises(NotFoundError):
            summarize_user(triangle, User(id="nobody"))

    def test_tuple_and_string_ids_stay_distinct(self, graph):
        tuple_user = User(id=("a", 1), name="tuple")
        string_user = User(id="('a', 1)", name="string")
        graph.add_user(tuple_user)
        graph.add_user(string_user)

        assert summarize_user(graph, tuple_user).id == ("a", 1)
        assert summarize_user(graph, string_user).id == "('a', 1)"


MUTATION_WAIT_SECONDS = 0.2


@contextmanager
def mutate_between_reads(graph: RelationshipGraph, late: User, target: User):
    """Right after the users are read, register late and make it follow target from another thread."""
    original = graph.query_all_users
    workers: list[threading.Thread] = []

    def mutate():
        graph.add_user(late)
        graph.follow_user(late, target)

    def read_then_mutate():
        users = original()
        if not workers:
            worker = threading.Thread(target=mutate)
            workers.append(worker)
            worker.start()
            # Blocks for the full wait while the graph lock is held
            worker.join(timeout=MUTATION_WAIT_SECONDS)
        return users

    with patch.object(graph, "query_all_users", side_effect=read_then_mutate):
        yield
    for worker in workers:
        worker.join()


class TestConsistentSnapshots:
    """Views are built from a single locked read of the graph."""

    def test_snapshot_reads_users_and_edges_together(self, registered, alice, bob):
        registered.follow_user(alice, bob)
        users, edges = registered.snapshot()

        assert {u.id for u in users} == set(registered.users)
        assert edges == [(alice.id, bob.id)]

    def test_digraph_never_has_unnamed_nodes(self, registered, alice):
        late = User(id="late", name="late")
        with mutate_between_reads(registered, late, alice):
            G = to_digraph(registered)

        edge_nodes = {n for edge in G.edges() for n in edge}
        assert edge_nodes <= set(G.nodes())
        assert all("name" in G.nodes[n] for n in G.nodes())
        assert "late" not in G
        assert "late" in registered

    def test_metrics_come_from_one_state(self, registered, alice):
        late = User(id="late", name="late")
        with mutate_between_reads(registered, late, alice):
            metrics = compute_metrics(registered)

        assert metrics.user_count == 4
        assert metrics.follow_count == 0
        assert metrics.friendship_count == 0

    def test_friendship_graph_reuses_given_digraph(self, triangle, alice, bob):
        directed = to_digraph(triangle)
        with patch.object(triangle, "snapshot") as snapshot:
            friends = friendship_graph(directed)

        snapshot.assert_not_called()
        assert set(map(frozenset, friends.edges())) == {frozenset({alice.id, bob.id})}

    def test_summary_reads_graph_once(self, triangle, alice):
        with patch.object(triangle, "snapshot", wraps=triangle.snapshot) as snapshot:
            summarize_user(triangle, alice)

        assert snapshot.call_count == 1
