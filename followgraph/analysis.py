"""
NetworkX views and metrics over a RelationshipGraph.

Every view is built from one RelationshipGraph.snapshot(), so users and
edges always come from the same graph state. Later mutations are not
reflected in graphs already returned.
"""

from __future__ import annotations

import logging

import networkx as nx

from followgraph.errors import NotFoundError
from followgraph.graph import RelationshipGraph
from followgraph.models import User
from followgraph.schemas import GraphMetrics, UserSummary

logger = logging.getLogger(__name__)


def to_digraph(graph: RelationshipGraph) -> nx.DiGraph:
    """Build a directed graph with one edge per follow (follower -> followee)."""
    users, edges = graph.snapshot()

    G = nx.DiGraph()
    for user in users:
        G.add_node(user.id, name=user.name)
    G.add_edges_from(edges)
    return G


def friendship_graph(directed: nx.DiGraph) -> nx.Graph:
    """Build an undirected graph of the mutual-follow pairs of a follow graph.

    A self-follow shows up as a self-loop.
    """
    G = nx.Graph()
    G.add_nodes_from(directed.nodes(data=True))
    G.add_edges_from((u, v) for u, v in directed.edges() if directed.has_edge(v, u))
    return G


def compute_metrics(graph: RelationshipGraph) -> GraphMetrics:
    """Calculate whole-graph metrics."""
    directed = to_digraph(graph)
    friends = friendship_graph(directed)

    # overall_reciprocity is not defined for graphs without edges
    reciprocity = nx.overall_reciprocity(directed) if directed.number_of_edges() else 0.0

    metrics = GraphMetrics(
        user_count=directed.number_of_nodes(),
        follow_count=directed.number_of_edges(),
        friendship_count=friends.number_of_edges(),
        density=nx.density(directed),
        reciprocity=reciprocity,
    )
    logger.info(
        f"Graph metrics: {metrics.user_count} users, {metrics.follow_count} follows, "
        f"{metrics.friendship_count} friendships, reciprocity={metrics.reciprocity:.3f}"
    )
    return metrics


def summarize_user(graph: RelationshipGraph, user: User) -> UserSummary:
    """Count the relationships of a single user."""
    directed = to_digraph(graph)
    if user.id not in directed:
        raise NotFoundError(user.id)

    followers = set(directed.predecessors(user.id))
    followees = set(directed.successors(user.id))

    return UserSummary(
        id=user.id,
        name=directed.nodes[user.id]["name"],
        follower_count=len(followers),
        followee_count=len(followees),
        friend_count=len(followers & followees),
        unfollowing_count=len(followees - followers),
    )
