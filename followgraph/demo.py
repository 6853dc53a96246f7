#!/usr/bin/env python3
"""
Demonstration of the relationship graph.

Runs a scripted scenario against a fresh graph and prints one line per
check in the form "<operation> expected:<x>, actual:<y>". Expected failures
(duplicate registration, unregistered users) are logged and checked too.

Usage:
    followgraph-demo [--debug]
    python -m followgraph.demo [--debug]
"""

from __future__ import annotations

import argparse
import logging
import sys
import uuid
from dataclasses import dataclass
from typing import Any

from followgraph.analysis import compute_metrics
from followgraph.errors import AlreadyExistsError, GraphError, NotFoundError
from followgraph.graph import RelationshipGraph
from followgraph.logging_config import configure_logging, get_logger
from followgraph.models import User
from followgraph.settings import get_settings

logger = get_logger(__name__)


@dataclass
class Check:
    """Outcome of one scripted check"""

    operation: str
    expected: Any
    actual: Any

    @property
    def passed(self) -> bool:
        return bool(self.expected == self.actual)

    def __str__(self) -> str:
        return f"{self.operation} expected:{self.expected}, actual:{self.actual}"


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Run the relationship graph demonstration scenario")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(args)


def _expect_error(operation: str, error_type: type[GraphError], func: Any, *args: Any) -> Check:
    try:
        func(*args)
    except error_type as e:
        logger.info(f"{operation} err={e}")
        return Check(operation, error_type.__name__, error_type.__name__)
    return Check(operation, error_type.__name__, "no error")


def _ids(users: list[User]) -> set[Any]:
    return {user.id for user in users}


def run_demo(graph: RelationshipGraph | None = None) -> list[Check]:
    """Run the scripted scenario and return every check."""
    if graph is None:
        graph = RelationshipGraph.from_settings(get_settings())

    user_a = User(id=uuid.uuid4(), name="giung.lee")
    user_b = User(id=uuid.uuid4(), name="lei.su")
    user_c = User(id=uuid.uuid4(), name="phillip.teng")  # registered late

    checks: list[Check] = []

    graph.add_user(user_a)
    graph.add_user(user_b)
    checks.append(_expect_error("AddUser duplicate", AlreadyExistsError, graph.add_user, user_a))
    checks.append(Check("QueryAllUsers", 2, len(graph.query_all_users())))

    graph.follow_user(user_a, user_b)
    checks.append(_expect_error("FollowUser unregistered", NotFoundError, graph.follow_user, user_b, user_c))

    checks.append(Check("QueryFollowers(A)", set(), _ids(graph.query_followers(user_a))))
    checks.append(Check("QueryFollowees(A)", {user_b.id}, _ids(graph.query_followees(user_a))))
    checks.append(Check("QueryFollowers(B)", {user_a.id}, _ids(graph.query_followers(user_b))))
    checks.append(Check("QueryFollowees(B)", set(), _ids(graph.query_followees(user_b))))
    checks.append(_expect_error("QueryFollowers unregistered", NotFoundError, graph.query_followers, user_c))
    checks.append(_expect_error("QueryFollowees unregistered", NotFoundError, graph.query_followees, user_c))

    checks.append(Check("QueryFriendRelationship(A,B)", False, graph.query_friend_relationship(user_a, user_b)))
    checks.append(Check("QueryUnfollowingFriends(A)", {user_b.id}, _ids(graph.query_unfollowing_friends(user_a))))

    graph.follow_user(user_b, user_a)
    checks.append(Check("QueryFriendRelationship(A,B)", True, graph.query_friend_relationship(user_a, user_b)))
    checks.append(Check("QueryUnfollowingFriends(A)", set(), _ids(graph.query_unfollowing_friends(user_a))))
    checks.append(Check("QueryUnfollowingFriends(B)", set(), _ids(graph.query_unfollowing_friends(user_b))))

    graph.add_user(user_c)
    graph.follow_user(user_c, user_a)
    graph.follow_user(user_a, user_c)
    checks.append(Check("QueryMutualFriends(B,C)", {user_a.id}, _ids(graph.query_mutual_friends(user_b, user_c))))

    metrics = compute_metrics(graph)
    checks.append(Check("Metrics friendships", 2, metrics.friendship_count))

    return checks


def main() -> None:
    """Main entry point."""
    args = parse_args()
    configure_logging("demo", logging.DEBUG if args.debug else None)

    try:
        checks = run_demo()
    except GraphError as e:
        logger.error(f"Unexpected graph error: {e}")
        sys.exit(1)

    for check in checks:
        print(check)

    failed = [check for check in checks if not check.passed]
    print(f"\n{len(checks) - len(failed)}/{len(checks)} checks passed")
    if failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
