"""Relationship graph error classes.

Every error is a caller-input error. The graph is left unchanged when one
is raised, so the call can be retried with corrected input.
"""

from __future__ import annotations

from collections.abc import Hashable


class GraphError(Exception):
    """Base exception for relationship graph errors."""

    pass


class NotFoundError(GraphError):
    """Raised when a referenced user id is not registered."""

    def __init__(self, user_id: Hashable, role: str = "user"):
        self.user_id = user_id
        self.role = role
        super().__init__(f"Queried {role} {user_id} doesn't exist")


class AlreadyExistsError(GraphError):
    """Raised when registering a user id that is already registered."""

    def __init__(self, user_id: Hashable):
        self.user_id = user_id
        super().__init__(f"User {user_id} already registered")


class AlreadyFollowingError(GraphError):
    """Raised when the follow edge already exists."""

    def __init__(self, follower_id: Hashable, followee_id: Hashable):
        self.follower_id = follower_id
        self.followee_id = followee_id
        super().__init__(f"User {follower_id} is already following user {followee_id}")
