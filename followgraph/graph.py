"""In-memory relationship graph of users and directed follow edges.

The graph keeps two adjacency indices that are inverse views of the same
relation:

- follower_index[U]: ids of the users who follow U
- followee_index[U]: ids of the users U follows

Both indices store ids only. User records live once in the registry and are
looked up by id at query time.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Hashable, Iterable
from contextlib import AbstractContextManager, nullcontext
from typing import TYPE_CHECKING

from followgraph.errors import AlreadyExistsError, AlreadyFollowingError, NotFoundError
from followgraph.logging_config import TRACE
from followgraph.models import User

if TYPE_CHECKING:
    from followgraph.settings import Settings

logger = logging.getLogger(__name__)


class RelationshipGraph:
    """Registry of users plus the follow relation between them.

    Every failing operation raises before touching any structure, so the
    graph is never left half-updated. With thread_safe enabled each public
    operation runs under one exclusive lock.
    """

    def __init__(self, thread_safe: bool = True):
        self.users: dict[Hashable, User] = {}
        self.follower_index: dict[Hashable, set[Hashable]] = {}
        self.followee_index: dict[Hashable, set[Hashable]] = {}
        self._lock: AbstractContextManager = threading.RLock() if thread_safe else nullcontext()

    @classmethod
    def from_settings(cls, settings: Settings) -> RelationshipGraph:
        return cls(thread_safe=settings.thread_safe)

    def __len__(self) -> int:
        with self._lock:
            return len(self.users)

    def __contains__(self, user_id: object) -> bool:
        with self._lock:
            return user_id in self.users

    def __repr__(self) -> str:
        return f"RelationshipGraph(users={len(self.users)}, follows={self.follow_count()})"

    # --- Mutations ---

    def add_user(self, user: User) -> bool:
        """Register a user.

        Raises:
            AlreadyExistsError: a user with the same id is already registered
        """
        with self._lock:
            if user.id in self.users:
                raise AlreadyExistsError(user.id)

            self.users[user.id] = user
            self.follower_index.setdefault(user.id, set())
            self.followee_index.setdefault(user.id, set())

        logger.debug(f"Registered user {user}")
        return True

    def follow_user(self, follower: User, followee: User) -> bool:
        """Record that follower follows followee.

        A user may follow itself; the edge behaves like any other.

        Raises:
            NotFoundError: follower or followee is not registered (follower checked first)
            AlreadyFollowingError: the edge already exists
        """
        with self._lock:
            self._require(follower, "follower")
            self._require(followee, "followee")

            if followee.id in self.followee_index[follower.id]:
                raise AlreadyFollowingError(follower.id, followee.id)

            self.follower_index[followee.id].add(follower.id)
            self.followee_index[follower.id].add(followee.id)

        logger.debug(f"User {follower} now follows {followee}")
        return True

    # --- Single-entity queries ---

    def get_user(self, user_id: Hashable) -> User:
        """Look up a registered user by id."""
        with self._lock:
            if user_id not in self.users:
                raise NotFoundError(user_id)
            return self.users[user_id]

    def query_all_users(self) -> list[User]:
        """Return every registered user, in no particular order."""
        with self._lock:
            return list(self.users.values())

    def query_followers(self, user: User) -> list[User]:
        """Return the users following the given user."""
        with self._lock:
            self._require(user)
            return self._materialize(self.follower_index[user.id], "followers", user)

    def query_followees(self, user: User) -> list[User]:
        """Return the users the given user follows."""
        with self._lock:
            self._require(user)
            return self._materialize(self.followee_index[user.id], "followees", user)

    # --- Derived queries ---

    def query_friend_relationship(self, user1: User, user2: User) -> bool:
        """Return True when user1 and user2 follow each other."""
        with self._lock:
            self._require(user1, "user1")
            self._require(user2, "user2")
            return user2.id in self.followee_index[user1.id] and user1.id in self.followee_index[user2.id]

    def query_mutual_friends(self, user1: User, user2: User) -> list[User]:
        """Return the users who are mutual-follow friends of both user1 and user2."""
        with self._lock:
            self._require(user1, "user1")
            self._require(user2, "user2")
            shared = self._friend_ids(user1.id) & self._friend_ids(user2.id)
            return self._materialize(shared, "mutual friends", user1)

    def query_unfollowing_friends(self, user: User) -> list[User]:
        """Return the followees of user who do not follow user back."""
        with self._lock:
            self._require(user)
            one_way = self.followee_index[user.id] - self.follower_index[user.id]
            return self._materialize(one_way, "unfollowing friends", user)

    # --- Edge accessors ---

    def follow_count(self) -> int:
        """Number of directed follow edges."""
        with self._lock:
            return sum(len(followees) for followees in self.followee_index.values())

    def snapshot(self) -> tuple[list[User], list[tuple[Hashable, Hashable]]]:
        """Every user and every (follower_id, followee_id) pair, read under one lock."""
        with self._lock:
            return self.query_all_users(), self.edges()

    def edges(self) -> list[tuple[Hashable, Hashable]]:
        """Every (follower_id, followee_id) pair."""
        with self._lock:
            return [
                (follower_id, followee_id)
                for follower_id, followees in self.followee_index.items()
                for followee_id in followees
            ]

    # --- Helpers ---

    def _require(self, user: User, role: str = "user") -> None:
        # Existence is checked against the registry, not the indices
        if user.id not in self.users:
            raise NotFoundError(user.id, role)

    def _friend_ids(self, user_id: Hashable) -> set[Hashable]:
        return self.follower_index[user_id] & self.followee_index[user_id]

    def _materialize(self, user_ids: Iterable[Hashable], label: str, subject: User) -> list[User]:
        result = [self.users[user_id] for user_id in user_ids]
        logger.log(TRACE, f"Query {label} of {subject}: {len(result)} users")
        return result
