"""
Pydantic schemas for graph analysis results.
"""

from __future__ import annotations

from collections.abc import Hashable

from pydantic import BaseModel


class GraphMetrics(BaseModel):
    """Whole-graph metrics"""

    user_count: int
    follow_count: int
    friendship_count: int  # mutual-follow pairs, self-follows included
    density: float
    reciprocity: float  # share of follow edges that are reciprocated


class UserSummary(BaseModel):
    """Relationship counts for a single user"""

    id: Hashable  # the registered user id, unconverted
    name: str
    follower_count: int
    followee_count: int
    friend_count: int
    unfollowing_count: int  # followees who don't follow back
