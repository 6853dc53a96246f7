"""
followgraph - In-memory index of users and who follows whom.

This package contains:
- models: User identity
- graph: RelationshipGraph (follow edges and relationship queries)
- analysis: NetworkX views and metrics
- errors: NotFoundError, AlreadyExistsError, AlreadyFollowingError
"""

from followgraph.errors import AlreadyExistsError, AlreadyFollowingError, GraphError, NotFoundError
from followgraph.graph import RelationshipGraph
from followgraph.models import User

__all__ = [
    "AlreadyExistsError",
    "AlreadyFollowingError",
    "GraphError",
    "NotFoundError",
    "RelationshipGraph",
    "User",
]
