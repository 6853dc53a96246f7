"""
Root test configuration and fixtures for followgraph.

- unit/: Fast, isolated unit tests

Note: sys.path manipulation is handled here to ensure imports work correctly.
"""

from __future__ import annotations

import sys
import uuid
from pathlib import Path

import pytest

# Add project root to path to allow imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from followgraph.graph import RelationshipGraph  # noqa: E402
from followgraph.models import User  # noqa: E402
from followgraph.settings import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Clear cached settings so environment patches take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def graph():
    """An empty relationship graph."""
    return RelationshipGraph()


@pytest.fixture
def alice():
    return User(id=uuid.uuid4(), name="alice")


@pytest.fixture
def bob():
    return User(id=uuid.uuid4(), name="bob")


@pytest.fixture
def carol():
    return User(id=uuid.uuid4(), name="carol")


@pytest.fixture
def dave():
    return User(id=uuid.uuid4(), name="dave")


@pytest.fixture
def registered(graph, alice, bob, carol, dave):
    """Graph with alice, bob, carol and dave registered and no edges."""
    for user in (alice, bob, carol, dave):
        graph.add_user(user)
    return graph

