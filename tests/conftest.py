from __future__ import annotations

import pytest

from graph_memory.server import create_server
from graph_memory.store import GraphStore


@pytest.fixture
def store() -> GraphStore:
    return GraphStore()


@pytest.fixture
def server(store: GraphStore):
    return create_server(store)
