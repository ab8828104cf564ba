"""
Pytest fixtures for the Tic-Tac-Toe tests.
"""

import pytest
from fastapi.testclient import TestClient

from engine.board import Board
from engine.game import GameEngine
from web.app import app, get_store
from web.sessions import GameSessionStore


@pytest.fixture
def board() -> Board:
    return Board()


@pytest.fixture
def engine() -> GameEngine:
    """An engine nobody has called start_game() on."""
    return GameEngine()


@pytest.fixture
def started_engine() -> GameEngine:
    """An engine with Ann (X) and Bo (O) seated, Ann to move."""
    engine = GameEngine()
    engine.start_game("Ann", "Bo")
    return engine


@pytest.fixture
def store() -> GameSessionStore:
    return GameSessionStore(max_sessions=8)


@pytest.fixture
def client(store: GameSessionStore):
    """TestClient wired to a private session store."""
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
