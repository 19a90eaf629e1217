"""
Pytest fixtures for Code Duel tests.
"""

import pytest

from codeduel.api.service import DuelService
from codeduel.config import Settings
from codeduel.engine_core.state import Game, PlayerSlot
from codeduel.session import GameStore


@pytest.fixture
def game() -> Game:
    """A fresh game: both players at 100 HP and 3 energy."""
    return Game.new("test_game")


@pytest.fixture
def store() -> GameStore:
    """An empty game store."""
    return GameStore()


@pytest.fixture
def service(store: GameStore) -> DuelService:
    """A service backed by its own store."""
    return DuelService(store=store)


@pytest.fixture
def settings() -> Settings:
    """Default settings, independent of the environment."""
    return Settings()


@pytest.fixture
def set_player():
    """Helper to overwrite fields on one of a game's players."""
    def _set(game: Game, slot: PlayerSlot, **fields) -> None:
        player = game.players[slot]
        for name, value in fields.items():
            setattr(player, name, value)
    return _set
