"""
Game Store - Keeps every game created during the process lifetime.

STORAGE RULES:
- In-memory only, nothing survives a restart
- Games are never deleted; finished games stay readable
- The store owns no rules; it only creates, finds and lists games

The store is an ordinary object: construct one at startup and hand it to
whoever needs it. Tests build a fresh one each.
"""

from __future__ import annotations
from dataclasses import dataclass
import itertools
import logging
import threading
import time

from ..engine_core.state import Game, GameStatus, Winner

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameSummary:
    """Snapshot of a game for listings."""
    id: str
    round: int
    status: GameStatus
    winner: Winner | None


class GameStore:
    """
    Keyed collection of games.

    Responsibilities:
    - Allocate unique game IDs
    - Track all games
    - Hand out one lock per game so callers can serialize rounds
    """

    def __init__(self):
        self._games: dict[str, Game] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._lock = threading.Lock()
        self._sequence = itertools.count(1)

    def create(
        self,
        player1_name: str | None = None,
        player2_name: str | None = None,
    ) -> Game:
        """
        Create and register a new game.

        Args:
            player1_name: Optional display name for player 1
            player2_name: Optional display name for player 2

        Returns:
            The new active game
        """
        with self._lock:
            game_id = self._next_id()
            game = Game.new(game_id, player1_name, player2_name)
            self._games[game_id] = game
            self._locks[game_id] = threading.Lock()
            total = len(self._games)

        LOGGER.info("Created game %s (games in memory: %d)", game_id, total)
        return game

    def get(self, game_id: str) -> Game | None:
        """Get a game by ID."""
        with self._lock:
            return self._games.get(game_id)

    def list(self) -> list[GameSummary]:
        """Summaries of all known games."""
        with self._lock:
            games = list(self._games.values())
        return [
            GameSummary(
                id=game.id,
                round=game.round,
                status=game.status,
                winner=game.winner,
            )
            for game in games
        ]

    def lock_for(self, game_id: str) -> threading.Lock | None:
        """The mutex that serializes rounds for one game."""
        with self._lock:
            return self._locks.get(game_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)

    def __contains__(self, game_id: object) -> bool:
        with self._lock:
            return game_id in self._games

    def _next_id(self) -> str:
        # Millisecond clock alone can collide; the sequence keeps IDs unique.
        return f"game_{int(time.time() * 1000)}_{next(self._sequence)}"
