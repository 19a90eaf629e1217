"""
Game State - Players, games and the round log.

Design principles:
- Plain mutable dataclasses: the resolver updates a Game in place
- Only the resolver mutates player resources
- The round log is append-only
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import time

from .action import BattleResult


MAX_HP = 100
MAX_ENERGY = 5
STARTING_ENERGY = 3

# How many log entries external views carry
RECENT_LOG_SIZE = 3


class PlayerSlot(str, Enum):
    """The two fixed player slots."""
    PLAYER1 = "player1"
    PLAYER2 = "player2"

    @property
    def opponent(self) -> PlayerSlot:
        if self is PlayerSlot.PLAYER1:
            return PlayerSlot.PLAYER2
        return PlayerSlot.PLAYER1


class GameStatus(str, Enum):
    """High-level game status."""
    ACTIVE = "active"
    FINISHED = "finished"


class Winner(str, Enum):
    """Outcome of a finished game."""
    PLAYER1 = "player1"
    PLAYER2 = "player2"
    TIE = "tie"


@dataclass
class Player:
    """
    A duelist.

    Invariant: 0 <= hp <= max_hp and 0 <= energy <= max_energy.
    """
    id: PlayerSlot
    name: str
    hp: int = MAX_HP
    max_hp: int = MAX_HP
    energy: int = STARTING_ENERGY
    max_energy: int = MAX_ENERGY
    charged: bool = False
    status: str = "active"

    @classmethod
    def fresh(cls, slot: PlayerSlot, name: str | None = None) -> Player:
        """Create a player at full HP and starting energy."""
        default_name = "Player 1" if slot is PlayerSlot.PLAYER1 else "Player 2"
        return cls(id=slot, name=name or default_name)


@dataclass(frozen=True)
class RoundLogEntry:
    """One resolved round. Never modified after it is appended."""
    round: int
    actions: dict[PlayerSlot, str]
    results: BattleResult
    final_hp: dict[PlayerSlot, int]


@dataclass
class Game:
    """
    A duel between two players.

    Created by the store, mutated in place by the resolver each round.
    """
    id: str
    players: dict[PlayerSlot, Player]
    current_turn: PlayerSlot = PlayerSlot.PLAYER1  # Unused; both players act each round
    round: int = 1
    status: GameStatus = GameStatus.ACTIVE
    winner: Winner | None = None
    last_actions: dict[PlayerSlot, str | None] = field(
        default_factory=lambda: {PlayerSlot.PLAYER1: None, PlayerSlot.PLAYER2: None}
    )
    battle_log: list[RoundLogEntry] = field(default_factory=list)
    created_at: float = field(default_factory=time.time)

    @classmethod
    def new(
        cls,
        game_id: str,
        player1_name: str | None = None,
        player2_name: str | None = None,
    ) -> Game:
        """Create a game with both players fresh."""
        return cls(
            id=game_id,
            players={
                PlayerSlot.PLAYER1: Player.fresh(PlayerSlot.PLAYER1, player1_name),
                PlayerSlot.PLAYER2: Player.fresh(PlayerSlot.PLAYER2, player2_name),
            },
        )

    @property
    def player1(self) -> Player:
        return self.players[PlayerSlot.PLAYER1]

    @property
    def player2(self) -> Player:
        return self.players[PlayerSlot.PLAYER2]

    @property
    def is_active(self) -> bool:
        return self.status is GameStatus.ACTIVE

    def recent_log(self, size: int = RECENT_LOG_SIZE) -> list[RoundLogEntry]:
        """The last `size` log entries, oldest first."""
        if size <= 0:
            return []
        return self.battle_log[-size:]
