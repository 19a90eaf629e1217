"""
Engine Core - Duel state and deterministic round resolution.

The engine:
1. Defines players, games and the round log
2. Defines the action set
3. Resolves a pair of simultaneous actions via resolve_round()
"""

from .state import (
    Game,
    GameStatus,
    Player,
    PlayerSlot,
    RoundLogEntry,
    Winner,
    MAX_HP,
    MAX_ENERGY,
    STARTING_ENERGY,
    RECENT_LOG_SIZE,
)
from .action import ActionType, BattleResult, PlayerRoundResult
from .resolver import resolve_round, decide_winner

__all__ = [
    "Game",
    "GameStatus",
    "Player",
    "PlayerSlot",
    "RoundLogEntry",
    "Winner",
    "MAX_HP",
    "MAX_ENERGY",
    "STARTING_ENERGY",
    "RECENT_LOG_SIZE",
    "ActionType",
    "BattleResult",
    "PlayerRoundResult",
    "resolve_round",
    "decide_winner",
]
