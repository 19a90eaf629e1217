"""
Action System - Round actions and their results.

Each round both players submit one action. The resolver turns the pair
into a BattleResult, which is also what the round log records.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class ActionType(str, Enum):
    """Actions a player may choose each round."""
    ATTACK = "attack"
    DEFEND = "defend"
    CHARGE = "charge"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]

    @classmethod
    def is_valid(cls, value: object) -> bool:
        return isinstance(value, str) and value in cls.values()


@dataclass(frozen=True)
class PlayerRoundResult:
    """
    What happened to one player during a round.

    damage is the damage this player took, after any defense reduction.
    energy_change is the requested delta before clamping.
    """
    damage: int = 0
    energy_change: int = 0
    status_change: str | None = None


@dataclass(frozen=True)
class BattleResult:
    """Result of resolving one round."""
    player1: PlayerRoundResult
    player2: PlayerRoundResult
    messages: tuple[str, ...] = ()
