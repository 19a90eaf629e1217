"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between clients and the engine.
Wire field names are camelCase (maxHp, gameStatus, player1Action, ...);
Python attribute names stay snake_case through aliases.

Error Codes:
- GAME_NOT_FOUND: Game does not exist
- GAME_NOT_ACTIVE: Game has already finished
- INVALID_INPUT: Missing action or action not in attack/defend/charge
- VALIDATION_ERROR: Request body could not be parsed
- INTERNAL_ERROR: Unexpected failure while resolving a round
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    GAME_NOT_ACTIVE = "GAME_NOT_ACTIVE"
    INVALID_INPUT = "INVALID_INPUT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Shared Models
# =============================================================================

class PlayerView(CamelModel):
    """A player's full record."""
    id: str = Field(description="player1 or player2")
    name: str
    hp: int = Field(ge=0)
    max_hp: int
    energy: int = Field(ge=0)
    max_energy: int
    charged: bool = False
    status: str = "active"


class PlayerRoundResultView(CamelModel):
    """What happened to one player in a round."""
    damage: int = Field(0, description="Damage taken this round, after defense")
    energy_change: int = Field(0, description="Requested energy delta before clamping")
    status_change: Optional[str] = None


class BattleResultView(CamelModel):
    """Result of one resolved round."""
    player1: PlayerRoundResultView
    player2: PlayerRoundResultView
    messages: list[str] = Field(default_factory=list)


class BattleLogEntryView(CamelModel):
    """One entry of the round log."""
    round: int
    actions: dict[str, Optional[str]]
    results: BattleResultView
    final_hp: dict[str, int]


class GameView(CamelModel):
    """Complete game state for display."""
    id: str
    players: dict[str, PlayerView]
    current_turn: str = "player1"
    round: int
    game_status: str = Field(description="active or finished")
    winner: Optional[str] = Field(None, description="player1, player2, tie or null")
    last_actions: dict[str, Optional[str]]
    recent_battle_log: list[BattleLogEntryView] = Field(
        default_factory=list, description="Up to the last 3 rounds"
    )


class GameSummaryView(CamelModel):
    """Short game description for listings."""
    id: str
    round: int
    game_status: str
    winner: Optional[str] = None


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(CamelModel):
    """Optional settings for a new game."""
    player1_name: Optional[str] = Field(None, max_length=40, description="Display name for player 1")
    player2_name: Optional[str] = Field(None, max_length=40, description="Display name for player 2")


class SubmitActionsRequest(CamelModel):
    """Both players' actions for the next round."""
    # Untyped so the service reports bad values after the game checks.
    player1_action: Any = Field(None, description="attack, defend or charge")
    player2_action: Any = Field(None, description="attack, defend or charge")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(CamelModel):
    """Standard error response."""
    success: bool = False
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")


class GameResponse(CamelModel):
    """Response carrying one game."""
    success: bool = True
    game: GameView


class ActionsResponse(CamelModel):
    """Response after a round has been resolved."""
    success: bool = True
    game: GameView
    battle_result: BattleResultView


class GameListResponse(CamelModel):
    """Response listing every game."""
    success: bool = True
    games: list[GameSummaryView]
    count: int


class HealthResponse(CamelModel):
    """Health check response."""
    success: bool = True
    message: str
    timestamp: str
    version: str
