"""
API Module - Client interface.

Exposes the engine via REST API. A client:
1. Creates a game
2. Submits both players' actions each round
3. Receives the updated state and the round's battle result
4. Stops when the game is finished

All state is held in memory for the lifetime of the process.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    SubmitActionsRequest,
    # Responses
    GameResponse,
    ActionsResponse,
    GameListResponse,
    ErrorResponse,
    HealthResponse,
    # Shared
    GameView,
    PlayerView,
    BattleResultView,
    BattleLogEntryView,
    GameSummaryView,
    ErrorCode,
)
from .errors import DuelError, GameNotFound, GameNotActive, InvalidInput, InternalFault
from .service import DuelService

__all__ = [
    # Requests
    "CreateGameRequest",
    "SubmitActionsRequest",
    # Responses
    "GameResponse",
    "ActionsResponse",
    "GameListResponse",
    "ErrorResponse",
    "HealthResponse",
    # Shared
    "GameView",
    "PlayerView",
    "BattleResultView",
    "BattleLogEntryView",
    "GameSummaryView",
    "ErrorCode",
    # Errors
    "DuelError",
    "GameNotFound",
    "GameNotActive",
    "InvalidInput",
    "InternalFault",
    # Service
    "DuelService",
]
