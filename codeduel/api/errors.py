"""
API Errors - Failures surfaced to clients.

Each error carries a machine-readable ErrorCode and the HTTP status the
API layer answers with. None of them leave a game modified.
"""

from __future__ import annotations
from typing import Any

from .schemas import ErrorCode


class DuelError(Exception):
    """Base class for errors reported to the caller."""
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class GameNotFound(DuelError):
    """Unknown game ID."""
    error_code = ErrorCode.GAME_NOT_FOUND
    status_code = 404

    def __init__(self, game_id: str):
        super().__init__("Game not found", details={"game_id": game_id})
        self.game_id = game_id


class GameNotActive(DuelError):
    """Actions submitted to a finished game."""
    error_code = ErrorCode.GAME_NOT_ACTIVE
    status_code = 400


class InvalidInput(DuelError):
    """Missing action, or an action outside the allowed set."""
    error_code = ErrorCode.INVALID_INPUT
    status_code = 400


class InternalFault(DuelError):
    """Unexpected failure while resolving a round."""
    error_code = ErrorCode.INTERNAL_ERROR
    status_code = 500
