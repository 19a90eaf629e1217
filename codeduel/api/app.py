"""
FastAPI Application - REST API for duel clients.

Endpoints:
    POST   /api/game/create            Create a game
    GET    /api/game/{id}              Get game state
    POST   /api/game/{id}/actions      Submit both players' actions for a round
    GET    /api/games                  List all games
    GET    /api/health                 Health check

Round Flow:
    1. POST /api/game/create returns the new game's id
    2. Each round, POST both actions to /actions
    3. The response carries the updated game and the round's battle result
    4. When gameStatus is "finished", further submissions are rejected

All responses are JSON with explicit Pydantic schemas.
"""

from datetime import datetime, timezone
from typing import Optional
import logging
import time

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings
from ..logging_config import configure_logging
from .errors import DuelError
from .schemas import (
    ActionsResponse,
    CreateGameRequest,
    ErrorCode,
    ErrorResponse,
    GameListResponse,
    GameResponse,
    HealthResponse,
    SubmitActionsRequest,
)
from .service import DuelService

LOGGER = logging.getLogger(__name__)


def create_app(
    service: Optional[DuelService] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional DuelService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Code Duel API",
        description="""
Turn-based two-player duel resolver.

## Round Flow

Both players choose one of `attack`, `defend` or `charge` each round.
Actions resolve simultaneously:

- **attack** costs 1 energy and deals 15 damage (25 if charged)
- **defend** gains 1 energy and halves incoming damage this round
- **charge** costs 2 energy and boosts the next attack

## Error Codes

| Code | Description |
|------|-------------|
| `GAME_NOT_FOUND` | Game does not exist |
| `GAME_NOT_ACTIVE` | Game has already finished |
| `INVALID_INPUT` | Missing or unknown action |
| `VALIDATION_ERROR` | Request body could not be parsed |
| `INTERNAL_ERROR` | Round could not be resolved |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    duel_service = service or DuelService()
    app.state.service = duel_service
    app.state.settings = settings
    LOGGER.debug(
        "Code Duel API configured (env=%s, origins=%s)",
        settings.env,
        ",".join(settings.allowed_origins),
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json", by_alias=True),
        )

    @app.exception_handler(DuelError)
    async def handle_duel_error(request: Request, exc: DuelError) -> JSONResponse:
        return make_error_response(
            exc.error_code,
            exc.message,
            status_code=exc.status_code,
            details=exc.details,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        LOGGER.info("Malformed request to %s: %s", request.url.path, exc.errors())
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Malformed request body",
            details={"errors": [
                {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
                for error in exc.errors()
            ]},
        )

    # =========================================================================
    # Request logging
    # =========================================================================

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        LOGGER.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/game/create",
        response_model=GameResponse,
        tags=["Games"],
        summary="Create a new game",
    )
    async def create_game(
        body: Optional[CreateGameRequest] = Body(None),
    ) -> GameResponse:
        """
        Create a new game with both players at full HP and 3 energy.

        The body is optional; it only sets display names.
        """
        request = body or CreateGameRequest()
        game = duel_service.create_game(request.player1_name, request.player2_name)
        return GameResponse(game=game)

    @app.get(
        "/api/game/{game_id}",
        response_model=GameResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get game state",
    )
    async def get_game(game_id: str) -> GameResponse:
        """Get the current state of a game, with the last 3 rounds of its log."""
        return GameResponse(game=duel_service.get_game(game_id))

    @app.post(
        "/api/game/{game_id}/actions",
        response_model=ActionsResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid actions or game finished"},
            404: {"model": ErrorResponse, "description": "Game not found"},
            500: {"model": ErrorResponse, "description": "Round could not be resolved"},
        },
        tags=["Game Loop"],
        summary="Submit both players' actions",
    )
    async def submit_actions(
        game_id: str,
        body: Optional[SubmitActionsRequest] = Body(None),
    ) -> ActionsResponse:
        """
        Resolve one round.

        **Request Body:**
        ```json
        {"player1Action": "attack", "player2Action": "defend"}
        ```
        """
        request = body or SubmitActionsRequest()
        return duel_service.submit_actions(
            game_id, request.player1_action, request.player2_action
        )

    @app.get(
        "/api/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List all games",
    )
    async def list_games() -> GameListResponse:
        """List every game held in memory (for debugging)."""
        games = duel_service.list_games()
        return GameListResponse(games=games, count=len(games))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/api/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            message="Code Duel Backend is running!",
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Code Duel API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/api/health",
        }

    return app


# For running directly: uvicorn codeduel.api.app:app
app = None
try:
    app = create_app()
except ValueError as exc:
    # Invalid environment settings, e.g. a non-integer PORT
    LOGGER.error("Code Duel API not created: %s", exc)
