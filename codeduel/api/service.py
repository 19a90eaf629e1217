"""
API Service - Business logic layer between API and engine.

The service:
1. Validates submitted actions
2. Looks games up in the store
3. Serializes rounds per game
4. Formats engine state for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import logging

from .errors import GameNotActive, GameNotFound, InternalFault, InvalidInput
from .schemas import (
    ActionsResponse,
    BattleLogEntryView,
    BattleResultView,
    GameSummaryView,
    GameView,
    PlayerRoundResultView,
    PlayerView,
)
from ..engine_core import (
    ActionType,
    BattleResult,
    Game,
    Player,
    PlayerRoundResult,
    RoundLogEntry,
    resolve_round,
)
from ..engine_core.state import RECENT_LOG_SIZE
from ..session import GameStore, GameSummary

LOGGER = logging.getLogger(__name__)


@dataclass
class DuelService:
    """
    Main API service.

    Usage:
        service = DuelService()

        game = service.create_game()
        response = service.submit_actions(game.id, "attack", "defend")
        print(response.battle_result.messages)
    """
    store: GameStore = field(default_factory=GameStore)
    recent_log_size: int = RECENT_LOG_SIZE

    def create_game(
        self,
        player1_name: str | None = None,
        player2_name: str | None = None,
    ) -> GameView:
        """
        Create a new game.
        """
        game = self.store.create(player1_name, player2_name)
        return self._build_game_view(game)

    def get_game(self, game_id: str) -> GameView:
        """
        Get a game's current state.

        Raises:
            GameNotFound: Unknown game ID
        """
        return self._build_game_view(self._require_game(game_id))

    def submit_actions(
        self,
        game_id: str,
        player1_action: Any,
        player2_action: Any,
    ) -> ActionsResponse:
        """
        Resolve one round for a game.

        Checks run in this order: game exists, game active, both actions
        present, both actions valid.

        Raises:
            GameNotFound: Unknown game ID
            GameNotActive: The game has finished
            InvalidInput: Missing or unknown action
            InternalFault: The engine failed; the game is unchanged
        """
        game = self._require_game(game_id)
        lock = self.store.lock_for(game_id)

        with lock:
            if not game.is_active:
                LOGGER.info("Rejected actions for %s: game is %s", game_id, game.status.value)
                raise GameNotActive(
                    "Game is not active",
                    details={"game_status": game.status.value},
                )

            received = {
                "player1Action": player1_action,
                "player2Action": player2_action,
            }
            if not player1_action or not player2_action:
                LOGGER.info("Rejected actions for %s: missing action %s", game_id, received)
                raise InvalidInput(
                    "Both player actions are required",
                    details={"received": received},
                )
            if not (ActionType.is_valid(player1_action) and ActionType.is_valid(player2_action)):
                LOGGER.info("Rejected actions for %s: invalid action %s", game_id, received)
                raise InvalidInput(
                    "Invalid action. Must be: " + ", ".join(ActionType.values()),
                    details={"received": received},
                )

            try:
                result = resolve_round(game, player1_action, player2_action)
            except Exception as exc:
                LOGGER.exception("Failed to resolve round for %s", game_id)
                raise InternalFault(
                    "Internal server error",
                    details={"reason": str(exc)},
                ) from exc

            return ActionsResponse(
                game=self._build_game_view(game),
                battle_result=self._build_battle_result(result),
            )

    def list_games(self) -> list[GameSummaryView]:
        """
        List every game known to the store.
        """
        return [self._build_summary(summary) for summary in self.store.list()]

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _require_game(self, game_id: str) -> Game:
        game = self.store.get(game_id)
        if game is None:
            LOGGER.info("Game not found: %s (known: %d)", game_id, len(self.store))
            raise GameNotFound(game_id)
        return game

    def _build_game_view(self, game: Game) -> GameView:
        """Convert a Game to its external view."""
        return GameView(
            id=game.id,
            players={
                slot.value: self._build_player(player)
                for slot, player in game.players.items()
            },
            current_turn=game.current_turn.value,
            round=game.round,
            game_status=game.status.value,
            winner=game.winner.value if game.winner else None,
            last_actions={
                slot.value: action for slot, action in game.last_actions.items()
            },
            recent_battle_log=[
                self._build_log_entry(entry)
                for entry in game.recent_log(self.recent_log_size)
            ],
        )

    def _build_player(self, player: Player) -> PlayerView:
        return PlayerView(
            id=player.id.value,
            name=player.name,
            hp=player.hp,
            max_hp=player.max_hp,
            energy=player.energy,
            max_energy=player.max_energy,
            charged=player.charged,
            status=player.status,
        )

    def _build_log_entry(self, entry: RoundLogEntry) -> BattleLogEntryView:
        return BattleLogEntryView(
            round=entry.round,
            actions={slot.value: action for slot, action in entry.actions.items()},
            results=self._build_battle_result(entry.results),
            final_hp={slot.value: hp for slot, hp in entry.final_hp.items()},
        )

    def _build_battle_result(self, result: BattleResult) -> BattleResultView:
        return BattleResultView(
            player1=self._build_round_result(result.player1),
            player2=self._build_round_result(result.player2),
            messages=list(result.messages),
        )

    def _build_round_result(self, result: PlayerRoundResult) -> PlayerRoundResultView:
        return PlayerRoundResultView(
            damage=result.damage,
            energy_change=result.energy_change,
            status_change=result.status_change,
        )

    def _build_summary(self, summary: GameSummary) -> GameSummaryView:
        return GameSummaryView(
            id=summary.id,
            round=summary.round,
            game_status=summary.status.value,
            winner=summary.winner.value if summary.winner else None,
        )
