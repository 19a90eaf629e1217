"""
Resolver - Applies a pair of simultaneous actions to a game.

The resolver is the single point of player mutation.
All rule logic lives in resolve_round().

Resolution order:
1. Stage each player's action against the pre-round snapshot
2. Halve staged damage on players who defended
3. Commit HP, energy and charge for both players together
4. Append the round log entry
5. Check for the end of the game

Nothing on the Game is written until step 3, so a failure while staging
leaves the game untouched.

Callers must check that the game is active and must serialize calls per
game; the resolver does neither.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from .state import Game, GameStatus, Player, PlayerSlot, RoundLogEntry, Winner
from .action import ActionType, BattleResult, PlayerRoundResult

LOGGER = logging.getLogger(__name__)

NORMAL_DAMAGE = 15
CHARGED_DAMAGE = 25
ATTACK_COST = 1
CHARGE_COST = 2
DEFEND_GAIN = 1

STATUS_CHARGED_ATTACK = "Charged attack!"
STATUS_NORMAL_ATTACK = "Normal attack!"
STATUS_NO_ENERGY = "Not enough energy!"
STATUS_DEFENDING = "Defending!"
STATUS_CHARGED_UP = "Charged up for next attack!"
STATUS_NO_ENERGY_TO_CHARGE = "Not enough energy to charge!"
STATUS_INVALID = "Invalid action!"


@dataclass
class _Staged:
    """Working record for one player while a round is being resolved."""
    charged: bool
    damage: int = 0
    energy_change: int = 0
    status_change: str | None = None
    defending: bool = False

    def to_result(self) -> PlayerRoundResult:
        # The defending marker is dropped here; it never outlives the round.
        return PlayerRoundResult(
            damage=self.damage,
            energy_change=self.energy_change,
            status_change=self.status_change,
        )


def _action_name(action: ActionType | str | None) -> str | None:
    if isinstance(action, ActionType):
        return action.value
    return action


def _coerce_action(action: ActionType | str | None) -> ActionType | None:
    if isinstance(action, ActionType):
        return action
    if ActionType.is_valid(action):
        return ActionType(action)
    return None


def _execute_action(
    actor: Player,
    action: ActionType | str | None,
    own: _Staged,
    target: _Staged,
) -> None:
    """
    Stage one player's action.

    Reads only the actor's pre-round values and writes only to the staged
    records, never to the Player.
    """
    kind = _coerce_action(action)

    if kind is ActionType.ATTACK:
        if actor.energy >= ATTACK_COST:
            own.energy_change = -ATTACK_COST
            target.damage = CHARGED_DAMAGE if actor.charged else NORMAL_DAMAGE
            own.status_change = (
                STATUS_CHARGED_ATTACK if actor.charged else STATUS_NORMAL_ATTACK
            )
            # The bonus is already in the damage; the charge is spent.
            own.charged = False
        else:
            own.status_change = STATUS_NO_ENERGY

    elif kind is ActionType.DEFEND:
        own.energy_change = DEFEND_GAIN
        own.status_change = STATUS_DEFENDING
        own.defending = True

    elif kind is ActionType.CHARGE:
        if actor.energy >= CHARGE_COST:
            own.charged = True
            own.energy_change = -CHARGE_COST
            own.status_change = STATUS_CHARGED_UP
        else:
            own.status_change = STATUS_NO_ENERGY_TO_CHARGE

    else:
        own.status_change = STATUS_INVALID


def resolve_round(
    game: Game,
    action1: ActionType | str | None,
    action2: ActionType | str | None,
) -> BattleResult:
    """
    Resolve one round of simultaneous actions and update the game in place.

    Args:
        game: An active game
        action1: Player 1's action
        action2: Player 2's action

    Returns:
        BattleResult for the round (also recorded in the game's log)
    """
    actions = {PlayerSlot.PLAYER1: action1, PlayerSlot.PLAYER2: action2}
    staged = {
        slot: _Staged(charged=player.charged)
        for slot, player in game.players.items()
    }

    for slot, action in actions.items():
        _execute_action(
            game.players[slot], action, staged[slot], staged[slot.opponent]
        )

    for record in staged.values():
        if record.defending and record.damage > 0:
            record.damage = record.damage // 2

    new_hp = {}
    new_energy = {}
    for slot, player in game.players.items():
        record = staged[slot]
        new_hp[slot] = max(0, player.hp - record.damage)
        new_energy[slot] = min(
            player.max_energy, max(0, player.energy + record.energy_change)
        )

    winner = decide_winner(new_hp[PlayerSlot.PLAYER1], new_hp[PlayerSlot.PLAYER2])
    messages = _narrate(game, staged)
    if winner is not None:
        messages.append(_outcome_message(game, winner))

    result = BattleResult(
        player1=staged[PlayerSlot.PLAYER1].to_result(),
        player2=staged[PlayerSlot.PLAYER2].to_result(),
        messages=tuple(messages),
    )
    entry = RoundLogEntry(
        round=game.round,
        actions={slot: _action_name(action) for slot, action in actions.items()},
        results=result,
        final_hp=dict(new_hp),
    )

    # Commit
    game.last_actions = dict(entry.actions)
    for slot, player in game.players.items():
        player.hp = new_hp[slot]
        player.energy = new_energy[slot]
        player.charged = staged[slot].charged
    game.battle_log.append(entry)

    if winner is None:
        game.round += 1
    else:
        game.status = GameStatus.FINISHED
        game.winner = winner

    LOGGER.debug(
        "duel.round game=%s round=%s actions=%s/%s hp=%s/%s status=%s",
        game.id,
        entry.round,
        entry.actions[PlayerSlot.PLAYER1],
        entry.actions[PlayerSlot.PLAYER2],
        new_hp[PlayerSlot.PLAYER1],
        new_hp[PlayerSlot.PLAYER2],
        game.status.value,
    )
    return result


def decide_winner(player1_hp: int, player2_hp: int) -> Winner | None:
    """
    Decide the outcome from post-round HP.

    Returns None while both players are still standing.
    """
    p1_down = player1_hp <= 0
    p2_down = player2_hp <= 0

    if p1_down and p2_down:
        return Winner.TIE
    if p1_down:
        return Winner.PLAYER2
    if p2_down:
        return Winner.PLAYER1
    return None


def _narrate(game: Game, staged: dict[PlayerSlot, _Staged]) -> list[str]:
    messages = []
    for slot, player in game.players.items():
        record = staged[slot]
        messages.append(f"{player.name}: {record.status_change}")
    for slot, player in game.players.items():
        damage = staged[slot].damage
        if damage > 0:
            messages.append(f"{player.name} takes {damage} damage.")
    return messages


def _outcome_message(game: Game, winner: Winner) -> str:
    if winner is Winner.TIE:
        return "Both players are down. It's a tie!"
    return f"{game.players[PlayerSlot(winner.value)].name} wins!"
