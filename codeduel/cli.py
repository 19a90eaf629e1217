"""
Code Duel CLI - Command-line interface for the server and engine.

Usage:
    codeduel serve [--host H] [--port P]     Run the HTTP API
    codeduel duel <p1>:<p2> [<p1>:<p2> ...]  Resolve a scripted duel locally

Example:
    codeduel duel charge:attack attack:defend attack:attack
"""

import argparse
import sys

from .config import Settings
from .logging_config import configure_logging


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Code Duel - turn-based duel resolver",
        prog="codeduel",
    )
    parser.add_argument("--log-level", help="Logging level (default from CODEDUEL_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", help="Interface to bind")
    serve_parser.add_argument("--port", type=int, help="Port to listen on")

    # Duel command
    duel_parser = subparsers.add_parser("duel", help="Resolve a scripted duel")
    duel_parser.add_argument(
        "rounds",
        nargs="+",
        help="One <player1_action>:<player2_action> pair per round",
    )
    duel_parser.add_argument("--p1", dest="player1_name", help="Player 1 name")
    duel_parser.add_argument("--p2", dest="player2_name", help="Player 2 name")

    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    configure_logging(args.log_level or settings.log_level)

    if args.command == "serve":
        cmd_serve(args, settings)
    elif args.command == "duel":
        cmd_duel(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args, settings):
    """Run the API with uvicorn."""
    import uvicorn
    from .api.app import app

    if args.log_level:
        # Importing the app applied the environment level
        configure_logging(args.log_level)

    uvicorn.run(
        app,
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level=settings.log_level.lower(),
    )


def parse_round(text):
    """Split 'attack:defend' into its two actions."""
    parts = text.split(":")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Expected <player1_action>:<player2_action>, got {text!r}")
    return parts[0].strip().lower(), parts[1].strip().lower()


def cmd_duel(args):
    """Play scripted rounds and print each result."""
    from .api.errors import DuelError
    from .api.service import DuelService

    try:
        rounds = [parse_round(text) for text in args.rounds]
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    service = DuelService()
    game = service.create_game(args.player1_name, args.player2_name)
    print(f"Game created: {game.id}")

    for action1, action2 in rounds:
        try:
            response = service.submit_actions(game.id, action1, action2)
        except DuelError as e:
            print(f"Error: {e.message}")
            sys.exit(1)

        game = response.game
        entry = game.recent_battle_log[-1]
        print(f"\nRound {entry.round}: {action1} vs {action2}")
        for message in response.battle_result.messages:
            print(f"  {message}")
        for player in game.players.values():
            charged = " (charged)" if player.charged else ""
            print(
                f"  {player.name}: HP {player.hp}/{player.max_hp}, "
                f"energy {player.energy}/{player.max_energy}{charged}"
            )

        if game.game_status == "finished":
            break

    print(f"\nStatus: {game.game_status}")
    if game.winner:
        print(f"Winner: {game.winner}")


if __name__ == "__main__":
    main()
