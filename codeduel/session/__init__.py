"""
Session Module - In-memory game storage.

Games live for the lifetime of the process:
- Created when a client starts a match
- Mutated by the engine each round
- Never deleted, so finished games can still be inspected

There is no persistence layer.
"""

from .store import GameStore, GameSummary

__all__ = [
    "GameStore",
    "GameSummary",
]
