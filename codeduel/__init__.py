"""
Code Duel - Turn-based two-player duel resolver.

Two players pick an action each round (attack, defend or charge); both
actions are resolved simultaneously by the engine. The package provides:
- Game and player state
- Deterministic round resolution
- An in-memory game store
- A REST API for clients
"""

__version__ = "0.1.0"
