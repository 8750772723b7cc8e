"""Terminal Battleship against a computer opponent: board rules and game loop."""

__version__ = "0.1.0"
__all__ = ["board", "game"]