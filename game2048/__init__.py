"""game2048.

A 2048 board engine with a terminal front end and a stateless chat bot.
"""

from __future__ import annotations

from .board import BoardSpace, GameBoard, MoveDirection, Tile, Vacant
from .bot import InteractionHandler, decode_board, render

__all__ = [
    "BoardSpace",
    "GameBoard",
    "InteractionHandler",
    "MoveDirection",
    "Tile",
    "Vacant",
    "decode_board",
    "render",
]

try:
    from .version import __version__
except ImportError:
    __version__ = "unknown"
