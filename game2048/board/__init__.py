"""Board engine: grid, moves, loss detection and tile spawning."""

from __future__ import annotations

from .board import GameBoard
from .rotation import rotate
from .spawner import NoopTileSpawner, RandomTileSpawner, TileSpawner, default_spawner
from .types import (
    GAME_BOARD_SIZE,
    STARTING_TILES,
    VACANT,
    BoardSpace,
    GameBoardLocation,
    MoveDirection,
    Tile,
    Vacant,
)

__all__ = [
    "GAME_BOARD_SIZE",
    "STARTING_TILES",
    "VACANT",
    "BoardSpace",
    "GameBoard",
    "GameBoardLocation",
    "MoveDirection",
    "NoopTileSpawner",
    "RandomTileSpawner",
    "Tile",
    "TileSpawner",
    "Vacant",
    "default_spawner",
    "rotate",
]
