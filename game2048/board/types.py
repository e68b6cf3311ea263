"""Cell and direction types shared by the board engine and its front ends."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

GAME_BOARD_SIZE = 4
STARTING_TILES = 2

# (column, row), origin in the top-left corner
GameBoardLocation: TypeAlias = tuple[int, int]


@dataclass(frozen=True, slots=True)
class Vacant:
    """An empty space on the board."""

    def __str__(self) -> str:
        return ""


@dataclass(frozen=True, slots=True)
class Tile:
    """A tile with a numeric value."""

    value: int

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValueError(f"Tile value must be positive, got {self.value}")

    def __str__(self) -> str:
        return str(self.value)


BoardSpace: TypeAlias = Vacant | Tile

VACANT = Vacant()


class MoveDirection(Enum):
    """Direction of a move.

    The value is the number of quarter turns that reduce the direction to a
    slide to the left.
    """

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3
