"""The 2048 board engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from game2048.board.rotation import rotate
from game2048.board.types import (
    GAME_BOARD_SIZE,
    STARTING_TILES,
    VACANT,
    BoardSpace,
    GameBoardLocation,
    MoveDirection,
    Tile,
    Vacant,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from game2048.board.spawner import TileSpawner

logger = logging.getLogger(__name__)


def _blank_cells() -> list[list[BoardSpace]]:
    return [[VACANT] * GAME_BOARD_SIZE for _ in range(GAME_BOARD_SIZE)]


@dataclass(eq=True)
class GameBoard:
    """The grid of tiles making up the game, plus the score.

    The `(0, 0)` origin is the top-left corner and coordinates grow toward the
    bottom-right. Locations are `(column, row)`; `cells` is indexed
    `cells[row][column]`.

    Equality compares the grid and the score only; the spawner is a
    capability, not state.
    """

    cells: list[list[BoardSpace]] = field(default_factory=_blank_cells)
    score: int = 0
    spawner: TileSpawner | None = field(default=None, compare=False, repr=False)

    @classmethod
    def empty(cls, spawner: TileSpawner | None = None) -> GameBoard:
        """Create a blank board with a score of 0."""
        return cls(spawner=spawner)

    @classmethod
    def new(cls, spawner: TileSpawner | None = None) -> GameBoard:
        """Create a board prefilled with `STARTING_TILES` random tiles."""
        board = cls.empty(spawner)
        for _ in range(STARTING_TILES):
            board.add_random_tile()
        return board

    @classmethod
    def from_cells(
        cls,
        cells: Sequence[Sequence[BoardSpace]],
        score: int = 0,
        spawner: TileSpawner | None = None,
    ) -> GameBoard:
        """Create a board from an existing grid, given as rows."""
        rows = [list(row) for row in cells]
        if len(rows) != GAME_BOARD_SIZE or any(len(row) != GAME_BOARD_SIZE for row in rows):
            raise ValueError(f"Board must be {GAME_BOARD_SIZE}x{GAME_BOARD_SIZE}")
        return cls(cells=rows, score=score, spawner=spawner)

    def copy(self) -> GameBoard:
        return GameBoard(
            cells=[list(row) for row in self.cells], score=self.score, spawner=self.spawner
        )

    def get(self, pos: GameBoardLocation) -> BoardSpace:
        """Get the value of a cell on the board."""
        x, y = pos
        return self.cells[y][x]

    def set(self, pos: GameBoardLocation, val: BoardSpace) -> None:
        """Set the value of a cell on the board."""
        x, y = pos
        self.cells[y][x] = val

    def move(self, direction: MoveDirection) -> bool:
        """Slide every tile toward `direction`, merging equal neighbours.

        The grid is rotated so that the move becomes a slide to the left,
        each row is merged and compacted, and the grid is rotated back. A new
        tile is spawned only when something moved or merged.

        Returns:
            Whether any tile moved or merged.
        """
        rot = direction.value
        rotate(self.cells, rot)

        moved = False
        for row in self.cells:
            moved |= self._merge_row(row)
            moved |= self._compact_row(row)

        rotate(self.cells, (4 - rot) % 4)

        if moved:
            self.add_random_tile()
        logger.debug("Move %s: moved=%s score=%d", direction.name, moved, self.score)
        return moved

    def _merge_row(self, row: list[BoardSpace]) -> bool:
        merged = False
        for x, cell in enumerate(row):
            if not isinstance(cell, Tile):
                continue
            for x2 in range(x + 1, len(row)):
                other = row[x2]
                if isinstance(other, Vacant):
                    continue
                if other == cell:
                    new_val = cell.value * 2
                    self.score += new_val
                    row[x] = Tile(new_val)
                    row[x2] = VACANT
                    merged = True
                # a tile never merges past a different one
                break
        return merged

    @staticmethod
    def _compact_row(row: list[BoardSpace]) -> bool:
        shifted = False
        for x in range(len(row)):
            if not isinstance(row[x], Vacant):
                continue
            for x2 in range(x, len(row)):
                if isinstance(row[x2], Tile):
                    row[x], row[x2] = row[x2], row[x]
                    shifted = True
                    break
        return shifted

    def has_lost(self) -> bool:
        return not self.can_move()

    def can_move(self) -> bool:
        """Whether any direction would change the board. Never mutates it."""
        for turns in range(4):
            cells = [list(row) for row in self.cells]
            rotate(cells, turns)
            for row in cells:
                for left, right in zip(row, row[1:], strict=False):
                    if isinstance(left, Vacant) or isinstance(right, Vacant) or left == right:
                        return True
        return False

    def empty_locations(self) -> list[GameBoardLocation]:
        """All vacant locations, in row-major order."""
        return [
            (x, y)
            for y, row in enumerate(self.cells)
            for x, cell in enumerate(row)
            if isinstance(cell, Vacant)
        ]

    def highest_tile(self) -> int:
        values = [cell.value for row in self.cells for cell in row if isinstance(cell, Tile)]
        return max(values, default=0)

    def add_random_tile(self) -> GameBoardLocation | None:
        """Place a random tile, using the configured default spawner if none was given."""
        if self.spawner is None:
            from game2048.board.spawner import default_spawner

            self.spawner = default_spawner()
        return self.spawner.spawn(self)
