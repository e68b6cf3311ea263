"""Fixed-width text rendering of a board."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from game2048.board import GameBoard

CELL_WIDTH = 9


def format_grid(board: GameBoard) -> str:
    """Render the grid as a table with column numbers on top and row numbers on the left.

    Vacant cells are blank; every cell is centred in `CELL_WIDTH` characters.
    """
    width = len(board.cells)
    lines = ["   " + " ".join(f"{col:^{CELL_WIDTH}}" for col in range(width))]
    for row, items in enumerate(board.cells):
        cells = "|".join(f"{cell!s:^{CELL_WIDTH}}" for cell in items)
        lines.append(f"{row} |{cells}|")
    return "\n".join(lines)
