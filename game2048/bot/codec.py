"""Lossless encoding of a board as a chat message.

The bot keeps no session store, so every rendered message must carry the
whole game: each grid cell is a button whose label is the tile value (or an
invisible placeholder for vacant cells), and the score is written into the
message content after `SCORE_PREFIX`. Decoding a rendered message gives back
an equal board:

    decode_board(Message(content=..., components=...)) == board
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from game2048.board import GAME_BOARD_SIZE, VACANT, BoardSpace, GameBoard, Tile
from game2048.bot.models import (
    ActionRow,
    Button,
    ButtonStyle,
    Emoji,
    InteractionResponseData,
    Message,
)
from game2048.shared.exceptions import InteractionError

if TYPE_CHECKING:
    from game2048.board import TileSpawner

logger = logging.getLogger(__name__)

# Zero-width space: buttons need a non-empty label
VACANT_LABEL = "\u200b"
SCORE_PREFIX = "**Score:** "
GAME_OVER_HEADER = "**Game Over!**"
WINNING_TILE = 2048

CONTROLS: tuple[tuple[str, str], ...] = (
    ("left", "⬅️"),
    ("up", "⬆️"),
    ("down", "⬇️"),
    ("right", "➡️"),
)

_UNSIGNED = re.compile(r"[0-9]+")


def encode_cell(cell: BoardSpace, x: int, y: int) -> Button:
    if isinstance(cell, Tile):
        style = ButtonStyle.SUCCESS if cell.value >= WINNING_TILE else ButtonStyle.PRIMARY
        return Button(style=style, label=str(cell.value), custom_id=f"{x}-{y}")
    return Button(
        style=ButtonStyle.SECONDARY, label=VACANT_LABEL, custom_id=f"{x}-{y}", disabled=True
    )


def encode_controls(disabled: bool = False) -> ActionRow:
    return ActionRow(
        components=[
            Button(
                style=ButtonStyle.SUCCESS,
                emoji=Emoji(name=emoji),
                custom_id=action,
                disabled=disabled,
            )
            for action, emoji in CONTROLS
        ]
    )


def encode_board(board: GameBoard) -> list[ActionRow]:
    """Grid rows followed by the control row."""
    rows = [
        ActionRow(components=[encode_cell(cell, x, y) for x, cell in enumerate(row)])
        for y, row in enumerate(board.cells)
    ]
    rows.append(encode_controls(disabled=board.has_lost()))
    return rows


def encode_score(score: int, *, game_over: bool = False) -> str:
    if game_over:
        return f"{GAME_OVER_HEADER}\n> {SCORE_PREFIX}{score}"
    return f"{SCORE_PREFIX}{score}"


def render(board: GameBoard) -> InteractionResponseData:
    """Message content and components for a board."""
    return InteractionResponseData(
        content=encode_score(board.score, game_over=board.has_lost()),
        components=encode_board(board),
    )


def decode_score(content: str) -> int:
    """Read the score back from message content.

    Missing or unreadable scores decode to 0; older messages may not carry one.
    """
    start = content.find(SCORE_PREFIX)
    if start == -1:
        return 0
    rest = content[start + len(SCORE_PREFIX) :].strip()
    if not _UNSIGNED.fullmatch(rest):
        logger.debug("Unreadable score text %r, using 0", rest[:40])
        return 0
    try:
        return int(rest)
    except ValueError:
        # int() refuses very long digit strings
        logger.debug("Score text too long (%d digits), using 0", len(rest))
        return 0


def decode_cell(label: str | None) -> BoardSpace:
    if label == VACANT_LABEL:
        return VACANT
    if label is None or not _UNSIGNED.fullmatch(label):
        raise InteractionError(f"Invalid tile label {label!r:.40}")
    try:
        value = int(label)
    except ValueError as e:
        raise InteractionError(f"Tile label too long ({len(label)} digits)") from e
    if value == 0:
        raise InteractionError(f"Invalid tile label {label!r}")
    return Tile(value)


def decode_board(message: Message, spawner: TileSpawner | None = None) -> GameBoard:
    """Rebuild a board from a message rendered by `render`.

    Cells come from the button labels of the grid rows in row-major order;
    the control row and the buttons' custom ids are ignored.

    Raises:
        InteractionError: if the message does not hold a full grid
    """
    grid_rows = message.components[:GAME_BOARD_SIZE]
    if len(grid_rows) < GAME_BOARD_SIZE:
        raise InteractionError(
            f"Expected {GAME_BOARD_SIZE} grid rows, message has {len(grid_rows)}"
        )

    cells: list[list[BoardSpace]] = []
    for y, row in enumerate(grid_rows):
        if len(row.components) != GAME_BOARD_SIZE:
            raise InteractionError(
                f"Row {y} has {len(row.components)} buttons, expected {GAME_BOARD_SIZE}"
            )
        cells.append([decode_cell(button.label) for button in row.components])

    return GameBoard.from_cells(cells, score=decode_score(message.content), spawner=spawner)
