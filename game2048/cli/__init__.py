"""game2048 CLI - play the board engine from a terminal."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer

from game2048.board import (
    VACANT,
    GameBoard,
    MoveDirection,
    NoopTileSpawner,
    Tile,
    TileSpawner,
    default_spawner,
)
from game2048.bot.codec import decode_board
from game2048.bot.models import Message
from game2048.settings import get_settings, load_settings
from game2048.shared.exceptions import Game2048Exception
from game2048.utils.console import console
from game2048.utils.pretty_errors import install_pretty_errors

from .render import format_grid

app = typer.Typer(
    name="game2048",
    help="🎲 Play 2048 in the terminal and debug chat bot messages",
    add_completion=False,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

KEYS: dict[str, MoveDirection] = {
    "w": MoveDirection.UP,
    "a": MoveDirection.LEFT,
    "s": MoveDirection.DOWN,
    "d": MoveDirection.RIGHT,
    "up": MoveDirection.UP,
    "left": MoveDirection.LEFT,
    "down": MoveDirection.DOWN,
    "right": MoveDirection.RIGHT,
}
QUIT_KEYS = {"q", "quit", "exit"}

DEMO_BOARD = [
    [Tile(2), Tile(2), Tile(2), Tile(2)],
    [Tile(2), Tile(8), Tile(1), Tile(1)],
    [VACANT, VACANT, VACANT, VACANT],
    [Tile(2), Tile(4), Tile(1), Tile(2)],
]
DEMO_MOVES = [
    MoveDirection.RIGHT,
    MoveDirection.UP,
    MoveDirection.RIGHT,
    MoveDirection.LEFT,
    MoveDirection.UP,
    MoveDirection.LEFT,
    MoveDirection.LEFT,
    MoveDirection.UP,
    MoveDirection.UP,
]


def configure_logging(verbose: bool) -> None:
    """Send log records to the configured stream; DEBUG when verbose."""
    settings = get_settings()
    stream = sys.stdout if settings.log_stream == "stdout" else sys.stderr
    level = logging.DEBUG if verbose else settings.log_level
    logging.basicConfig(stream=stream, level=level, format="[%(levelname)s] %(name)s: %(message)s")


def _spawner(seed: int | None, no_spawn: bool) -> TileSpawner:
    if no_spawn:
        return NoopTileSpawner()
    try:
        return default_spawner(load_settings(seed=seed) if seed is not None else None)
    except Game2048Exception as e:
        console.render_exception(e)
        raise typer.Exit(1) from e


def _show(board: GameBoard) -> None:
    console.grid(format_grid(board))
    console.score(board.score)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    try:
        configure_logging(verbose)
    except Game2048Exception as e:
        console.render_exception(e)
        raise typer.Exit(1) from e


@app.command()
def play(
    seed: int | None = typer.Option(None, "--seed", help="Seed for reproducible tile spawns"),
    no_spawn: bool = typer.Option(False, "--no-spawn", help="Never spawn new tiles"),
) -> None:
    """🕹️ Play an interactive game.

    Move with w/a/s/d (or up/left/down/right); q quits.
    """
    board = GameBoard.new(_spawner(seed, no_spawn))
    console.header("2048")
    console.hint("Move with w/a/s/d, quit with q")
    _show(board)

    while not board.has_lost():
        key = typer.prompt("Move", default="", show_default=False).strip().lower()
        if key in QUIT_KEYS:
            console.info(f"Quit with a score of {board.score}")
            return
        direction = KEYS.get(key)
        if direction is None:
            console.warning(f"Unknown move {key!r}")
            continue
        if not board.move(direction):
            console.info(f"Nothing moves {direction.name.lower()}")
            continue
        _show(board)

    console.success(f"Game over! Final score: {board.score}")


@app.command()
def demo(
    seed: int | None = typer.Option(None, "--seed", help="Seed for reproducible tile spawns"),
    no_spawn: bool = typer.Option(False, "--no-spawn", help="Never spawn new tiles"),
) -> None:
    """▶️ Replay a scripted sequence of moves on a sample board."""
    board = GameBoard.from_cells(DEMO_BOARD, spawner=_spawner(seed, no_spawn))
    console.grid(format_grid(board))
    for direction in DEMO_MOVES:
        board.move(direction)
        console.grid("------")
        console.grid(format_grid(board))
    console.score(board.score)


@app.command()
def inspect(
    path: Path = typer.Argument(  # noqa: B008
        ...,
        help="JSON file holding a message rendered by the chat bot",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
) -> None:
    """🔍 Decode the board and score from a saved chat message."""
    try:
        board = _load_message(path)
    except Game2048Exception as e:
        console.render_exception(e)
        raise typer.Exit(1) from e

    _show(board)
    if board.has_lost():
        console.info("Game over")


def _load_message(path: Path) -> GameBoard:
    try:
        message = Message.model_validate_json(path.read_bytes())
    except ValueError as e:
        raise Game2048Exception(f"{path.name} does not hold a chat message") from e
    return decode_board(message, spawner=NoopTileSpawner())


@app.command()
def version() -> None:
    """Show the game2048 version."""
    from game2048 import __version__

    console.info(f"game2048 {__version__}", stderr=False)


def main() -> None:
    """Entry point for the game2048 console script."""
    install_pretty_errors()
    app()


if __name__ == "__main__":
    main()
