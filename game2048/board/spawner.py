"""Tile spawning.

The randomness source is a capability handed to the board rather than part
of its state, so boards stay plain comparable values and tests can swap in
`NoopTileSpawner`.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Protocol

from game2048.board.types import GameBoardLocation, Tile
from game2048.shared.exceptions import Game2048Exception

if TYPE_CHECKING:
    from game2048.board.board import GameBoard
    from game2048.settings import Settings

logger = logging.getLogger(__name__)


class TileSpawner(Protocol):
    """Places a new tile on a board."""

    def spawn(self, board: GameBoard) -> GameBoardLocation | None: ...


class RandomTileSpawner:
    """Spawns a 2 (or, with `four_probability`, a 4) on a uniformly chosen vacant space."""

    def __init__(self, rng: random.Random | None = None, four_probability: float = 0.1) -> None:
        self.rng = rng if rng is not None else random.SystemRandom()
        self.four_probability = four_probability

    def spawn(self, board: GameBoard) -> GameBoardLocation | None:
        free_spaces = board.empty_locations()
        if not free_spaces:
            return None

        try:
            tile = Tile(4) if self.rng.random() < self.four_probability else Tile(2)
            pos = self.rng.choice(free_spaces)
        except (OSError, NotImplementedError) as e:
            raise Game2048Exception("Failed to draw a random tile") from e

        board.set(pos, tile)
        logger.debug("Spawned %s at %s", tile, pos)
        return pos


class NoopTileSpawner:
    """Never spawns anything; makes moves deterministic in tests."""

    def spawn(self, board: GameBoard) -> GameBoardLocation | None:
        return None


def default_spawner(settings: Settings | None = None) -> RandomTileSpawner:
    """Build the spawner described by the settings.

    A configured seed gives a reproducible `random.Random`; otherwise tiles
    come from the operating system's entropy pool.
    """
    if settings is None:
        from game2048.settings import get_settings

        settings = get_settings()

    rng = random.Random(settings.seed) if settings.seed is not None else None  # noqa: S311
    return RandomTileSpawner(rng, four_probability=settings.four_probability)
