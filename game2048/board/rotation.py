from __future__ import annotations

from typing import TypeVar

T = TypeVar("T")


def rotate(cells: list[list[T]], times: int) -> None:
    """Rotate a square grid in place by a quarter turn counter-clockwise, `times` times.

    Four turns are the identity, so `times` is taken modulo 4. After
    `rotate(cells, k)`, `rotate(cells, (4 - k) % 4)` restores the original grid.
    """
    for _ in range(times % 4):
        # transpose, then reverse the row order
        cells[:] = [list(row) for row in zip(*cells, strict=True)][::-1]
