"""Food placement."""

from __future__ import annotations

import random

from .snake import Snake
from .utils import Point


class Food:
    """A single food cell spawned into free board space.

    ``position`` is ``None`` when the last spawn found no free cell.
    """

    def __init__(self, rng: random.Random | None = None, seed: int | None = None) -> None:
        self.rng = rng if rng is not None else random.Random(seed)
        self.position: Point | None = None

    @property
    def placed(self) -> bool:
        return self.position is not None

    def spawn(self, rows: int, cols: int, snake: Snake) -> bool:
        """Place food on a uniformly random free cell; return False if the board is full."""
        empties = [
            Point(row, col)
            for row in range(rows)
            for col in range(cols)
            if not snake.occupies(Point(row, col))
        ]
        if not empties:
            self.position = None
            return False
        self.position = self.rng.choice(empties)
        return True
