"""The player-controlled snake."""

from __future__ import annotations

from dataclasses import dataclass, field

from .utils import Direction, Point, is_opposite


@dataclass(slots=True, eq=False)
class Snake:
    """Ordered body (tail first, head last), heading and pending growth."""

    body: list[Point] = field(default_factory=list)
    direction: Direction = Direction.RIGHT
    pending_growth: bool = False
    pending_direction: Direction | None = None

    def __post_init__(self) -> None:
        if not self.body:
            self.reset(0, 0)

    def __len__(self) -> int:
        return len(self.body)

    def reset(self, origin_row: int, origin_col: int) -> None:
        """Lay out a horizontal three-segment body centered on the origin."""
        self.body = [
            Point(origin_row, origin_col - 1),
            Point(origin_row, origin_col),
            Point(origin_row, origin_col + 1),
        ]
        self.direction = Direction.RIGHT
        self.pending_growth = False
        self.pending_direction = None

    @property
    def head(self) -> Point:
        return self.body[-1]

    def set_direction(self, direction: Direction) -> None:
        """Adopt a new heading unless it would reverse onto the neck."""
        if is_opposite(direction, self.direction):
            return
        self.direction = direction

    def queue_direction(self, direction: Direction) -> None:
        """Buffer a turn for the next move; turns back onto the neck are dropped."""
        if is_opposite(direction, self.direction):
            return
        self.pending_direction = direction

    def apply_pending_direction(self) -> None:
        """Apply the buffered turn, if any."""
        if self.pending_direction is None:
            return
        self.set_direction(self.pending_direction)
        self.pending_direction = None

    def move(self) -> None:
        """Advance one cell, keeping the tail only when growth is pending."""
        self.body.append(self.head.shifted(self.direction))
        if self.pending_growth:
            self.pending_growth = False
        else:
            self.body.pop(0)

    def grow(self) -> None:
        """Grow by one segment on the next move."""
        self.pending_growth = True

    def occupies(self, point: Point) -> bool:
        return point in self.body

    def collides_with_self(self) -> bool:
        """Return whether the head overlaps any other segment."""
        head = self.head
        return any(segment == head for segment in self.body[:-1])
