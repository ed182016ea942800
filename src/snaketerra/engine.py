"""Game-state machine: snake, food, score and the per-tick transition."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
import logging
import random

from .food import Food
from .settings import Difficulty
from .snake import Snake
from .utils import DEFAULT_COLS, DEFAULT_ROWS, MIN_TICK_INTERVAL_MS, Direction, Point, in_bounds

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    """Lifecycle of a single play session."""

    NOT_STARTED = auto()
    RUNNING = auto()
    ENDED = auto()


class EndReason(str, Enum):
    """Why a session ended."""

    OUT_OF_BOUNDS = "out of bounds"
    SELF_COLLISION = "self collision"
    BOARD_FULL = "board full"
    QUIT = "quit"


class Command(Enum):
    """Discrete inputs accepted from the presentation layer."""

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    PAUSE = auto()
    QUIT = auto()


_STEERING = {
    Command.UP: Direction.UP,
    Command.DOWN: Direction.DOWN,
    Command.LEFT: Direction.LEFT,
    Command.RIGHT: Direction.RIGHT,
}


def tick_interval_ms(difficulty: Difficulty, score: int) -> int:
    """Return the delay between snake moves; shrinks as the score grows."""
    return max(MIN_TICK_INTERVAL_MS, difficulty.base_interval_ms - score * 2)


@dataclass(frozen=True, slots=True)
class GameView:
    """Read-only picture of a session for the presentation layer."""

    rows: int
    cols: int
    body: tuple[Point, ...]
    food: Point | None
    score: int
    difficulty: Difficulty
    status: GameStatus
    paused: bool
    end_reason: EndReason | None

    @property
    def length(self) -> int:
        return len(self.body)


class GameEngine:
    """Owns one board's worth of state and advances it tick by tick."""

    def __init__(
        self,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
        difficulty: Difficulty = Difficulty.NORMAL,
        rng: random.Random | None = None,
        seed: int | None = None,
    ) -> None:
        self.rows = rows
        self.cols = cols
        self.difficulty = difficulty
        self.snake = Snake()
        self.food = Food(rng=rng, seed=seed)
        self.score = 0
        self.status = GameStatus.NOT_STARTED
        self.end_reason: EndReason | None = None
        self.paused = False
        self.elapsed_ms = 0.0
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self.status == GameStatus.RUNNING

    @property
    def won(self) -> bool:
        return self.end_reason == EndReason.BOARD_FULL

    @property
    def tick_interval_ms(self) -> int:
        return tick_interval_ms(self.difficulty, self.score)

    @property
    def food_position(self) -> Point | None:
        return self.food.position

    def snapshot(self) -> GameView:
        """Return the plain data needed to draw the current frame."""
        return GameView(
            rows=self.rows,
            cols=self.cols,
            body=tuple(self.snake.body),
            food=self.food.position,
            score=self.score,
            difficulty=self.difficulty,
            status=self.status,
            paused=self.paused,
            end_reason=self.end_reason,
        )

    def play(self) -> None:
        """Start a fresh session."""
        self.score = 0
        self.ticks = 0
        self.elapsed_ms = 0.0
        self.paused = False
        self.end_reason = None
        self.snake.reset(self.rows // 2, self.cols // 2)
        self.status = GameStatus.RUNNING
        if not self.food.spawn(self.rows, self.cols, self.snake):
            self._end(EndReason.BOARD_FULL)
        logger.info("Session started on %dx%d board at %s", self.rows, self.cols, self.difficulty.label)

    def apply(self, command: Command) -> None:
        """Route one input event into the running session."""
        if not self.running:
            return
        if command in _STEERING:
            self.snake.queue_direction(_STEERING[command])
        elif command == Command.PAUSE:
            self.paused = not self.paused
        elif command == Command.QUIT:
            self._end(EndReason.QUIT)

    def update(self, dt_ms: float) -> bool:
        """Accumulate frame time and step once the tick interval has elapsed."""
        if not self.running or self.paused:
            return False
        self.elapsed_ms += dt_ms
        if self.elapsed_ms < self.tick_interval_ms:
            return False
        self.elapsed_ms = 0.0
        self.step()
        return True

    def step(self) -> None:
        """Advance the snake by one cell and resolve collisions and food."""
        if not self.running:
            return
        self.snake.apply_pending_direction()
        self.snake.move()
        self.ticks += 1
        head = self.snake.head
        if not in_bounds(head, self.rows, self.cols):
            self._end(EndReason.OUT_OF_BOUNDS)
            return
        if self.snake.collides_with_self():
            self._end(EndReason.SELF_COLLISION)
            return
        if head == self.food.position:
            self.score += 1
            self.snake.grow()
            if not self.food.spawn(self.rows, self.cols, self.snake):
                self._end(EndReason.BOARD_FULL)

    def _end(self, reason: EndReason) -> None:
        self.status = GameStatus.ENDED
        self.end_reason = reason
        self.paused = False
        logger.info("Session ended (%s) with score %d after %d ticks", reason.value, self.score, self.ticks)
