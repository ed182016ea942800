from __future__ import annotations

import pytest

from snaketerra.snake import Snake
from snaketerra.utils import Direction, Point


def _snake() -> Snake:
    snake = Snake()
    snake.reset(10, 15)
    return snake


def test_reset_lays_out_three_segments_heading_right() -> None:
    snake = _snake()
    assert snake.body == [Point(10, 14), Point(10, 15), Point(10, 16)]
    assert snake.direction is Direction.RIGHT
    assert snake.pending_growth is False


def test_move_then_grow_scenario() -> None:
    snake = _snake()
    snake.move()
    assert snake.body == [Point(10, 15), Point(10, 16), Point(10, 17)]

    snake.grow()
    snake.move()
    assert snake.body == [Point(10, 15), Point(10, 16), Point(10, 17), Point(10, 18)]
    assert snake.pending_growth is False


@pytest.mark.parametrize("direction", [Direction.UP, Direction.DOWN, Direction.RIGHT])
def test_move_shifts_head_by_unit_vector(direction: Direction) -> None:
    snake = _snake()
    head = snake.head
    snake.set_direction(direction)
    snake.move()
    assert snake.head == Point(head.row + direction.value[0], head.col + direction.value[1])
    assert len(snake) == 3


@pytest.mark.parametrize("direction", list(Direction))
def test_snake_prevents_reverse_turn(direction: Direction) -> None:
    snake = _snake()
    snake.direction = direction
    snake.set_direction(direction.opposite)
    assert snake.direction is direction


def test_grow_is_a_flag_not_a_counter() -> None:
    snake = _snake()
    snake.grow()
    snake.grow()
    snake.grow()
    snake.move()
    assert len(snake) == 4
    snake.move()
    assert len(snake) == 4


def test_body_stays_connected_after_turns() -> None:
    snake = _snake()
    for direction in (Direction.UP, Direction.LEFT, Direction.LEFT, Direction.DOWN):
        snake.set_direction(direction)
        snake.grow()
        snake.move()
    for a, b in zip(snake.body, snake.body[1:]):
        assert abs(a.row - b.row) + abs(a.col - b.col) == 1


def test_occupies() -> None:
    snake = _snake()
    assert snake.occupies(Point(10, 15))
    assert not snake.occupies(Point(11, 15))


def test_self_collision_detected() -> None:
    snake = _snake()
    snake.body = [Point(1, 1), Point(1, 2), Point(1, 3), Point(2, 3), Point(2, 2)]
    snake.direction = Direction.LEFT
    snake.set_direction(Direction.UP)
    snake.move()
    assert snake.head == Point(1, 2)
    assert snake.collides_with_self()


def test_moving_into_vacated_tail_is_not_a_collision() -> None:
    snake = _snake()
    snake.body = [Point(1, 1), Point(1, 2), Point(2, 2), Point(2, 1)]
    snake.direction = Direction.LEFT
    snake.set_direction(Direction.UP)
    snake.move()
    assert snake.head == Point(1, 1)
    assert not snake.collides_with_self()


def test_moving_into_kept_tail_while_growing_collides() -> None:
    snake = _snake()
    snake.body = [Point(1, 1), Point(1, 2), Point(2, 2), Point(2, 1)]
    snake.direction = Direction.LEFT
    snake.set_direction(Direction.UP)
    snake.grow()
    snake.move()
    assert snake.collides_with_self()


def test_queued_turn_is_checked_against_current_heading() -> None:
    snake = _snake()
    snake.queue_direction(Direction.UP)
    snake.queue_direction(Direction.LEFT)
    assert snake.pending_direction is Direction.UP
    snake.apply_pending_direction()
    snake.move()
    assert snake.head == Point(9, 16)
    assert not snake.collides_with_self()


def test_reset_clears_queued_turn() -> None:
    snake = _snake()
    snake.queue_direction(Direction.DOWN)
    snake.reset(10, 15)
    assert snake.pending_direction is None
