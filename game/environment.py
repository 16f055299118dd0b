# project-root/game/environment.py

import logging
import random
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .actions import ACTION_MAP
from .state import DEFAULT_INITIAL_LENGTH, GameState
from .stats import GameStats

logger = logging.getLogger(__name__)

# Observation grid cell values
EMPTY = 0
BODY = 1
HEAD = 2
FOOD = 3


@dataclass(frozen=True)
class TickResult:
    """Outcome of a single call to advance()."""
    moved: bool
    ate_food: bool = False
    collision_type: Optional[str] = None


def advance(state: GameState, rng=None) -> TickResult:
    """
    Advances `state` by exactly one tick.

    The pending direction becomes this tick's direction. Running into a wall
    or into the body ends the game and leaves the body untouched; the cell
    the tail vacates this tick is not an obstacle unless the snake grows.

    Args:
        state: The state to mutate.
        rng: Randomness source used for food placement; defaults to state.rng.

    Returns:
        A TickResult describing what happened.
    """
    if state.game_over:
        return TickResult(moved=False, collision_type=state.collision_type)

    direction = state.pending_direction
    new_head = state.next_head(direction)

    # Check for collision with walls
    if not state.in_bounds(new_head):
        state.game_over = True
        state.collision_type = "wall"
        return TickResult(moved=False, collision_type="wall")

    # Check for collision with self; the tail moves away unless food is eaten
    eats_food = new_head == state.food
    body_to_check = state.snake if eats_food else state.snake[:-1]
    if new_head in body_to_check:
        state.game_over = True
        state.collision_type = "self"
        return TickResult(moved=False, collision_type="self")

    state.snake.insert(0, new_head)
    if eats_food:
        state.score += 1
        state.food_eaten_count += 1
        state.food = state.place_food(rng)
    else:
        state.snake.pop()

    state.direction = direction
    state.steps += 1
    return TickResult(moved=True, ate_food=eats_food)


class SnakeEnvironment:
    """Owns one GameState and drives it tick by tick."""

    def __init__(self, width=20, height=20, rng=None, seed=None,
                 initial_length=DEFAULT_INITIAL_LENGTH, tick_interval=0.1,
                 min_tick_interval=0.05, speedup_per_food=0.002, stats_dir=None):
        """
        Initializes the game environment.

        Args:
            width: Field width in cells.
            height: Field height in cells.
            rng: Randomness source with a `choice` method. Takes precedence over `seed`.
            seed: Seed for a private random.Random when `rng` is not given.
            initial_length: Starting snake length.
            tick_interval: Seconds per tick at score zero.
            min_tick_interval: Floor the tick interval never drops below.
            speedup_per_food: Seconds removed from the interval per point scored.
            stats_dir: Directory for the statistics file written when a game ends.
                       No file is written when None.

        Raises:
            InvalidFieldSize: If the field cannot hold the starting snake.
        """
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random(seed)
        self.initial_length = initial_length
        self.base_tick_interval = float(tick_interval)
        self.min_tick_interval = float(min_tick_interval)
        self.speedup_per_food = float(speedup_per_food)
        self.stats_dir = stats_dir

        self.state = GameState(width, height, rng=self.rng, initial_length=initial_length)
        self.stats = GameStats()
        self.stats_path = None
        self._stats_saved = False
        logger.info("New %dx%d game, snake at %s, food at %s",
                    width, height, self.state.snake, self.state.food)

    @property
    def tick_interval(self) -> float:
        """Seconds between ticks; shrinks as the score grows."""
        interval = self.base_tick_interval - self.state.score * self.speedup_per_food
        return max(self.min_tick_interval, interval)

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    def set_direction(self, direction) -> bool:
        """Queues a direction change on the state and counts it as a turn if accepted."""
        accepted = self.state.set_direction(direction)
        if accepted:
            self.stats.record_turn(direction)
        return accepted

    def reset(self):
        """Resets the game environment to the initial state."""
        self._save_stats()
        self.state = GameState(self.width, self.height, rng=self.rng, initial_length=self.initial_length)
        self.stats = GameStats()
        self.stats_path = None
        self._stats_saved = False
        logger.info("Game reset, food at %s", self.state.food)
        return self.state.to_dict()

    def step(self):
        """
        Advances the game by one tick.

        Returns:
            A tuple: (state_dict, done, info)
            - state_dict: The state after the tick.
            - done: True once the game is over.
            - info: Dictionary with 'message', 'ate_food' and 'collision_type'.
        """
        if self.state.game_over:
            return self.state.to_dict(), True, {
                "message": "Game over", "ate_food": False,
                "collision_type": self.state.collision_type,
            }

        result = advance(self.state, self.rng)
        self.stats.update()
        if result.ate_food:
            self.stats.record_food()

        if result.collision_type is not None:
            logger.info("Game over (%s collision) after %d steps, score %d, heading %s",
                        result.collision_type, self.state.steps, self.state.score,
                        ACTION_MAP[self.state.pending_direction])
            self._save_stats()
            message = f"{result.collision_type.capitalize()} collision"
        elif result.ate_food:
            message = "Food eaten"
        else:
            message = "Step successful"

        info = {
            "message": message,
            "ate_food": result.ate_food,
            "collision_type": result.collision_type,
        }
        return self.state.to_dict(), self.state.game_over, info

    def _save_stats(self):
        """Writes the statistics file once per game, if a stats directory is set."""
        if self._stats_saved or self.stats_dir is None:
            return
        self._stats_saved = True
        try:
            self.stats_path = self.stats.save_to_file(self.state.score, self.stats_dir)
            logger.info("Game statistics saved to %s", self.stats_path)
        except OSError as e:
            logger.warning("Could not save game statistics to %s: %s", self.stats_dir, e)

    def get_state(self):
        """Returns the current game state dictionary."""
        return self.state.to_dict()

    def get_observation(self):
        """
        Builds a (height, width) integer grid of the field for rendering.
        0 = empty, 1 = body, 2 = head, 3 = food.
        """
        observation = np.zeros((self.state.height, self.state.width), dtype=int)
        for x, y in self.state.snake:
            observation[y, x] = BODY
        head_x, head_y = self.state.head
        observation[head_y, head_x] = HEAD
        if self.state.food is not None:
            food_x, food_y = self.state.food
            observation[food_y, food_x] = FOOD
        return observation
