# project-root/game/state.py

import logging
import random

from .actions import ACTION_DELTAS, ACTION_MAP, ACTION_MAP_INV, RIGHT, is_reverse

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_LENGTH = 3


class InvalidFieldSize(ValueError):
    """Raised when the field cannot hold the starting snake plus one food cell."""

    def __init__(self, width, height, initial_length):
        self.width = width
        self.height = height
        self.initial_length = initial_length
        super().__init__(
            f"A {width}x{height} field cannot hold a snake of length {initial_length} "
            f"with room left for food"
        )


class GameState:
    """
    Represents the state of the Snake game.

    Positions are (x, y) tuples with x growing to the right and y growing
    downward. The snake is stored head-first. Only `advance` in
    environment.py mutates a running state; renderers read attributes.
    """

    def __init__(self, width=20, height=20, rng=None, initial_length=DEFAULT_INITIAL_LENGTH):
        """
        Initializes the game state.

        Args:
            width: Number of columns in the field.
            height: Number of rows in the field.
            rng: Randomness source with a `choice` method (e.g. random.Random).
                 A fresh unseeded random.Random is used when omitted.
            initial_length: Length of the snake at game start.

        Raises:
            InvalidFieldSize: If the snake does not fit centrally or no cell is left for food.
        """
        width = int(width)
        height = int(height)
        initial_length = int(initial_length)
        if (initial_length < 1 or height < 1 or width < 1
                or width // 2 < initial_length - 1
                or width * height <= initial_length):
            raise InvalidFieldSize(width, height, initial_length)

        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()

        # Snake starts at the center, moving right, body trailing to the left
        head_x, head_y = width // 2, height // 2
        self.snake = [(head_x - i, head_y) for i in range(initial_length)]
        self.direction = RIGHT
        self.pending_direction = RIGHT
        self.food = self.place_food()
        self.score = 0
        self.steps = 0
        self.food_eaten_count = 0
        self.game_over = False
        self.collision_type = None  # 'wall' or 'self' once the game is over

    @property
    def head(self):
        return self.snake[0]

    @property
    def tail(self):
        return self.snake[-1]

    def in_bounds(self, position) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def occupied_cells(self) -> set:
        return set(self.snake)

    def free_cells(self) -> list:
        """All cells not covered by the snake, in row-major order."""
        occupied = self.occupied_cells()
        return [(x, y)
                for y in range(self.height)
                for x in range(self.width)
                if (x, y) not in occupied]

    def place_food(self, rng=None):
        """Picks a random cell not occupied by the snake, or None if the field is full."""
        free = self.free_cells()
        if not free:
            return None
        if rng is None:
            rng = self.rng
        return rng.choice(free)

    def next_head(self, direction=None):
        """Head position one step along `direction` (pending direction by default)."""
        if direction is None:
            direction = self.pending_direction
        dx, dy = ACTION_DELTAS[direction]
        head_x, head_y = self.head
        return (head_x + dx, head_y + dy)

    def set_direction(self, direction) -> bool:
        """
        Queues a direction change for the next tick.

        The last accepted call before a tick wins. A change to the exact
        reverse of the committed direction, or an unknown value, is ignored.

        Returns:
            True if the change was accepted.
        """
        if direction not in ACTION_DELTAS:
            logger.debug("Ignoring unknown direction %r", direction)
            return False
        if is_reverse(self.direction, direction):
            logger.debug("Ignoring reversal from %s to %s",
                         ACTION_MAP[self.direction], ACTION_MAP[direction])
            return False
        self.pending_direction = direction
        return True

    def to_dict(self):
        """Converts the current state to a dictionary."""
        return {
            'width': self.width,
            'height': self.height,
            'snake': list(self.snake),
            'food': self.food,
            'direction': ACTION_MAP[self.direction],
            'pending_direction': ACTION_MAP[self.pending_direction],
            'score': self.score,
            'steps': self.steps,
            'game_over': self.game_over,
            'collision_type': self.collision_type,
            'food_eaten_count': self.food_eaten_count,
        }

    @classmethod
    def from_dict(cls, state_dict, rng=None):
        """
        Creates a GameState object from a dictionary.

        Only 'width', 'height', 'snake' and 'direction' are required; the rest
        default to a fresh game. 'food' may be given explicitly (including None).
        """
        snake = [tuple(p) for p in state_dict['snake']]
        state = cls.__new__(cls)
        state.width = int(state_dict['width'])
        state.height = int(state_dict['height'])
        state.rng = rng if rng is not None else random.Random()
        state.snake = snake
        state.direction = ACTION_MAP_INV[state_dict['direction']]
        state.pending_direction = ACTION_MAP_INV[state_dict.get('pending_direction', state_dict['direction'])]
        if 'food' in state_dict:
            food = state_dict['food']
            state.food = tuple(food) if food is not None else None
        else:
            state.food = state.place_food()
        state.score = state_dict.get('score', 0)
        state.steps = state_dict.get('steps', 0)
        state.food_eaten_count = state_dict.get('food_eaten_count', state.score)
        state.game_over = state_dict.get('game_over', False)
        state.collision_type = state_dict.get('collision_type')
        return state

    def __repr__(self):
        return (
            f"<GameState {self.width}x{self.height} head={self.head} length={len(self.snake)} "
            f"food={self.food} score={self.score} game_over={self.game_over}>"
        )
