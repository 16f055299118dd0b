# project-root/game/actions.py

# Discrete directions the snake can face
UP = 0
DOWN = 1
LEFT = 2
RIGHT = 3

DIRECTIONS = (UP, DOWN, LEFT, RIGHT)

ACTION_MAP = {
    UP: "UP",
    DOWN: "DOWN",
    LEFT: "LEFT",
    RIGHT: "RIGHT"
}

ACTION_MAP_INV = {
    "UP": UP,
    "DOWN": DOWN,
    "LEFT": LEFT,
    "RIGHT": RIGHT
}

# Coordinate changes for each direction (dx, dy); y grows downward
ACTION_DELTAS = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0)
}

OPPOSITES = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT
}


def is_reverse(current, new) -> bool:
    """True when `new` points exactly back along `current`."""
    return OPPOSITES.get(current) == new
