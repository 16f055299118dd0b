# project-root/game/stats.py

import os
import time
from datetime import datetime

from .actions import ACTION_MAP, DOWN, LEFT, RIGHT, UP


class GameStats:
    """Per-game statistics: turns taken, food eaten and time played."""

    def __init__(self, clock=time.monotonic, now=datetime.now):
        """
        Args:
            clock: Monotonic seconds source used for the play time.
            now: Wall-clock source used for the report timestamp and file name.
        """
        self._clock = clock
        self.start_time = now()
        self._started = clock()
        self.time_played = 0.0
        self.turns = {UP: 0, DOWN: 0, LEFT: 0, RIGHT: 0}
        self.food_eaten = 0

    def update(self):
        self.time_played = max(0.0, self._clock() - self._started)

    def record_turn(self, direction):
        self.turns[direction] += 1

    def record_food(self):
        self.food_eaten += 1

    @property
    def total_turns(self):
        return sum(self.turns.values())

    @property
    def filename(self):
        return f"{self.start_time.strftime('%Y%m%d_%H%M%S')}_snake_game_stats.txt"

    def report(self, final_score: int) -> str:
        """Formats the statistics as the plain-text report written by save_to_file."""
        seconds_played = int(self.time_played)
        minutes, seconds = divmod(seconds_played, 60)
        lines = [
            "Snake Game Statistics",
            "=====================",
            f"Game started at: {self.start_time.strftime('%Y-%m-%d %H:%M:%S')}",
            f"Time played: {minutes}m {seconds}s",
            f"Final score: {final_score}",
            f"Food eaten: {self.food_eaten}",
            "",
            "Movement Statistics:",
        ]
        for direction in (UP, DOWN, LEFT, RIGHT):
            lines.append(f"  {ACTION_MAP[direction].capitalize()} turns: {self.turns[direction]}")
        lines.append("")
        lines.append(f"Total turns: {self.total_turns}")
        return "\n".join(lines) + "\n"

    def save_to_file(self, final_score: int, directory: str = ".") -> str:
        """
        Writes the report to `<directory>/<YYYYmmdd_HHMMSS>_snake_game_stats.txt`.

        Returns:
            The path of the written file.

        Raises:
            OSError: If the directory cannot be created or the file cannot be written.
        """
        self.update()
        os.makedirs(directory, exist_ok=True)
        path = os.path.join(directory, self.filename)
        with open(path, 'w') as f:
            f.write(self.report(final_score))
        return path
