# project-root/game/controller.py

import logging

from .actions import DOWN, LEFT, RIGHT, UP

logger = logging.getLogger(__name__)

KEY_DIRECTIONS = {
    "up": UP,
    "down": DOWN,
    "left": LEFT,
    "right": RIGHT,
}
RESTART_KEYS = ("r",)
QUIT_KEYS = ("escape", "q")


class SnakeController:
    """
    Connects a SnakeEnvironment to a GameVisualizer window.

    Key presses queue direction changes, restart a finished game or close the
    window. A canvas timer calls the environment once per tick and follows
    its tick interval as the game speeds up.
    """

    def __init__(self, env, visualizer):
        self.env = env
        self.visualizer = visualizer
        canvas = visualizer.fig.canvas
        self._key_cid = canvas.mpl_connect('key_press_event', self.on_key)
        self.timer = canvas.new_timer(interval=self._interval_ms())
        self.timer.add_callback(self.on_tick)

    def _interval_ms(self) -> int:
        return max(1, int(round(self.env.tick_interval * 1000)))

    def on_key(self, event):
        key = event.key
        if key in KEY_DIRECTIONS:
            self.env.set_direction(KEY_DIRECTIONS[key])
        elif key in RESTART_KEYS and self.env.game_over:
            logger.info("Restarting game")
            self.env.reset()
            self.timer.interval = self._interval_ms()
            self.redraw()
        elif key in QUIT_KEYS:
            self.stop()
            self.visualizer.close()

    def on_tick(self):
        if self.env.game_over:
            return
        _, done, info = self.env.step()
        if info["ate_food"]:
            self.timer.interval = self._interval_ms()
        if done:
            print(f"Game over: {info['message']}. Score: {self.env.state.score}. Press R to restart.")
        self.redraw()

    def redraw(self):
        self.visualizer.update(self.env.state, self.env.get_observation())

    def start(self):
        self.redraw()
        self.timer.start()

    def stop(self):
        self.timer.stop()

    def run(self):
        """Starts the tick timer and blocks until the window is closed."""
        self.start()
        try:
            self.visualizer.show()
        finally:
            self.stop()
