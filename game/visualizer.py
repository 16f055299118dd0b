# project-root/game/visualizer.py

# matplotlib draws the field; numpy grids come from SnakeEnvironment.get_observation
import matplotlib.pyplot as plt
import matplotlib.patches as patches
from matplotlib.colors import ListedColormap

from .actions import ACTION_MAP

# Colors indexed by observation cell value: empty, body, head, food
CELL_COLORS = ListedColormap(["black", "green", "lime", "red"])

# Keys the game uses that matplotlib binds to toolbar actions by default
GAME_KEYS = ("up", "down", "left", "right", "r", "q", "escape")
_KEYMAP_PARAMS = (
    "keymap.back", "keymap.forward", "keymap.home", "keymap.pan",
    "keymap.zoom", "keymap.save", "keymap.quit", "keymap.grid",
    "keymap.yscale", "keymap.xscale", "keymap.fullscreen",
)


def release_game_keys():
    """Removes the game keys from matplotlib's default key bindings."""
    for param in _KEYMAP_PARAMS:
        if param in plt.rcParams:
            plt.rcParams[param] = [k for k in plt.rcParams[param] if k not in GAME_KEYS]


class GameVisualizer:
    """Visualizes the Snake game state."""

    def __init__(self, width, height, cell_size=25):
        """
        Initializes the visualizer.

        Args:
            width: Field width in cells.
            height: Field height in cells.
            cell_size: Approximate size of one cell on screen, in pixels.
        """
        release_game_keys()
        self.width = width
        self.height = height
        dpi = 100
        self.fig, self.ax = plt.subplots(
            1, 1, figsize=(width * cell_size / dpi, height * cell_size / dpi + 0.5), dpi=dpi
        )
        if self.fig.canvas.manager is not None:
            self.fig.canvas.manager.set_window_title("Snake Game")
        self._image = None
        self._overlay = []
        self._setup_axes()

    def _setup_axes(self):
        self.ax.set_xlim([0, self.width])
        self.ax.set_ylim([self.height, 0])  # row 0 at the top
        self.ax.set_aspect('equal', adjustable='box')
        self.ax.set_xticks([])
        self.ax.set_yticks([])
        self.ax.set_title("Snake Game")

    def reset(self):
        """Clears the game-over overlay so a new game starts on a clean frame."""
        for artist in self._overlay:
            artist.remove()
        self._overlay = []
        self.ax.set_title("Snake Game - New Game")

    def update(self, state, observation):
        """
        Redraws the field.

        Args:
            state: The GameState to describe in the title.
            observation: (height, width) grid from SnakeEnvironment.get_observation.
        """
        if self._image is None:
            self._image = self.ax.imshow(
                observation, cmap=CELL_COLORS, vmin=0, vmax=3,
                extent=(0, self.width, self.height, 0), interpolation='nearest'
            )
        else:
            self._image.set_data(observation)

        if state.game_over and not self._overlay:
            shade = patches.Rectangle((0, 0), self.width, self.height,
                                      facecolor='red', alpha=0.5)
            self.ax.add_patch(shade)
            text = self.ax.text(self.width / 2, self.height / 2,
                                "GAME OVER\npress R to restart",
                                color='white', ha='center', va='center', fontsize=14)
            self._overlay = [shade, text]
        elif not state.game_over and self._overlay:
            self.reset()

        self.ax.set_title(
            f"Score: {state.score} - Steps: {state.steps} - {ACTION_MAP[state.direction]}"
        )
        self.fig.canvas.draw_idle()

    def show(self):
        """Blocks in the matplotlib event loop until the window is closed."""
        plt.show()

    def close(self):
        """Closes the visualization window."""
        plt.close(self.fig)
