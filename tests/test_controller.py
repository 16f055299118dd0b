"""
Tests for game/controller.py - key handling and the tick timer, without a window.
"""

from types import SimpleNamespace
from unittest.mock import Mock

from game.actions import DOWN, RIGHT, UP
from game.controller import SnakeController
from game.environment import SnakeEnvironment


class FakeTimer:
    def __init__(self, interval):
        self.interval = interval
        self.callbacks = []
        self.running = False

    def add_callback(self, func):
        self.callbacks.append(func)

    def start(self):
        self.running = True

    def stop(self):
        self.running = False

    def fire(self):
        for func in self.callbacks:
            func()


class FakeCanvas:
    def __init__(self):
        self.handlers = {}
        self.timer = None

    def mpl_connect(self, name, func):
        self.handlers[name] = func
        return len(self.handlers)

    def new_timer(self, interval):
        self.timer = FakeTimer(interval)
        return self.timer


def make_controller(env):
    visualizer = Mock()
    visualizer.fig = SimpleNamespace(canvas=FakeCanvas())
    return SnakeController(env, visualizer), visualizer


def press(controller, key):
    controller.visualizer.fig.canvas.handlers['key_press_event'](SimpleNamespace(key=key))


class TestSnakeController:
    """Tests for wiring input and ticks to the environment."""

    def test_timer_interval_follows_tick_interval(self, scripted_rng):
        """The timer starts at the environment's tick interval in milliseconds."""
        env = SnakeEnvironment(10, 10, rng=scripted_rng([(0, 0)]), tick_interval=0.12)
        controller, _ = make_controller(env)
        assert controller.timer.interval == 120

    def test_arrow_keys_queue_directions(self, scripted_rng):
        """Arrow keys become pending directions; reversals are ignored."""
        env = SnakeEnvironment(10, 10, rng=scripted_rng([(0, 0)]))
        controller, _ = make_controller(env)
        press(controller, "up")
        assert env.state.pending_direction == UP
        press(controller, "left")
        assert env.state.pending_direction == UP
        press(controller, "down")
        assert env.state.pending_direction == DOWN

    def test_tick_steps_and_redraws(self, scripted_rng):
        """Each timer tick advances the game once and redraws."""
        env = SnakeEnvironment(10, 10, rng=scripted_rng([(0, 0)]))
        controller, visualizer = make_controller(env)
        controller.start()
        assert controller.timer.running
        controller.timer.fire()
        assert env.state.head == (6, 5)
        assert visualizer.update.call_count == 2

    def test_eating_speeds_up_timer(self, scripted_rng):
        """The timer interval is refreshed after food is eaten."""
        env = SnakeEnvironment(10, 10, rng=scripted_rng([(6, 5)]),
                               tick_interval=0.1, speedup_per_food=0.01)
        controller, _ = make_controller(env)
        controller.timer.fire()
        assert env.state.score == 1
        assert controller.timer.interval == 90

    def test_restart_only_after_game_over(self, scripted_rng):
        """R restarts a finished game and is ignored while playing."""
        env = SnakeEnvironment(10, 10, rng=scripted_rng([(0, 0)]))
        controller, _ = make_controller(env)
        controller.timer.fire()
        press(controller, "r")
        assert env.state.steps == 1
        while not env.game_over:
            controller.timer.fire()
        press(controller, "r")
        assert env.game_over is False
        assert env.state.snake == [(5, 5), (4, 5), (3, 5)]
        assert env.state.direction == RIGHT

    def test_ticks_after_game_over_do_nothing(self, scripted_rng):
        """The timer keeps firing after a game over without changing the state."""
        env = SnakeEnvironment(10, 10, rng=scripted_rng([(0, 0)]))
        controller, _ = make_controller(env)
        while not env.game_over:
            controller.timer.fire()
        before = env.get_state()
        controller.timer.fire()
        assert env.get_state() == before

    def test_escape_closes_window(self, scripted_rng):
        """Escape stops the timer and closes the visualizer."""
        env = SnakeEnvironment(10, 10, rng=scripted_rng([(0, 0)]))
        controller, visualizer = make_controller(env)
        controller.start()
        press(controller, "escape")
        assert not controller.timer.running
        visualizer.close.assert_called_once()

    def test_run_blocks_on_show_and_stops_timer(self, scripted_rng):
        """run() starts the timer, shows the window and stops the timer afterwards."""
        env = SnakeEnvironment(10, 10, rng=scripted_rng([(0, 0)]))
        controller, visualizer = make_controller(env)
        controller.run()
        visualizer.show.assert_called_once()
        assert not controller.timer.running
