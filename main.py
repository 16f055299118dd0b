# project-root/main.py

import argparse
import logging
import os
import sys

import yaml

from game.config import DEFAULT_CONFIG_PATH, load_config
from game.environment import SnakeEnvironment
from game.state import InvalidFieldSize


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Play Snake in a matplotlib window.")
    parser.add_argument("--config", type=str, default=DEFAULT_CONFIG_PATH,
                        help="Path to a YAML configuration file.")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for food placement (overrides the config).")
    return parser.parse_args(argv)


def build_environment(config: dict, seed=None) -> SnakeEnvironment:
    """Creates the environment described by a loaded configuration."""
    stats_dir = config['results_dir'] if config['save_stats'] else None
    return SnakeEnvironment(
        width=config['width'],
        height=config['height'],
        seed=seed if seed is not None else config['seed'],
        initial_length=config['initial_length'],
        tick_interval=config['tick_interval'],
        min_tick_interval=config['min_tick_interval'],
        speedup_per_food=config['speedup_per_food'],
        stats_dir=stats_dir,
    )


def main(argv=None):
    """
    Main entry point for the game.
    Loads the configuration and runs the window until it is closed.
    """
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = load_config(args.config)
        env = build_environment(config, seed=args.seed)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"Error: configuration could not be parsed: {e}")
        sys.exit(1)
    except InvalidFieldSize as e:
        print(f"Error: field size from {args.config} is unusable: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"Error: invalid configuration: {e}")
        sys.exit(1)

    # Ensure results directory exists if statistics are saved
    if config['save_stats']:
        try:
            os.makedirs(config['results_dir'], exist_ok=True)
        except OSError as e:
            print(f"Warning: could not create results directory {config['results_dir']}: {e}")

    # Imported here so configuration errors are reported without a display backend
    from game.controller import SnakeController
    from game.visualizer import GameVisualizer

    print(f"Starting Snake on a {config['width']}x{config['height']} field using config: {args.config}")
    visualizer = GameVisualizer(config['width'], config['height'], cell_size=config['cell_size'])
    SnakeController(env, visualizer).run()
    print("Window closed, exiting.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
