# project-root/game/config.py

import logging
import os

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join("configs", "default.yaml")

DEFAULT_CONFIG = {
    'width': 20,
    'height': 20,
    'initial_length': 3,
    'tick_interval': 0.1,       # seconds per tick at score zero
    'min_tick_interval': 0.05,
    'speedup_per_food': 0.002,
    'cell_size': 25,            # pixels, used by the visualizer only
    'results_dir': "results",
    'save_stats': True,
    'seed': None,
}

# Keys converted with int() / float(); the rest are taken as given
_INT_KEYS = ('width', 'height', 'initial_length', 'cell_size')
_FLOAT_KEYS = ('tick_interval', 'min_tick_interval', 'speedup_per_food')


def load_config(config_path: str = None) -> dict:
    """
    Loads the game configuration, merging a YAML file over DEFAULT_CONFIG.

    Args:
        config_path: Path to a YAML mapping. Defaults only when None.

    Returns:
        The merged configuration dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the top level is not a mapping or a value has the wrong type.
    """
    config = dict(DEFAULT_CONFIG)
    if config_path is None:
        return config

    try:
        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found at {config_path}")
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Error loading configuration from {config_path}: {e}")

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Configuration in {config_path} must be a mapping, got {type(loaded).__name__}")

    for key, value in loaded.items():
        if key not in DEFAULT_CONFIG:
            logger.warning("Ignoring unknown configuration key '%s' in %s", key, config_path)
            continue
        config[key] = value

    logger.info("Configuration loaded successfully from %s", config_path)
    return _coerce(config)


def _coerce(config: dict) -> dict:
    try:
        for key in _INT_KEYS:
            config[key] = int(config[key])
        for key in _FLOAT_KEYS:
            config[key] = float(config[key])
        if config['seed'] is not None:
            config['seed'] = int(config['seed'])
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid configuration value: {e}")
    config['save_stats'] = bool(config['save_stats'])
    config['results_dir'] = str(config['results_dir'])
    return config
