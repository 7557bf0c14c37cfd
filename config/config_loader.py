import json
import os
from datetime import datetime

DEFAULT_CONFIG = {
    "max_steps": 1000,
    "log_runs": True,
    "output_directory": "logs/",
    "log_file_prefix": "encoder_",
    "show_banner": True
}

# Expected types for validation
CONFIG_SCHEMA = {
    "max_steps": int,
    "log_runs": bool,
    "output_directory": str,
    "log_file_prefix": str,
    "show_banner": bool
}

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        # bool is an int subclass
        if not isinstance(config[key], expected_type) or (expected_type is int and isinstance(config[key], bool)):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")

    if config["max_steps"] <= 0:
        raise ValueError("max_steps must be a positive number of steps.")

def load_config(path="config/runtime_config.json", verbose=False):
    if path is None:
        config = DEFAULT_CONFIG.copy()
        validate_config(config)
        return config

    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    validate_config(config)

    if verbose:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config
