"""
Environment variable loading utility

Supports layered environment variable loading:
1. Load .env (default/base configuration)
2. Load .env.test or .env.prod based on RUN_ENV variable (overrides .env)
"""
import os
from pathlib import Path
from typing import Optional

import environ

ENV_LAYERS = {
    "test": ".env.test",
    "prod": ".env.prod",
}


def load_env(base_dir: Path, environment: Optional[str] = None) -> environ.Env:
    """
    Load environment variables with layered support

    Loading order:
    1. Load .env (base/default configuration)
    2. Load the layer file named by `environment` (or RUN_ENV), overriding .env

    Args:
        base_dir: Base directory where .env files are located
        environment: Layer name, defaults to the RUN_ENV variable

    Returns:
        environ.Env instance with loaded environment variables
    """
    env_file = base_dir / ".env"
    if env_file.exists():
        environ.Env.read_env(env_file)

    if environment is None:
        environment = os.environ.get("RUN_ENV", "")
    layer = ENV_LAYERS.get(environment.lower())
    if layer:
        layer_file = base_dir / layer
        if layer_file.exists():
            environ.Env.read_env(layer_file, overwrite=True)

    return environ.Env()
