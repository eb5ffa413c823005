"""Common path utilities for hunkwise."""

from __future__ import annotations

import os
from pathlib import Path


def get_hunkwise_home() -> Path:
    """Return the base hunkwise directory, honoring HUNKWISE_HOME if set."""

    env_path = os.environ.get("HUNKWISE_HOME")
    return Path(env_path).expanduser() if env_path else Path.home() / ".hunkwise"


def default_config_path() -> Path:
    return get_hunkwise_home() / "config.toml"


__all__ = ["get_hunkwise_home", "default_config_path"]
