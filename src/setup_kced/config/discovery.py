"""Config file discovery.

Walk-up finder locates setup-kced.toml, similar to how git finds .git/.
The SETUP_KCED_CONFIG env var overrides the search; --config bypasses it.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "setup-kced.toml"
CONFIG_ENV_VAR = "SETUP_KCED_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for setup-kced.toml.

    Returns the path to the config file, or None if not found.
    Checks SETUP_KCED_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent

