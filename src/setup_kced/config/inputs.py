"""Action input lookup.

The runner exposes each ``with:`` input as ``INPUT_<NAME>`` where the name is
uppercased and spaces become underscores. Hyphens are kept, so
``kced-version`` arrives as ``INPUT_KCED-VERSION``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping


def input_env_name(name: str) -> str:
    """Environment variable carrying action input *name*."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def read_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    """Trimmed value of input *name*, or ``""`` when it was not supplied."""
    env = os.environ if environ is None else environ
    return env.get(input_env_name(name), "").strip()
