"""Secret lookup for provider API keys.

``PROVIDERS`` names each key by environment variable, so keys cannot be
declared as ``Settings`` fields. They are resolved here against the same
sources ``Settings`` reads: the process environment first, then the
configured dotenv files, later files overriding earlier ones.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import dotenv_values

from urbix.core.config import Settings


def dotenv_paths() -> list[Path]:
    env_file = Settings.model_config.get('env_file')
    if not env_file:
        return []
    files = env_file if isinstance(env_file, (list, tuple)) else [env_file]
    return [Path(item) for item in files]


def load_dotenv_secrets() -> dict[str, str]:
    secrets: dict[str, str] = {}
    for path in dotenv_paths():
        if path.is_file():
            secrets.update({key: value for key, value in dotenv_values(path).items() if value})
    return secrets


def lookup_secret(name: str) -> str | None:
    """Return the non-empty value of ``name``; blank variables count as unset."""
    return os.environ.get(name) or load_dotenv_secrets().get(name)
