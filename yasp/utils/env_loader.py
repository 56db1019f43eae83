"""Utility for loading project-level environment variables.

Loads a `.env` file sitting at the repository root *early* in the
application lifecycle so that ``yasp.utils.constant`` picks up overrides
such as ``YASP_MODEL_DIR`` or ``YASP_LOG_FILE``.

Usage (call as soon as possible in your CLI / entry-point):

    from yasp.utils.env_loader import load_project_env
    load_project_env()

Re-invocation is a no-op, so callers can safely call multiple times.
"""

from __future__ import annotations

import functools
import pathlib
from typing import Final

from dotenv import load_dotenv

_REPO_ROOT: Final[pathlib.Path] = pathlib.Path(__file__).resolve().parents[2]
_ENV_FILE: Final[pathlib.Path] = _REPO_ROOT / ".env"


@functools.lru_cache(maxsize=1)
def load_project_env(force: bool = False) -> bool:
    """Load the project-level `.env` file into the process environment.

    Decorated with `lru_cache` so that it runs only once per process.

    Args:
        force: If True, bypasses the cache and forces a reload of the
            environment file. Defaults to False.

    Returns:
        bool: ``True`` when a `.env` file was found and loaded.

    """
    if force:
        load_project_env.cache_clear()  # type: ignore[attr-defined]

    if not _ENV_FILE.exists():
        return False

    # `override=False` keeps variables already set by the user / shell.
    return load_dotenv(dotenv_path=_ENV_FILE, override=False)


__all__ = [
    "load_project_env",
]
