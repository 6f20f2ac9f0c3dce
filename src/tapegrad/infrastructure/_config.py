"""
Runtime settings for tapegrad.

Settings are read once from environment variables. A ``.env`` file in the
current working directory (or any parent) is loaded first through
python-dotenv, without overriding variables that are already set.

Recognized variables
--------------------
TAPEGRAD_DEFAULT_DTYPE
    Element type of tensors constructed without an explicit dtype.
    Must be a floating NumPy dtype name. Defaults to ``float32``.
TAPEGRAD_LOG_LEVEL
    Level applied to the ``tapegrad`` logger by `configure_logging`.
    Defaults to ``WARNING``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

import numpy as np
from dotenv import load_dotenv

ENV_DEFAULT_DTYPE = "TAPEGRAD_DEFAULT_DTYPE"
ENV_LOG_LEVEL = "TAPEGRAD_LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    """
    Immutable runtime configuration.

    Attributes
    ----------
    default_dtype : np.dtype
        Element type used when a tensor is created without a dtype.
    log_level : str
        Level name for the package logger.
    """

    default_dtype: np.dtype = np.dtype(np.float32)
    log_level: str = "WARNING"


def _parse_dtype(raw: str) -> np.dtype:
    try:
        dtype = np.dtype(raw)
    except TypeError as e:
        raise ValueError(f"{ENV_DEFAULT_DTYPE}={raw!r} is not a NumPy dtype") from e
    if not np.issubdtype(dtype, np.floating):
        raise ValueError(f"{ENV_DEFAULT_DTYPE} must be a floating dtype, got {dtype}")
    return dtype


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return the process-wide settings, loading them on first use.

    Raises
    ------
    ValueError
        If an environment variable holds an invalid value.
    """
    load_dotenv(override=False)
    return Settings(
        default_dtype=_parse_dtype(os.getenv(ENV_DEFAULT_DTYPE, "float32")),
        log_level=os.getenv(ENV_LOG_LEVEL, "WARNING").upper(),
    )


def reload_settings() -> Settings:
    """Drop the cached settings and load them again."""
    get_settings.cache_clear()
    return get_settings()
