"""
Logging helpers.

Every tapegrad module logs through ``logging.getLogger(__name__)``, so all
records live under the ``tapegrad`` namespace. The library never touches the
root logger; applications decide where records go.
"""

import logging

from ._config import get_settings

# "tapegrad", or "src.tapegrad" when imported from a source checkout
PACKAGE_LOGGER = __name__.rsplit(".infrastructure", 1)[0]


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """
    Set the level of the package logger.

    Parameters
    ----------
    level : str or int, optional
        Level to apply. Defaults to `Settings.log_level`.

    Returns
    -------
    logging.Logger
        The ``tapegrad`` logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level if level is not None else get_settings().log_level)
    return logger
