"""Logging helpers shared by scripts and the library.

Library modules log through ``logging.getLogger(__name__)`` and never attach
handlers themselves. Scripts call :func:`configure_logging` once to get
output on stderr.
"""

import logging
from collections.abc import Callable
from datetime import datetime
from functools import wraps
from typing import Any, TypeVar

logger = logging.getLogger("radiant")

F = TypeVar("F", bound=Callable[..., Any])

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach a stream handler to the package logger.

    Calling this more than once only updates the level.

    Args:
        level: Logging level name or number.

    Returns:
        The package logger.
    """
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def timed(func: F) -> F:
    """Log the wall-clock duration of each call at INFO level."""

    @wraps(func)
    def decorated(*args: Any, **kwargs: Any) -> Any:
        start = datetime.now()
        ret = func(*args, **kwargs)
        logger.info("%s - %.4f s", func.__name__, (datetime.now() - start).total_seconds())
        return ret

    return decorated  # type: ignore[return-value]
