"""Logging setup driven by application settings."""

import logging

_PACKAGE_LOGGER = "phoenix_users"
_ADAPTER_LOGGER = "phoenix_users.adapters"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(
    level: str = "INFO", log_retries: bool = True
) -> logging.Logger:
    """Apply the configured level to the package logger and return it.

    The stream handler is installed once; later calls only adjust levels.
    With ``log_retries`` off, per-attempt warnings from the API adapters are
    suppressed while their final errors still propagate to callers.
    """
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")

    logger = logging.getLogger(_PACKAGE_LOGGER)
    logger.setLevel(resolved)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    adapter_logger = logging.getLogger(_ADAPTER_LOGGER)
    adapter_logger.setLevel(logging.NOTSET if log_retries else logging.ERROR)
    return logger
