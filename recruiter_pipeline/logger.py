"""Logging setup for the recruiter pipeline package."""

import logging


def setup_logger(level: str = "INFO") -> logging.Logger:
    """Configure and return the package logger.

    Args:
        level: Logging level name (e.g. "INFO", "DEBUG").

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger("recruiter_pipeline")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)

    return logger
