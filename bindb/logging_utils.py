"""Logging helpers."""

import logging


def setup_logging(level: int = logging.INFO, *, force: bool = False) -> None:
    """Configure the root logger for scripts that use bindb.

    The library itself only creates module loggers and never configures
    handlers on import.
    """
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=force,
    )


__all__ = ["setup_logging"]
