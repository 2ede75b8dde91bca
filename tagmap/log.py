import logging
import os
import typing

LOG_LEVEL_VARIABLE = "TAGMAP_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "WARNING"


def setup_logging(level: typing.Optional[str] = None):
    """Configure standard logging for CLI or library use."""
    effective_level = (
        level or os.getenv(LOG_LEVEL_VARIABLE) or DEFAULT_LOG_LEVEL
    ).upper()

    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
