"""Logging configuration for the API process."""
import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _normalise_level(level: Optional[Union[str, int]]) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        value = level.upper()
        if value.isdigit():
            return int(value)
        resolved = logging.getLevelName(value)
        if isinstance(resolved, int):
            return resolved
    return logging.INFO


def configure_logging(level: Optional[Union[str, int]] = None) -> int:
    """
    Configure root logging to stream to the console.

    Existing root handlers are replaced so repeated app creation (tests,
    reloads) does not duplicate output.

    Returns:
        The numeric level that was applied
    """
    log_level = _normalise_level(level)

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.root.addHandler(handler)
    logging.root.setLevel(log_level)

    # httpx logs every request at INFO; the crawl session already does that
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))

    return log_level
