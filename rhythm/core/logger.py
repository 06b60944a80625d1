"""
Logging setup.

Every module obtains its logger through setup_logger(__name__); the shared
`logger` is used by code that does not need its own channel.
"""

import logging
import sys

from rhythm.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(name: str) -> logging.Logger:
    """Create (or fetch) a configured logger for the given module name."""
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(handler)
        log.propagate = False
    level = logging.DEBUG if get_settings().DEBUG else logging.INFO
    log.setLevel(level)
    return log


logger = setup_logger("rhythm")
