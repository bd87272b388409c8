"""
Logging utilities for SkinWatch
"""

import logging
import sys
from typing import Optional


DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# watchdog logs every raw inotify event at debug level
NOISY_LOGGERS = ('watchdog',)


def setup_logger(name: str = 'skinwatch', level: str = 'INFO',
                 format_string: Optional[str] = None) -> logging.Logger:
    """Send ``name`` records at ``level`` and above to stdout.

    Calling it again replaces the handler instead of stacking a second one,
    so the CLI can reconfigure after loading settings. Unknown level names
    fall back to INFO.
    """
    logger = logging.getLogger(name)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logger.setLevel(numeric_level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    logger.addHandler(handler)

    # Third-party chatter stays out unless skinwatch itself is debugging
    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(
            logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
        )

    return logger
