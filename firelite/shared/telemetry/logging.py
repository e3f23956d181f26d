"""Logging setup for scripts and applications embedding the client.

The library itself only creates module loggers under "firelite"; it never
configures handlers on import.
"""

import logging
import sys

from firelite.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: int | None = None) -> None:
    """Send log records to stdout.

    Args:
        level: Root level; defaults to DEBUG when settings.debug, else INFO.
    """
    if level is None:
        level = logging.DEBUG if get_settings().debug else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stdout)
