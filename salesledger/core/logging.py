"""
Process-wide logging setup.

Modules log through ``logging.getLogger(__name__)``; this module only
installs the root handler once at startup.
"""

import logging
import sys

from salesledger.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Attach a single stream handler to the root logger."""
    global _configured

    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())

    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _configured = True
