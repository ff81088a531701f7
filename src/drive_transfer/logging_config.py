"""Root logging setup for the drive-transfer CLI."""

import logging
import os
import sys


def configure_logging(level: str | None = None) -> None:
    """Configure default root logging only if not already configured.

    An explicit ``level`` (from the command line) wins over LOG_LEVEL in the
    environment. basicConfig is called only when the root logger has no
    handlers; otherwise only the level is set, so handlers installed by a
    test harness are left alone.
    """
    chosen = (level or os.getenv("LOG_LEVEL") or "WARNING").upper()
    lvl = getattr(logging, chosen, logging.WARNING)
    root = logging.getLogger()

    if not root.handlers:
        logging.basicConfig(
            stream=sys.stderr,
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            level=lvl,
        )
    else:
        root.setLevel(lvl)
