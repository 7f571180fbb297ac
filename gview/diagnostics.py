"""Logging setup.

The terminal belongs to the UI, so records only go to a file, and only when
one was asked for with ``--log-file``, ``$GVIEW_LOG_FILE`` or the config.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(log_file: str | None) -> None:
    if not log_file:
        # Keeps warnings off stderr while the screen is in raw mode.
        logging.getLogger("gview").addHandler(logging.NullHandler())
        return
    logging.basicConfig(filename=log_file, level=logging.DEBUG, format=LOG_FORMAT)
