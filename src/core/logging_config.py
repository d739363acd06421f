"""Logging setup. Modules only ever call logging.getLogger(__name__); this is where the output gets configured."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Does nothing if the root logger was already configured (ex. by the application embedding the engine)."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
