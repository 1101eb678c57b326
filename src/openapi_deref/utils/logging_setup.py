"""Logging configuration for the openapi-deref command line."""

import logging
import sys

_LOGGING_CONFIGURED = False


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once.

    Later calls only adjust the level, so repeated CLI invocations in
    the same process do not stack handlers.

    :param level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    :type level: str
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        logging.getLogger().setLevel(getattr(logging, level.upper()))
        logging.getLogger(__name__).debug(
            "Logging already configured, updated level only"
        )
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=[handler],
        force=True,
    )
    _LOGGING_CONFIGURED = True
