"""
Logging setup for the stdio server.

stdout carries the MCP protocol, so every record goes to stderr.
"""
import logging
import sys

from ..exceptions import ConfigurationError

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(level: str) -> int:
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ConfigurationError(f"Unknown log level '{level}'")
    return numeric


def configure_logging(level: str = "INFO", *, force: bool = False) -> int:
    """
    Configure root logging to stderr.

    :param level: Level name such as "DEBUG" or "INFO"
    :param force: Replace handlers configured earlier
    :return: Numeric level applied
    """
    numeric = resolve_log_level(level)
    logging.basicConfig(
        level=numeric,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stderr,
        force=force,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(numeric, logging.WARNING))
    return numeric
