import sys

from loguru import logger
from stockdesk.config import get_config

class AppLogger:
    """Logger for stockdesk.

    Record sources log snapshot loads at INFO and missing snapshots at DEBUG;
    the console facade logs each list page at DEBUG and each dashboard
    refresh at INFO. Per-record data problems are never logged. The level
    comes from get_config().log_level (LOG_LEVEL in the environment or .env).
    """
    def __init__(self) -> None:
        log_level = get_config().log_level.upper()
        logger.remove()
        logger.add(
            sink=sys.stderr,
            level=log_level,
            format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
        )
        self.logger = logger

    def get_logger(self, name: str = None):
        """Return the stderr logger, bound to a module name when one is given.

        Args:
            name (str, optional): Module path, e.g. ``stockdesk.data.console``.
        Returns:
            loguru.Logger: The configured logger instance.
        """
        if name:
            return self.logger.bind(name=name)
        return self.logger

def get_logger(name: str = None):
    """Logger for a stockdesk module, reconfigured from the current AppConfig."""
    return AppLogger().get_logger(name)
