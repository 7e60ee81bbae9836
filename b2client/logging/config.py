import logging
import os

from b2client.helpers.env import get_env_bool

from .formatters import B2ClientLogFileFormatter, B2ClientLogFormatter

# Create the logger at module level
logger = logging.getLogger("b2client")
logger.propagate = False
logger.setLevel(logging.WARNING)


def _resolve_level(level) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str) and hasattr(logging, level.upper()):
        return getattr(logging, level.upper())
    return logging.WARNING


def configure_logging(config=None):  # No type hint to avoid a circular import with b2client.config
    """Configure the b2client logger with console and optional file handlers.

    Args:
        config: Optional Config instance. If not provided, a new Config instance will be created.
    """
    if config is None:
        from b2client.config import Config

        config = Config()

    # Use env var as override if present, otherwise use config
    log_level_env = os.environ.get("B2CLIENT_LOG_LEVEL", "").upper()
    if log_level_env and hasattr(logging, log_level_env):
        log_level = getattr(logging, log_level_env)
    else:
        log_level = _resolve_level(config.log_level)

    logger.setLevel(log_level)

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(logging.DEBUG)
    stream_handler.setFormatter(B2ClientLogFormatter())
    logger.addHandler(stream_handler)

    log_to_file = get_env_bool("B2CLIENT_LOGGING_TO_FILE", False)
    if log_to_file:
        file_handler = logging.FileHandler("b2client.log", mode="w")
        file_handler.setLevel(logging.DEBUG)
        formatter = B2ClientLogFileFormatter("%(asctime)s - %(levelname)s - %(message)s")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
