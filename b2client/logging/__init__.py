from b2client.logging.config import configure_logging, logger

__all__ = ["logger", "configure_logging"]
