from importlib.metadata import version

from b2client.logging import logger


def get_b2client_version():
    try:
        return version("b2client")
    except Exception as e:
        logger.debug("Error reading package version: %s", e)
        return None


def get_user_agent() -> str:
    return f"b2client-python/{get_b2client_version() or 'unknown'}"
