"""Environment variable helper functions"""

import os
from typing import Optional


def get_env_bool(key: str, default: bool) -> bool:
    """Get boolean from environment variable

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        bool: Parsed boolean value
    """
    val = os.getenv(key)
    if val is None:
        return default
    return val.lower() in ("true", "1", "t", "yes")


def get_env_int(key: str, default: int) -> int:
    """Get integer from environment variable

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        int: Parsed integer value
    """
    try:
        return int(os.getenv(key, default))
    except (TypeError, ValueError):
        return default


def get_env_str(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get a string from an environment variable, treating empty values as unset"""
    val = os.getenv(key)
    if not val:
        return default
    return val
