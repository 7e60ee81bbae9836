"""
API client versions package.

This package contains client implementations for different API versions.
"""

from b2client.client.api.versions.v2 import V2Client

__all__ = ["V2Client"]
