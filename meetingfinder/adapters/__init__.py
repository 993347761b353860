"""
Adapters layer - External event sources.
"""

from .event_file_client import EventFileClient

__all__ = ["EventFileClient"]
