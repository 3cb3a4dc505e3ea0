"""Storage manager used by the rest of the application."""

from .manager import StorageManager

__all__ = ["StorageManager"]
