"""Allow-listed dynamic records."""

from entities.base import Entity

__all__ = ["Entity"]
