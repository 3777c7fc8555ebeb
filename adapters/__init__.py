"""Database adapter layer: CRUD statements over DB-API drivers."""

from adapters.base import DatabaseAdapter
from adapters.factory import get_adapter
from adapters.settings import ConnectionSettings
from adapters.sql import SQLAdapter

__all__ = ["ConnectionSettings", "DatabaseAdapter", "SQLAdapter", "get_adapter"]
