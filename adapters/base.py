from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from utils.errors import AdapterError

__all__ = ["AdapterError", "DatabaseAdapter"]


class DatabaseAdapter(ABC):
    engine: str = "unknown"

    @abstractmethod
    def connect(self) -> Any:
        raise NotImplementedError

    @abstractmethod
    def disconnect(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def query(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        raise NotImplementedError

    @abstractmethod
    def fetch(self) -> Optional[Dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    def select(
        self,
        table: str,
        conditions: Optional[str] = None,
        fields: Union[str, Sequence[str], None] = None,
        order: Optional[str] = None,
        limit: Union[int, str, None] = None,
        offset: Union[int, str, None] = None,
    ) -> int:
        raise NotImplementedError

    @abstractmethod
    def insert(self, table: str, data: Mapping[str, Any]) -> int:
        raise NotImplementedError

    @abstractmethod
    def update(self, table: str, data: Mapping[str, Any], conditions: str) -> int:
        raise NotImplementedError

    @abstractmethod
    def delete(self, table: str, conditions: str) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_insert_id(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def count_rows(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_affected_rows(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def free_result(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def has_execution_status(self) -> bool:
        raise NotImplementedError

    def __enter__(self) -> "DatabaseAdapter":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.disconnect()
        return False
