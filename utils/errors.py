from __future__ import annotations

from typing import Optional


class ValidationError(ValueError):
    pass


class NotSetError(LookupError):
    pass


class AdapterError(RuntimeError):
    pass


class DatabaseConnectionError(AdapterError):
    pass


class QueryExecutionError(AdapterError):
    def __init__(self, message: str, sql: Optional[str] = None):
        self.sql = sql
        if sql is not None:
            message = f"{message}\nqueryString: {sql}"
        super().__init__(message)


class FieldNotAllowedError(ValidationError, AttributeError):
    pass


class FieldNotSetError(NotSetError, AttributeError):
    pass
