from __future__ import annotations

import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


def _no_begin(conn: Any) -> None:
    return None


class Transaction:
    """Single-statement transaction: begin on enter, commit on a clean exit,
    rollback when the block raises. Not reentrant."""

    def __init__(self, connection: Any, begin: Optional[Callable[[Any], None]] = None):
        self.connection = connection
        self._begin = begin or _no_begin
        self.active = False

    def begin(self) -> None:
        if self.active:
            raise RuntimeError("Transaction already started")
        self._begin(self.connection)
        self.active = True

    def commit(self) -> None:
        if not self.active:
            return
        self.connection.commit()
        self.active = False

    def rollback(self) -> None:
        if not self.active:
            return
        self.active = False
        self.connection.rollback()

    def __enter__(self) -> "Transaction":
        self.begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            logger.warning("Rolling back transaction after %s: %s", exc_type.__name__, exc)
            self.rollback()
            return False
        try:
            self.commit()
        except BaseException as commit_exc:
            logger.warning("Commit failed, rolling back: %s", commit_exc)
            self.rollback()
            raise
        return False
