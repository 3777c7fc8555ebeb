from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional


class ResultHandle:
    """Executed statement of the most recent query.

    Result rows are buffered right after execution so ``row_count`` is the
    number of selected rows on every driver (sqlite3 reports -1 for SELECT).
    For statements without a result set it is the driver's affected-row count.
    """

    def __init__(self, cursor: Any):
        self.cursor = cursor
        self.columns: List[str] = []
        self.row_count = 0
        self.last_insert_id: Optional[Any] = None
        self.closed = False
        self._rows: List[Any] = []
        self._position = 0

    def execute(self, sql: str, params: Optional[Dict[str, Any]] = None) -> None:
        if params:
            self.cursor.execute(sql, params)
        else:
            self.cursor.execute(sql)
        self.last_insert_id = getattr(self.cursor, "lastrowid", None)
        if self.cursor.description:
            self.columns = [desc[0] for desc in self.cursor.description]
            self._rows = list(self.cursor.fetchall())
            self.row_count = len(self._rows)
        else:
            self.row_count = max(int(self.cursor.rowcount or 0), 0)

    def fetch(self) -> Optional[Dict[str, Any]]:
        if self.closed or self._position >= len(self._rows):
            return None
        row = self._rows[self._position]
        self._position += 1
        if isinstance(row, dict):
            return dict(row)
        return {self.columns[i]: row[i] for i in range(len(self.columns))}

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._rows = []
        self.cursor.close()

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        while True:
            row = self.fetch()
            if row is None:
                return
            yield row
