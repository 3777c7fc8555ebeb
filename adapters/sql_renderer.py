from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

PLACEHOLDER_PREFIX = ":value"


@dataclass(frozen=True)
class SQLDialect:
    engine: str
    paramstyle: str

    def render(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> Tuple[str, Optional[Dict[str, Any]]]:
        """Translate ``:name`` placeholders into the driver's paramstyle.

        Keys of ``params`` may carry the leading colon or not. Only names
        present in ``params`` are rewritten, so colons inside literals such as
        ``'10:30'`` are left alone. Returns ``(sql, None)`` when there is
        nothing to bind.
        """
        if not params:
            return sql, None

        bound = {str(key).lstrip(":"): value for key, value in params.items()}
        if self.paramstyle == "named":
            return sql, bound

        rendered = sql.replace("%", "%%")
        # Longest names first so :value10 is not consumed by :value1.
        for name in sorted(bound, key=len, reverse=True):
            rendered = re.sub(rf":{re.escape(name)}(?!\w)", f"%({name})s", rendered)
        return rendered, bound


def get_sql_dialect(driver: str) -> SQLDialect:
    engine = (driver or "mysql").strip().lower()
    if engine in {"pgsql", "postgres", "postgresql"}:
        return SQLDialect(engine="postgres", paramstyle="pyformat")
    if engine == "sqlite":
        return SQLDialect(engine="sqlite", paramstyle="named")
    if engine == "mysql":
        return SQLDialect(engine="mysql", paramstyle="pyformat")
    return SQLDialect(engine=engine, paramstyle="pyformat")


def _stringify(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def prepare_values(data: Mapping[str, Any], stringify: bool = True) -> Dict[str, Any]:
    prepared: Dict[str, Any] = {}
    for number, value in enumerate(data.values(), start=1):
        prepared[f"{PLACEHOLDER_PREFIX}{number}"] = _stringify(value) if stringify else value
    return prepared


def _field_list(fields: Union[str, Sequence[str], None]) -> str:
    if fields is None:
        return "*"
    if isinstance(fields, str):
        return fields or "*"
    return ", ".join(fields) or "*"


def build_select(
    table: str,
    conditions: Optional[str] = None,
    fields: Union[str, Sequence[str], None] = None,
    order: Optional[str] = None,
    limit: Union[int, str, None] = None,
    offset: Union[int, str, None] = None,
) -> str:
    parts = [f"SELECT {_field_list(fields)} FROM {table}"]
    if conditions is not None:
        parts.append(f"WHERE {conditions}")
    if order is not None:
        parts.append(f"ORDER BY {order}")
    if limit is not None:
        parts.append(f"LIMIT {limit}")
        if offset is not None:
            parts.append(f"OFFSET {offset}")
    return " ".join(parts) + ";"


def build_insert(table: str, data: Mapping[str, Any], stringify: bool = True) -> Tuple[str, Dict[str, Any]]:
    prepared = prepare_values(data, stringify=stringify)
    columns = ", ".join(data.keys())
    placeholders = ", ".join(prepared.keys())
    return f"INSERT INTO {table} ({columns}) VALUES ({placeholders});", prepared


def build_update(
    table: str, data: Mapping[str, Any], conditions: str, stringify: bool = True
) -> Tuple[str, Dict[str, Any]]:
    prepared = prepare_values(data, stringify=stringify)
    assignments = ", ".join(f"{column} = {placeholder}" for column, placeholder in zip(data.keys(), prepared.keys()))
    return f"UPDATE {table} SET {assignments} WHERE {conditions};", prepared


def build_delete(table: str, conditions: str) -> str:
    return f"DELETE FROM {table} WHERE {conditions};"
