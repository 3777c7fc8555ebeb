from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Union

from adapters.base import DatabaseAdapter
from adapters.drivers import Driver, load_driver, supported_drivers
from adapters.result import ResultHandle
from adapters.settings import DEFAULT_CHARSET, DEFAULT_DRIVER, ConnectionSettings
from adapters.sql_renderer import build_delete, build_insert, build_select, build_update, get_sql_dialect
from adapters.transaction import Transaction
from utils.errors import DatabaseConnectionError, QueryExecutionError, ValidationError

logger = logging.getLogger(__name__)


class SQLAdapter(DatabaseAdapter):
    """CRUD adapter over a DB-API connection.

    Every ``query`` runs in its own transaction. Table names, conditions,
    ordering, limits and field lists are interpolated into the SQL text as
    given; only the values passed to ``insert``/``update`` (or ``params``
    of ``query``) are bound.

    Use it as a context manager to guarantee the connection is closed:

        with SQLAdapter("localhost", "app", "secret", "shop") as db:
            db.select("products", "brand = 'acme'", limit=10)
            for row in db.rows():
                ...
    """

    engine = "sql"

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        dbname: str,
        driver: str = DEFAULT_DRIVER,
        charset: str = DEFAULT_CHARSET,
        persistent: bool = True,
        port: Optional[int] = None,
        stringify_params: bool = True,
    ):
        settings = ConnectionSettings.build(
            host=host,
            username=username,
            password=password,
            dbname=dbname,
            driver=driver,
            charset=charset,
            persistent=persistent,
            port=port,
            stringify_params=stringify_params,
        )
        if settings.driver not in supported_drivers():
            raise ValidationError(
                f"Unsupported driver: {settings.driver!r} (expected one of: {', '.join(supported_drivers())})"
            )
        self.settings = settings
        self.engine = settings.driver
        self.dialect = get_sql_dialect(settings.driver)
        self.connection: Any = None
        self._driver: Optional[Driver] = None
        self._result: Optional[ResultHandle] = None
        self._execution_status = False
        self._last_inserted_id: Any = None

    @classmethod
    def from_settings(cls, settings: ConnectionSettings) -> "SQLAdapter":
        return cls(**settings.model_dump())

    @property
    def dsn(self) -> str:
        return self.settings.dsn

    @property
    def connected(self) -> bool:
        return self.connection is not None

    @property
    def result(self) -> Optional[ResultHandle]:
        return self._result

    def _load_driver(self) -> Driver:
        if self._driver is None:
            self._driver = load_driver(self.settings.driver)
        return self._driver

    def connect(self) -> Any:
        if self.connection is not None:
            if self.settings.persistent:
                return self.connection
            # Non-persistent adapters open a fresh connection for every call.
            self.disconnect()

        driver = self._load_driver()
        logger.debug("Connecting to %s via %s", self.dsn, driver.module)
        try:
            self.connection = driver.connect(self.settings)
        except driver.error as exc:
            raise DatabaseConnectionError(f"SQLAdapter.connect: {exc}") from exc
        return self.connection

    def disconnect(self) -> bool:
        if self.connection is None:
            return False

        connection, self.connection = self.connection, None
        try:
            self.free_result()
            self._result = None
        finally:
            connection.close()
        logger.debug("Disconnected from %s", self.dsn)
        return True

    def _discard_connection(self, driver: Driver) -> None:
        connection, self.connection = self.connection, None
        self._result = None
        if connection is None:
            return
        logger.warning("Dropping broken connection to %s", self.dsn)
        try:
            connection.close()
        except driver.error as exc:
            logger.warning("Closing broken connection to %s failed: %s", self.dsn, exc)

    def query(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> ResultHandle:
        if not isinstance(sql, str) or not sql.strip():
            raise ValidationError("SQLAdapter.query: The specified query is not valid.")

        driver = self._load_driver()
        try:
            # Only one live result set per adapter.
            self.free_result()
            self._result = None
            self.connect()
            cursor = self.connection.cursor()
        except DatabaseConnectionError:
            self._execution_status = False
            raise
        except driver.error as exc:
            # The handle is unusable; the next call reopens it.
            self._execution_status = False
            self._discard_connection(driver)
            raise QueryExecutionError(f"SQLAdapter.query: {exc}", sql=sql) from exc

        handle = ResultHandle(cursor)
        self._result = handle
        rendered_sql, bound = self.dialect.render(sql, params)

        logger.debug("Executing query: %s", sql)
        try:
            with Transaction(self.connection, driver.begin):
                handle.execute(rendered_sql, bound)
                self._last_inserted_id = handle.last_insert_id
        except driver.error as exc:
            self._execution_status = False
            try:
                self.free_result()
            except driver.error:
                self._discard_connection(driver)
            self._result = None
            raise QueryExecutionError(f"SQLAdapter.query: {exc}", sql=sql) from exc

        self._execution_status = True
        return handle

    def fetch(self) -> Optional[Dict[str, Any]]:
        if self._result is None:
            return None
        row = self._result.fetch()
        if row is None:
            self.free_result()
        return row

    def rows(self) -> Iterator[Dict[str, Any]]:
        while True:
            row = self.fetch()
            if row is None:
                return
            yield row

    def select(
        self,
        table: str,
        conditions: Optional[str] = None,
        fields: Union[str, Sequence[str], None] = None,
        order: Optional[str] = None,
        limit: Union[int, str, None] = None,
        offset: Union[int, str, None] = None,
    ) -> int:
        self.query(build_select(table, conditions, fields, order, limit, offset))
        return self.count_rows()

    def insert(self, table: str, data: Mapping[str, Any]) -> int:
        if not data:
            raise ValidationError("SQLAdapter.insert: no values to insert.")
        sql, prepared = build_insert(table, data, stringify=self.settings.stringify_params)
        self.query(sql, prepared)
        return self.get_insert_id()

    def update(self, table: str, data: Mapping[str, Any], conditions: str) -> int:
        if not data:
            raise ValidationError("SQLAdapter.update: no values to update.")
        sql, prepared = build_update(table, data, conditions, stringify=self.settings.stringify_params)
        self.query(sql, prepared)
        return self.get_affected_rows()

    def delete(self, table: str, conditions: str) -> int:
        self.query(build_delete(table, conditions))
        return self.get_affected_rows()

    def get_insert_id(self) -> int:
        try:
            return int(self._last_inserted_id or 0)
        except (TypeError, ValueError):
            return 0

    def count_rows(self) -> int:
        if self._result is None:
            return 0
        return self._result.row_count

    def get_affected_rows(self) -> int:
        if self._result is None:
            return 0
        return self._result.row_count

    def free_result(self) -> bool:
        if self._result is None:
            return False
        self._result.close()
        return True

    def has_execution_status(self) -> bool:
        return self._execution_status

    def __repr__(self) -> str:
        state = "connected" if self.connected else "disconnected"
        return f"{type(self).__name__}({self.dsn!r}, {state})"
