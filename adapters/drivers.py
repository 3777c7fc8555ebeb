from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from adapters.settings import ConnectionSettings
from utils.errors import ValidationError

# MySQL charset names differ from the generic identifiers callers tend to pass.
_MYSQL_CHARSETS = {"utf8": "utf8mb4", "utf-8": "utf8mb4"}
_PG_CHARSETS = {"utf8": "UTF8", "utf-8": "UTF8", "utf8mb4": "UTF8"}


@dataclass(frozen=True)
class Driver:
    name: str
    module: str
    paramstyle: str
    error: Type[BaseException]
    open: Callable[[ConnectionSettings], Any]
    begin: Optional[Callable[[Any], None]] = None

    def connect(self, settings: ConnectionSettings) -> Any:
        return self.open(settings)


def _mysql_driver() -> Driver:
    try:
        import mysql.connector  # type: ignore

        def _open(settings: ConnectionSettings) -> Any:
            return mysql.connector.connect(
                host=settings.host,
                port=settings.port or 3306,
                user=settings.username,
                password=settings.password,
                database=settings.dbname,
                charset=_MYSQL_CHARSETS.get(settings.charset, settings.charset),
                autocommit=False,
            )

        return Driver(
            name="mysql",
            module="mysql.connector",
            paramstyle="pyformat",
            error=mysql.connector.Error,
            open=_open,
        )
    except ImportError:
        try:
            import pymysql  # type: ignore

            def _open(settings: ConnectionSettings) -> Any:
                return pymysql.connect(
                    host=settings.host,
                    port=settings.port or 3306,
                    user=settings.username,
                    password=settings.password,
                    database=settings.dbname,
                    charset=_MYSQL_CHARSETS.get(settings.charset, settings.charset),
                    autocommit=False,
                )

            return Driver(
                name="mysql",
                module="pymysql",
                paramstyle="pyformat",
                error=pymysql.MySQLError,
                open=_open,
                begin=lambda conn: conn.begin(),
            )
        except ImportError as exc:
            raise ImportError(
                "No MySQL driver found. Install one of: "
                "`python -m pip install mysql-connector-python` or `python -m pip install pymysql`."
            ) from exc


def _postgres_driver() -> Driver:
    try:
        import psycopg  # type: ignore

        def _open(settings: ConnectionSettings) -> Any:
            return psycopg.connect(
                host=settings.host,
                port=settings.port or 5432,
                dbname=settings.dbname,
                user=settings.username,
                password=settings.password,
                client_encoding=_PG_CHARSETS.get(settings.charset, settings.charset),
            )

        return Driver(name="pgsql", module="psycopg", paramstyle="pyformat", error=psycopg.Error, open=_open)
    except ImportError:
        try:
            import psycopg2  # type: ignore

            def _open(settings: ConnectionSettings) -> Any:
                return psycopg2.connect(
                    host=settings.host,
                    port=settings.port or 5432,
                    dbname=settings.dbname,
                    user=settings.username,
                    password=settings.password,
                    client_encoding=_PG_CHARSETS.get(settings.charset, settings.charset),
                )

            return Driver(name="pgsql", module="psycopg2", paramstyle="pyformat", error=psycopg2.Error, open=_open)
        except ImportError as exc:
            raise ImportError(
                "No PostgreSQL driver found. Install one of: "
                '`python -m pip install "psycopg[binary]"` or `python -m pip install psycopg2-binary`.'
            ) from exc


def _sqlite_driver() -> Driver:
    import sqlite3

    def _open(settings: ConnectionSettings) -> sqlite3.Connection:
        return sqlite3.connect(settings.dbname)

    return Driver(name="sqlite", module="sqlite3", paramstyle="named", error=sqlite3.Error, open=_open)


_LOADERS: Dict[str, Callable[[], Driver]] = {
    "mysql": _mysql_driver,
    "pgsql": _postgres_driver,
    "postgres": _postgres_driver,
    "postgresql": _postgres_driver,
    "sqlite": _sqlite_driver,
}


def supported_drivers() -> List[str]:
    return sorted(_LOADERS)


def load_driver(name: str) -> Driver:
    key = (name or "").strip().lower()
    loader = _LOADERS.get(key)
    if loader is None:
        raise ValidationError(f"Unsupported driver: {name!r} (expected one of: {', '.join(supported_drivers())})")
    return loader()
