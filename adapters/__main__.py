from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from adapters.settings import ConnectionSettings
from adapters.sql import SQLAdapter
from utils.errors import AdapterError, ValidationError


def _settings_from_args(args: argparse.Namespace) -> ConnectionSettings:
    overrides: Dict[str, Any] = {
        "host": args.host,
        "username": args.user,
        "password": args.password,
        "dbname": args.database,
        "driver": args.driver,
        "charset": args.charset,
        "port": args.port,
    }
    return ConnectionSettings.from_env(**overrides)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m adapters", description="Run CRUD statements through SQLAdapter.")
    parser.add_argument("--driver", default=None, help="mysql, pgsql or sqlite (default: DB_DRIVER or mysql).")
    parser.add_argument("--host", default=None)
    parser.add_argument("--user", default=None)
    parser.add_argument("--password", default=None)
    parser.add_argument("--database", default=None, help="Database name, or file path for sqlite.")
    parser.add_argument("--charset", default=None)
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--pretty", action="store_true", help="Pretty-print rows.")
    parser.add_argument("--verbose", action="store_true", help="Log connections and statements.")

    commands = parser.add_subparsers(dest="command", required=True)

    query = commands.add_parser("query", help="Execute a raw SQL statement.")
    query.add_argument("sql")
    query.add_argument("--param", action="append", default=[], metavar="NAME=VALUE", help="Bind :NAME to VALUE.")

    select = commands.add_parser("select", help="SELECT rows from a table.")
    select.add_argument("table")
    select.add_argument("--where", default=None)
    select.add_argument("--fields", default=None)
    select.add_argument("--order", default=None)
    select.add_argument("--limit", default=None)
    select.add_argument("--offset", default=None)

    delete = commands.add_parser("delete", help="DELETE rows from a table.")
    delete.add_argument("table")
    delete.add_argument("--where", required=True)
    return parser


def _parse_params(raw: List[str]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    for item in raw:
        if "=" not in item:
            raise ValidationError(f"Invalid --param {item!r}, expected NAME=VALUE")
        name, value = item.split("=", 1)
        params[name.strip()] = value
    return params


def _print_rows(adapter: SQLAdapter, pretty: bool) -> None:
    for row in adapter.rows():
        print(json.dumps(row, indent=2 if pretty else None, default=str))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        with SQLAdapter.from_settings(_settings_from_args(args)) as adapter:
            if args.command == "query":
                adapter.query(args.sql, _parse_params(args.param))
                _print_rows(adapter, args.pretty)
                summary = {"rows": adapter.count_rows(), "insert_id": adapter.get_insert_id()}
            elif args.command == "select":
                count = adapter.select(args.table, args.where, args.fields, args.order, args.limit, args.offset)
                _print_rows(adapter, args.pretty)
                summary = {"rows": count}
            else:
                summary = {"affected_rows": adapter.delete(args.table, args.where)}
    except (AdapterError, ValidationError) as exc:
        print(str(exc), file=sys.stderr)
        return 1

    print(json.dumps(summary), file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
