"""
Create the catalog tables in the configured database.

Usage:
  python -m catalog.scripts.init_db [--db path/to/catalog.db] [--schema schema.sql]
"""
from __future__ import annotations

import argparse
import os

from catalog.db import get_conn, get_db_path

_DEFAULT_SCHEMA = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "schema.sql")


def init_db(db_path: str | None = None, schema_path: str = _DEFAULT_SCHEMA) -> str:
    with open(schema_path, "r", encoding="utf-8") as f:
        ddl = f.read()
    path = db_path or get_db_path()
    with get_conn(path) as conn:
        conn.executescript(ddl)
    return path


def main(argv: list[str] | None = None):
    ap = argparse.ArgumentParser(description="Initialize the book catalog database")
    ap.add_argument("--db", default=None, help="database file (default: resolved from env/config.yaml)")
    ap.add_argument("--schema", default=_DEFAULT_SCHEMA)
    args = ap.parse_args(argv)

    path = init_db(args.db, args.schema)
    print({"message": "ok", "db_path": path})


if __name__ == "__main__":
    main()
