import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "catalog_test.db"
    # Point catalog to this temp DB
    os.environ["CATALOG_DB_PATH"] = str(path)
    # Initialize schema
    schema = Path(_PROJECT_ROOT / "schema.sql").read_text(encoding="utf-8")
    conn = sqlite3.connect(str(path))
    try:
        conn.executescript(schema)
        conn.commit()
    finally:
        conn.close()
    return str(path)


@pytest.fixture()
def client(tmp_db_path):
    from catalog.logs import ensure_log_schema
    from catalog.services.book_svc import ensure_book_schema
    ensure_book_schema()
    ensure_log_schema()
    # Import app after DB ready so startup hooks can use it
    from catalog.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Clean tables before each test for isolation
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("CATALOG_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    tables = ["books", "operation_log"]
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in tables:
            conn.execute(f"DELETE FROM {t}")
        # restart AUTOINCREMENT ids so each test sees ids from 1
        conn.execute("DELETE FROM sqlite_sequence")
        conn.commit()
    finally:
        conn.close()
    yield
