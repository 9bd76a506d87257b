from __future__ import annotations

import sqlite3
from unittest.mock import patch

from catalog.db import get_conn
from catalog.domain.errors import ConnectivityError, StatementError, TransactionError
from catalog.tests.fakes import FakeStore

MORT = {
    "author": "Terry Pratchett",
    "title": "Mort",
    "description": "Mort is a fantasy novel by British writer Terry Pratchett.",
    "isbn": "9780552144292",
}


def test_health_and_version(client):
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "OK"
    assert body["total_count"] == 0
    assert "error" not in body and "books" not in body

    v = client.get("/version")
    assert v.status_code == 200
    assert v.json().get("app") == "book-catalog-api"


def test_health_probe_failure_is_503(client):
    store = FakeStore(ping_error=sqlite3.OperationalError("unable to open database file"))
    with patch("catalog.services.book_svc.open_store") as op:
        op.return_value.__enter__.return_value = store
        r = client.get("/health")
    assert r.status_code == 503
    body = r.json()
    assert body["error"]["msg"] == "unable to open database file"
    assert body["error"]["body"] == "connectivity"
    assert store.pings == 1


def test_create_book(client):
    res = client.post("/api/books", json=MORT)
    assert res.status_code == 201
    body = res.json()
    assert body["status"] == "Created"
    assert body["total_count"] == 1
    assert body["books"] == [{**MORT, "id": 1}]

    with get_conn() as conn:
        row = conn.execute("SELECT * FROM books WHERE id=?", (1,)).fetchone()
        assert row is not None
        assert row["author"] == MORT["author"] and row["isbn"] == MORT["isbn"]


def test_create_ignores_client_supplied_id(client):
    res = client.post("/api/books", json={**MORT, "id": 99})
    assert res.status_code == 201
    assert res.json()["books"][0]["id"] == 1


def test_create_optional_fields_default_empty(client):
    res = client.post("/api/books", json={"author": "Ursula K. Le Guin", "title": "The Dispossessed"})
    assert res.status_code == 201
    book = res.json()["books"][0]
    assert book["description"] == "" and book["isbn"] == ""


def test_create_missing_title_is_validation_envelope(client):
    res = client.post("/api/books", json={"author": "Terry Pratchett"})
    assert res.status_code == 422
    body = res.json()
    assert body["total_count"] == 0
    assert "title" in body["error"]["msg"]
    assert body["error"]["body"] == "validation"
    with get_conn() as conn:
        assert conn.execute("SELECT COUNT(1) AS c FROM books").fetchone()["c"] == 0


def test_create_statement_failure_maps_to_500(client):
    with patch("catalog.routes.books.create_book", side_effect=StatementError("NOT NULL constraint failed")):
        res = client.post("/api/books", json=MORT)
    assert res.status_code == 500
    body = res.json()
    assert "books" not in body
    assert body["error"] == {"msg": "NOT NULL constraint failed", "body": "statement"}


def test_delete_book(client):
    created = client.post("/api/books", json=MORT).json()["books"][0]
    res = client.delete(f"/api/books/{created['id']}")
    assert res.status_code == 200
    assert res.json()["status"] == "OK"
    with get_conn() as conn:
        assert conn.execute("SELECT COUNT(1) AS c FROM books").fetchone()["c"] == 0


def test_delete_unknown_id_still_ok(client):
    # no affected-row check: a missing id is reported as success
    res = client.delete("/api/books/4242")
    assert res.status_code == 200
    assert "error" not in res.json()


def test_delete_zero_id_is_400(client):
    client.post("/api/books", json=MORT)
    res = client.delete("/api/books/0")
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == {"msg": "cannot delete book with ID of 0", "body": "precondition"}
    with get_conn() as conn:
        assert conn.execute("SELECT COUNT(1) AS c FROM books").fetchone()["c"] == 1


def test_delete_zero_id_never_opens_store(client):
    with patch("catalog.services.book_svc.open_store") as op:
        op.return_value.__enter__.return_value = FakeStore()
        res = client.delete("/api/books/0")
    assert res.status_code == 400
    op.assert_not_called()


def test_delete_zero_id_is_400_even_when_store_unreachable(client, tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")
    with patch.dict("os.environ", {"CATALOG_DB_PATH": str(blocker / "catalog.db")}):
        res = client.delete("/api/books/0")
    assert res.status_code == 400
    assert res.json()["error"]["body"] == "precondition"


def test_delete_non_integer_id_is_422(client):
    res = client.delete("/api/books/abc")
    assert res.status_code == 422
    assert res.json()["error"]["body"] == "validation"


def test_delete_connectivity_failure_is_503(client):
    with patch("catalog.routes.books.delete_book", side_effect=ConnectivityError("cannot open store: disk I/O error")):
        res = client.delete("/api/books/3")
    assert res.status_code == 503
    assert res.json()["error"]["body"] == "connectivity"


def test_delete_commit_failure_is_500(client):
    with patch("catalog.routes.books.delete_book", side_effect=TransactionError("commit transaction: disk full", phase="commit")):
        res = client.delete("/api/books/3")
    assert res.status_code == 500
    assert res.json()["error"]["body"] == "transaction"
