"""Repository layer: store handle and book data access (SQLite).

SQL statement text and transaction boundaries live here; services and routes stay SQL-free.
"""
from __future__ import annotations
