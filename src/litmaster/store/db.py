"""SQLite database connection and schema management.

Provides get_db_connection() context manager and init_db() for schema creation.
A single key-value table plays the role of browser local storage.
"""

import sqlite3
from ..config import get_settings
from contextlib import contextmanager

settings = get_settings()

@contextmanager
def get_db_connection():
    conn = sqlite3.connect(settings.DB_PATH)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()

def init_db():
    schema = """
    CREATE TABLE IF NOT EXISTS kv_store (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
    );
    """
    with get_db_connection() as conn:
        conn.executescript(schema)
        conn.commit()
