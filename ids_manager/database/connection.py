"""
connection.py - DB connection helpers
Single responsibility: manage SQLite connections and pragmas for the record store.
"""

import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from ids_manager.config import DB_PATH

logger = logging.getLogger(__name__)


class Store:
    """Record store handle passed into every service."""

    def __init__(self, db_path: str = DB_PATH):
        self.db_path = db_path

    def open(self) -> sqlite3.Connection:
        """Open SQLite connection with shared defaults."""
        try:
            conn = sqlite3.connect(self.db_path, timeout=10)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
            conn.execute("PRAGMA journal_mode = WAL")
            return conn
        except sqlite3.Error as e:
            logger.error("Failed to connect to database at %s: %s", self.db_path, e)
            raise

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Yield a connection; commit on success, roll back on error, always close."""
        conn = self.open()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def __repr__(self) -> str:
        return f"Store({self.db_path!r})"
