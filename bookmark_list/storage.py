# storage.py
"""SQLite storage gateway.

One connection per request: `open()` it, run statements, `close()` it. Every
method returns a `Result`; driver exceptions never leave this module. Values
are always passed as bound parameters, never formatted into the SQL text.
"""
import logging
import sqlite3
from typing import Sequence

from .errors import BookmarkError, ErrorKind, Result

logger = logging.getLogger(__name__)

# Errors sqlite3 raises while compiling a statement, before any row is touched
_PREPARE_MARKERS = ("no such table", "no such column", "syntax error", "incomplete input")

# Raised by the driver while converting a parameter, outside the sqlite3.Error tree
_BIND_EXCEPTIONS = (OverflowError, UnicodeEncodeError)
_DRIVER_EXCEPTIONS = (sqlite3.Error,) + _BIND_EXCEPTIONS


def _is_bind_error(exc: Exception) -> bool:
    if isinstance(exc, (sqlite3.InterfaceError,) + _BIND_EXCEPTIONS):
        return True
    return isinstance(exc, sqlite3.ProgrammingError) and "binding" in str(exc).lower()


def translate_error(exc: Exception, prepared: bool = True) -> BookmarkError:
    """Map a sqlite3 (or parameter conversion) exception onto the error taxonomy.

    With `prepared=False` compile errors count as plain query failures, which
    is how a one-shot read reports a missing table.
    """
    detail = str(exc)
    lowered = detail.lower()
    if _is_bind_error(exc):
        return BookmarkError(ErrorKind.BIND_FAILED, "Error binding query parameters.", detail=detail)
    if isinstance(exc, sqlite3.OperationalError) and "already exists" in lowered:
        return BookmarkError(ErrorKind.SCHEMA_ALREADY_EXISTS, "Relation already exists.", detail=detail)
    if prepared and isinstance(exc, sqlite3.OperationalError) and any(m in lowered for m in _PREPARE_MARKERS):
        return BookmarkError(ErrorKind.PREPARE_FAILED, "Error preparing query.", detail=detail)
    return BookmarkError(ErrorKind.QUERY_FAILED, "Error executing query.", detail=detail)


class Storage:
    def __init__(self, db_path='bookmarks.db'):
        self.db_path = db_path

    def open(self) -> Result:
        try:
            # Autocommit: every statement is its own transaction
            conn = sqlite3.connect(self.db_path, isolation_level=None)
        except sqlite3.Error as e:
            logger.error(f"Error opening database {self.db_path}: {str(e)}")
            return Result.fail(BookmarkError(ErrorKind.STORAGE_OPEN_FAILED,
                                             "Failed to open bookmark database.", detail=str(e)))
        conn.row_factory = sqlite3.Row
        return Result.ok(conn)

    def close(self, conn: sqlite3.Connection) -> Result:
        try:
            conn.close()
        except sqlite3.Error as e:
            logger.error(f"Error closing database {self.db_path}: {str(e)}")
            return Result.fail(BookmarkError(ErrorKind.STORAGE_CLOSE_FAILED,
                                             "Failed to close bookmark database.", detail=str(e)))
        return Result.ok()

    def query(self, conn: sqlite3.Connection, sql: str, params: Sequence = ()) -> Result:
        """Run a read and return all rows."""
        try:
            cursor = conn.execute(sql, params)
            rows = cursor.fetchall()
        except _DRIVER_EXCEPTIONS as e:
            logger.error(f"Error running query {sql!r}: {str(e)}")
            return Result.fail(translate_error(e, prepared=False))
        return Result.ok(rows)

    def execute(self, conn: sqlite3.Connection, sql: str, params: Sequence = ()) -> Result:
        """Run a write; the value is the number of affected rows."""
        try:
            cursor = conn.execute(sql, params)
        except _DRIVER_EXCEPTIONS as e:
            logger.error(f"Error executing statement {sql!r}: {str(e)}")
            return Result.fail(translate_error(e))
        return Result.ok(cursor.rowcount)
