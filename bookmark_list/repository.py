# repository.py
"""Bookmark queries over one open connection.

The list is returned in insertion order (ascending id). Ids come from an
AUTOINCREMENT key, so a deleted id is never handed out again.
"""
import logging

from .errors import BookmarkError, ErrorKind, Result
from .models import Bookmark

logger = logging.getLogger(__name__)

TABLE_NAME = "bookmarks"

SCHEMA_EXISTS_SQL = "SELECT name FROM sqlite_master WHERE type='table' AND name=?"
CREATE_SCHEMA_SQL = "CREATE TABLE bookmarks (id INTEGER PRIMARY KEY AUTOINCREMENT, url TEXT)"
LIST_SQL = "SELECT id, url FROM bookmarks ORDER BY id ASC"
INSERT_SQL = "INSERT INTO bookmarks (url) VALUES (?)"
DELETE_SQL = "DELETE FROM bookmarks WHERE id=?"


def _statement_error(error: BookmarkError, action: str, value_name: str) -> BookmarkError:
    if error.kind is ErrorKind.PREPARE_FAILED:
        reason = "error preparing query"
    elif error.kind is ErrorKind.BIND_FAILED:
        reason = f"error binding {value_name} value"
    else:
        reason = "error executing query"
    return error.with_message(f"Failed to {action}: {reason}.")


class BookmarkRepository:
    def __init__(self, storage, conn):
        self.storage = storage
        self.conn = conn

    def schema_exists(self) -> Result:
        result = self.storage.query(self.conn, SCHEMA_EXISTS_SQL, (TABLE_NAME,))
        if not result.is_ok:
            # Never read a failed probe as "absent"
            return Result.fail(BookmarkError(ErrorKind.QUERY_FAILED,
                                             "Failed to check existence of the bookmarks table.",
                                             detail=result.error.detail))
        return Result.ok(len(result.value) > 0)

    def create_schema(self) -> Result:
        # Plain CREATE TABLE: fails when the table is already there
        result = self.storage.execute(self.conn, CREATE_SCHEMA_SQL)
        if not result.is_ok:
            return Result.fail(result.error.with_message("Failed to create the bookmarks table."))
        logger.info("Created bookmarks table")
        return Result.ok()

    def list(self) -> Result:
        result = self.storage.query(self.conn, LIST_SQL)
        if not result.is_ok:
            return Result.fail(result.error.with_message("Failed to read bookmarks: error executing query."))
        return Result.ok(tuple(Bookmark.from_row(row) for row in result.value))

    def insert(self, url: str) -> Result:
        result = self.storage.execute(self.conn, INSERT_SQL, (url,))
        if not result.is_ok:
            return Result.fail(_statement_error(result.error, "add new bookmark", "url"))
        logger.info(f"Added bookmark {url!r}")
        return Result.ok()

    def delete(self, bookmark_id) -> Result:
        """Delete by id. A missing id is a successful no-op."""
        try:
            key = int(bookmark_id)
        except (TypeError, ValueError):
            return Result.fail(BookmarkError(ErrorKind.BIND_FAILED,
                                             "Failed to delete bookmark: error binding id value.",
                                             detail=f"not an integer: {bookmark_id!r}"))
        result = self.storage.execute(self.conn, DELETE_SQL, (key,))
        if not result.is_ok:
            return Result.fail(_statement_error(result.error, "delete bookmark", "id"))
        logger.info(f"Deleted bookmark {key} ({result.value} row(s))")
        return Result.ok()
