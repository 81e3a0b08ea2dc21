# installer.py
"""Two-state install gate: the bookmarks table is either absent or present.

State is read from the database on every call and never cached. Only the
install probe and the install commit look at it; ordinary reads and writes
run regardless and fail in storage if the table is missing.

Check-then-create is not atomic. Two concurrent commits can both pass a probe;
the second CREATE TABLE then fails with SCHEMA_ALREADY_EXISTS.
"""
import logging
from enum import Enum

from .errors import BookmarkError, ErrorKind, Result
from .models import DisplayPage

logger = logging.getLogger(__name__)


class InstallState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class Installer:
    def __init__(self, repository):
        self.repository = repository

    def state(self) -> Result:
        result = self.repository.schema_exists()
        if not result.is_ok:
            return result
        return Result.ok(InstallState.READY if result.value else InstallState.UNINITIALIZED)

    def probe(self) -> Result:
        result = self.state()
        if not result.is_ok:
            return result
        if result.value is InstallState.READY:
            return Result.fail(BookmarkError(ErrorKind.SCHEMA_ALREADY_EXISTS,
                                             "Bookmarks table already exists."))
        return Result.ok(DisplayPage.INSTALL)

    def commit(self) -> Result:
        result = self.repository.create_schema()
        if not result.is_ok:
            logger.warning(f"Install failed: {result.error.detail or result.error.message}")
            return result
        logger.info("Installation complete")
        return Result.ok(DisplayPage.INSTALL_DONE)
