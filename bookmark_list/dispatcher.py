# dispatcher.py
"""Maps one request onto exactly one storage operation.

    GET   ?install        -> install probe
    GET                   -> list bookmarks
    POST  install2        -> install commit
    POST  delete + id     -> delete, then redirect home
    POST  url             -> insert, then redirect home
    other                 -> unknown method

Required fields are checked before storage is opened, and an unknown method
never opens storage at all. The first error wins: a failed close is reported
only when nothing failed before it.
"""
import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from .errors import BookmarkError, Result, missing_field, unknown_method
from .installer import Installer
from .models import Bookmark, DisplayPage
from .repository import BookmarkRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestParams:
    install_probe: bool = False
    install_commit: bool = False
    delete: bool = False
    url: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_mappings(cls, method: str, args: Mapping, form: Mapping) -> "RequestParams":
        """GET looks only at the query string, POST only at the form body."""
        if method == "GET":
            return cls(install_probe="install" in args)
        if method == "POST":
            return cls(
                install_commit="install2" in form,
                delete="delete" in form,
                url=form.get("url"),
                id=form.get("id"),
            )
        return cls()


@dataclass(frozen=True)
class RequestContext:
    method: str
    params: RequestParams
    storage: object
    path: str = "/"


@dataclass(frozen=True)
class Outcome:
    page: DisplayPage = DisplayPage.NORMAL
    error: Optional[BookmarkError] = None
    bookmarks: Tuple[Bookmark, ...] = field(default_factory=tuple)

    @property
    def is_redirect(self) -> bool:
        return self.error is None and self.page is DisplayPage.REDIRECT_HOME

    @classmethod
    def failed(cls, error: BookmarkError) -> "Outcome":
        return cls(error=error)


def _validate(ctx: RequestContext) -> Optional[BookmarkError]:
    if ctx.method not in ("GET", "POST"):
        return unknown_method(ctx.method)
    params = ctx.params
    if ctx.method == "POST" and not params.install_commit:
        if params.delete:
            if params.id is None:
                return missing_field("id", "No bookmark ID specified.")
        elif params.url is None:
            return missing_field("url", "No bookmark URL specified.")
    return None


def _run(ctx: RequestContext, repository: BookmarkRepository) -> Outcome:
    params = ctx.params
    if ctx.method == "GET":
        if params.install_probe:
            result = Installer(repository).probe()
            return Outcome(page=result.value) if result.is_ok else Outcome.failed(result.error)
        result = repository.list()
        if not result.is_ok:
            return Outcome.failed(result.error)
        return Outcome(page=DisplayPage.NORMAL, bookmarks=result.value)

    if params.install_commit:
        result = Installer(repository).commit()
        return Outcome(page=result.value) if result.is_ok else Outcome.failed(result.error)
    if params.delete:
        result = repository.delete(params.id)
    else:
        result = repository.insert(params.url)
    if not result.is_ok:
        return Outcome.failed(result.error)
    return Outcome(page=DisplayPage.REDIRECT_HOME)


def dispatch(ctx: RequestContext) -> Outcome:
    error = _validate(ctx)
    if error is not None:
        logger.warning(f"Rejected {ctx.method} {ctx.path}: {error.message}")
        return Outcome.failed(error)

    opened = ctx.storage.open()
    if not opened.is_ok:
        return Outcome.failed(opened.error)
    conn = opened.value

    try:
        outcome = _run(ctx, BookmarkRepository(ctx.storage, conn))
    finally:
        closed: Result = ctx.storage.close(conn)
    if not closed.is_ok and outcome.error is None:
        return Outcome.failed(closed.error)
    if outcome.error is not None:
        logger.warning(f"{ctx.method} {ctx.path} failed: {outcome.error.message}")
    return outcome
