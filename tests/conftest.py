import pytest

from bookmark_list import create_app
from bookmark_list.errors import BookmarkError, ErrorKind, Result
from bookmark_list.repository import BookmarkRepository
from bookmark_list.storage import Storage


class CountingStorage(Storage):
    """Storage that records every call made against it."""

    def __init__(self, db_path):
        super().__init__(db_path)
        self.calls = []

    def open(self):
        self.calls.append('open')
        return super().open()

    def close(self, conn):
        self.calls.append('close')
        return super().close(conn)

    def query(self, conn, sql, params=()):
        self.calls.append('query')
        return super().query(conn, sql, params)

    def execute(self, conn, sql, params=()):
        self.calls.append('execute')
        return super().execute(conn, sql, params)


class CloseFailingStorage(Storage):
    def close(self, conn):
        super().close(conn)
        return Result.fail(BookmarkError(ErrorKind.STORAGE_CLOSE_FAILED,
                                         "Failed to close bookmark database."))


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "bookmarks.db")


@pytest.fixture
def storage(db_path):
    return CountingStorage(db_path)


@pytest.fixture
def conn(storage):
    connection = storage.open().value
    yield connection
    connection.close()


@pytest.fixture
def repository(storage, conn):
    return BookmarkRepository(storage, conn)


@pytest.fixture
def installed_repository(repository):
    assert repository.create_schema().is_ok
    return repository


@pytest.fixture
def app(db_path):
    app = create_app(test_config={"TESTING": True, "DATABASE_PATH": db_path})
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def installed_client(client):
    response = client.post('/', data={'install2': ''})
    assert response.status_code == 200
    return client
