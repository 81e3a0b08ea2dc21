from bookmark_list.errors import ErrorKind
from bookmark_list.models import Bookmark


def test_schema_exists_before_and_after_create(repository):
    assert repository.schema_exists().value is False
    assert repository.create_schema().is_ok
    assert repository.schema_exists().value is True


def test_create_schema_twice_fails(installed_repository):
    result = installed_repository.create_schema()
    assert not result.is_ok, "Creating an existing table must not silently succeed"
    assert result.error.kind is ErrorKind.SCHEMA_ALREADY_EXISTS
    assert result.error.message == "Failed to create the bookmarks table."


def test_schema_probe_failure_is_not_absent(storage, conn, repository):
    conn.close()
    result = repository.schema_exists()
    assert not result.is_ok
    assert result.error.kind is ErrorKind.QUERY_FAILED
    assert result.error.message == "Failed to check existence of the bookmarks table."


def test_insert_then_list(installed_repository):
    assert installed_repository.insert("https://example.com").is_ok
    bookmarks = installed_repository.list().value
    assert len(bookmarks) == 1
    assert bookmarks[0].url == "https://example.com"
    assert isinstance(bookmarks[0].id, int)


def test_insert_accepts_any_string(installed_repository):
    assert installed_repository.insert("").is_ok
    assert installed_repository.insert("not a url at all").is_ok
    assert [b.url for b in installed_repository.list().value] == ["", "not a url at all"]


def test_list_is_in_insertion_order_and_stable(installed_repository):
    for url in ("http://c", "http://a", "http://b"):
        installed_repository.insert(url)
    first = installed_repository.list().value
    second = installed_repository.list().value
    assert [b.url for b in first] == ["http://c", "http://a", "http://b"]
    assert first == second


def test_ids_are_not_reused(installed_repository):
    installed_repository.insert("http://a")
    installed_repository.insert("http://b")
    installed_repository.delete(2)
    installed_repository.insert("http://c")
    assert installed_repository.list().value == (Bookmark(1, "http://a"), Bookmark(3, "http://c"))


def test_delete_is_idempotent(installed_repository):
    installed_repository.insert("http://a")
    assert installed_repository.delete(1).is_ok
    assert installed_repository.delete(1).is_ok
    assert installed_repository.delete("99").is_ok
    assert installed_repository.list().value == ()


def test_delete_with_non_integer_id(storage, installed_repository):
    storage.calls.clear()
    result = installed_repository.delete("abc")
    assert result.error.kind is ErrorKind.BIND_FAILED
    assert result.error.message == "Failed to delete bookmark: error binding id value."
    assert storage.calls == []


def test_operations_without_schema(repository):
    listed = repository.list()
    assert listed.error.kind is ErrorKind.QUERY_FAILED
    assert listed.error.message == "Failed to read bookmarks: error executing query."

    inserted = repository.insert("http://a")
    assert inserted.error.kind is ErrorKind.PREPARE_FAILED
    assert inserted.error.message == "Failed to add new bookmark: error preparing query."

    deleted = repository.delete(1)
    assert deleted.error.message == "Failed to delete bookmark: error preparing query."


def test_delete_with_out_of_range_id(installed_repository):
    result = installed_repository.delete("99999999999999999999")
    assert result.error.kind is ErrorKind.BIND_FAILED
    assert result.error.message == "Failed to delete bookmark: error binding id value."


def test_insert_with_unencodable_url(installed_repository):
    result = installed_repository.insert("http://a/\ud800")
    assert result.error.kind is ErrorKind.BIND_FAILED
    assert result.error.message == "Failed to add new bookmark: error binding url value."
    assert installed_repository.list().value == ()
