import json

import pytest

from stayhub.domain.errors import StoreCorruptedError
from stayhub.domain.ports.persistence import BOOKINGS, COLLECTIONS, PROPERTIES, USERS
from stayhub.infrastructure.persistence.json_store import JsonFileRecordStore
from stayhub.infrastructure.persistence.sqlite import SQLiteRecordStore
from stayhub.infrastructure.repositories.booking_repository import BookingRepository


@pytest.fixture(params=["json", "sqlite"])
def any_store(request, tmp_path):
    if request.param == "json":
        record_store = JsonFileRecordStore(tmp_path / "data")
    else:
        record_store = SQLiteRecordStore(tmp_path / "data" / "stayhub.db")
    record_store.initialize()
    yield record_store
    record_store.close()


def test_unwritten_collection_reads_empty(tmp_path):
    record_store = JsonFileRecordStore(tmp_path / "never-initialised")
    assert record_store.read(BOOKINGS) == []


def test_initialize_creates_one_file_per_collection(tmp_path):
    data_dir = tmp_path / "data"
    JsonFileRecordStore(data_dir).initialize()
    for collection in COLLECTIONS:
        assert json.loads((data_dir / f"{collection}.json").read_text(encoding="utf-8")) == []


def test_initialize_keeps_existing_data(tmp_path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "users.json").write_text('[{"id": "u1"}]', encoding="utf-8")
    record_store = JsonFileRecordStore(data_dir)
    record_store.initialize()
    assert record_store.read(USERS) == [{"id": "u1"}]


def test_write_replaces_whole_collection_in_order(any_store):
    any_store.write(PROPERTIES, [{"id": "a", "title": "A"}, {"id": "b", "title": "B"}])
    any_store.write(PROPERTIES, [{"id": "c", "title": "C"}, {"id": "a", "title": "A2"}])
    assert any_store.read(PROPERTIES) == [{"id": "c", "title": "C"}, {"id": "a", "title": "A2"}]


def test_collections_are_independent(any_store):
    any_store.write(USERS, [{"id": "u1"}])
    assert any_store.read(BOOKINGS) == []


def test_unknown_collection_is_rejected(any_store):
    with pytest.raises(ValueError):
        any_store.read("reviews")
    with pytest.raises(ValueError):
        any_store.write("reviews", [])


def test_corrupt_file_is_surfaced_not_swallowed(tmp_path):
    data_dir = tmp_path / "data"
    record_store = JsonFileRecordStore(data_dir)
    record_store.initialize()
    (data_dir / "bookings.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(StoreCorruptedError):
        record_store.read(BOOKINGS)


def test_non_array_file_is_corrupt(tmp_path):
    data_dir = tmp_path / "data"
    record_store = JsonFileRecordStore(data_dir)
    record_store.initialize()
    (data_dir / "users.json").write_text('{"id": "u1"}', encoding="utf-8")
    with pytest.raises(StoreCorruptedError):
        record_store.read(USERS)


def test_write_leaves_no_temporary_files(tmp_path):
    data_dir = tmp_path / "data"
    record_store = JsonFileRecordStore(data_dir)
    record_store.initialize()
    record_store.write(USERS, [{"id": "u1"}])
    assert sorted(path.name for path in data_dir.iterdir()) == sorted(f"{name}.json" for name in COLLECTIONS)


def test_lock_is_reentrant(any_store):
    with any_store.lock(BOOKINGS):
        with any_store.lock(BOOKINGS):
            any_store.write(BOOKINGS, [{"id": "b1"}])
    assert any_store.read(BOOKINGS) == [{"id": "b1"}]


def test_undecodable_file_is_corrupt(tmp_path):
    data_dir = tmp_path / "data"
    record_store = JsonFileRecordStore(data_dir)
    record_store.initialize()
    (data_dir / "bookings.json").write_bytes(b"[\xff\xfe]")
    with pytest.raises(StoreCorruptedError):
        record_store.read(BOOKINGS)


def test_array_of_non_objects_is_corrupt(tmp_path):
    data_dir = tmp_path / "data"
    record_store = JsonFileRecordStore(data_dir)
    record_store.initialize()
    (data_dir / "bookings.json").write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(StoreCorruptedError):
        BookingRepository(record_store).list_all()


@pytest.mark.parametrize(
    "record",
    [
        {"id": "b1"},
        {"id": "b1", "propertyId": "p1", "userId": "u1", "checkIn": "someday",
         "checkOut": "2024-01-02", "createdAt": "2024-01-01"},
    ],
)
def test_malformed_record_is_reported_as_corruption(any_store, record):
    any_store.write(BOOKINGS, [record])
    repository = BookingRepository(any_store)
    with pytest.raises(StoreCorruptedError):
        repository.list_all()
    with pytest.raises(StoreCorruptedError):
        repository.get_by_id("b1")
