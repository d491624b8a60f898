"""Tests de los repositorios de Supabase contra un cliente falso."""

from types import SimpleNamespace

import pytest

from supabase import PostgrestAPIError

from vitrina.database.repositories import (
    SupabaseFilterPresetRepository,
    SupabaseListingRepository,
    SupabaseSavedRelationRepository,
)
from vitrina.errors import NotFoundError, StoreUnavailableError


class FakeQuery:
    """Query builder encadenable que registra las llamadas."""

    def __init__(self, data=None, errors=None):
        self.data = data if data is not None else []
        self.errors = list(errors or [])
        self.calls = []
        self.executions = 0

    def __getattr__(self, name):
        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self

        return method

    def execute(self):
        self.executions += 1
        if self.errors:
            raise self.errors.pop(0)
        return SimpleNamespace(data=self.data)


class FakeClient:
    def __init__(self, query: FakeQuery):
        self.query = query
        self.tables = []

    def table(self, name):
        self.tables.append(name)
        return self.query


LISTING_ROW = {
    "id": 7,
    "title": "Lake House",
    "description": "",
    "address": "123 Lake Street",
    "price": 750000,
    "property_type": "House",
    "bedrooms": 4,
    "bathrooms": 2.5,
    "square_feet": 2800,
    "year_built": None,
    "listed_date": "2024-03-01T10:00:00+00:00",
    "images": None,
    "features": ["Pool"],
    "coordinates": None,
}


@pytest.fixture(autouse=True)
def no_retry_wait(monkeypatch):
    monkeypatch.setattr("tenacity.nap.time.sleep", lambda seconds: None)


def _repo(cls, query, **kwargs):
    return cls(client=FakeClient(query), retry_attempts=kwargs.pop("retry_attempts", 1), **kwargs)


def test_get_all_orders_and_validates_rows():
    query = FakeQuery(data=[LISTING_ROW])
    repo = _repo(SupabaseListingRepository, query)

    listings = repo.get_all()

    assert listings[0].id == "7"
    assert listings[0].features == {"Pool"}
    assert listings[0].images == ()
    assert ("order", ("listed_date",), {"desc": True}) in query.calls
    assert repo.client.tables == ["listings"]


def test_custom_table_name():
    query = FakeQuery(data=[])
    repo = _repo(SupabaseSavedRelationRepository, query, table="bookmarks")

    assert repo.get_all() == []
    assert repo.client.tables == ["bookmarks"]


def test_get_by_id_missing_returns_none():
    repo = _repo(SupabaseListingRepository, FakeQuery(data=[]))
    assert repo.get_by_id("404") is None


def test_transport_error_becomes_store_unavailable():
    query = FakeQuery(errors=[ConnectionError("boom")])
    repo = _repo(SupabaseListingRepository, query)

    with pytest.raises(StoreUnavailableError) as exc_info:
        repo.get_all()

    assert exc_info.value.operation == "get_all"


def test_transient_error_is_retried():
    query = FakeQuery(data=[LISTING_ROW], errors=[ConnectionError("blip")])
    repo = _repo(SupabaseListingRepository, query, retry_attempts=3)

    assert len(repo.get_all()) == 1
    assert query.executions == 2


def test_update_unknown_id_raises_not_found():
    repo = _repo(SupabaseListingRepository, FakeQuery(data=[]))

    with pytest.raises(NotFoundError):
        repo.update("404", {"price": 1})


def test_delete_unknown_id_raises_not_found():
    repo = _repo(SupabaseFilterPresetRepository, FakeQuery(data=[]))

    with pytest.raises(NotFoundError):
        repo.delete("404")


def test_create_saved_relation_serializes_payload():
    row = {"id": 3, "property_id": 7, "saved_date": "2024-06-01T12:00:00+00:00", "notes": None}
    query = FakeQuery(data=[row])
    repo = _repo(SupabaseSavedRelationRepository, query)

    relation = repo.create({"propertyId": "7"})

    assert relation.id == "3"
    assert relation.property_id == "7"
    assert relation.notes == ""

    insert = next(call for call in query.calls if call[0] == "insert")
    payload = insert[1][0]
    assert payload["property_id"] == "7"
    assert isinstance(payload["saved_date"], str)
    assert "id" not in payload


def test_create_listing_payload_is_json_ready():
    query = FakeQuery(data=[LISTING_ROW])
    repo = _repo(SupabaseListingRepository, query)

    repo.create({"title": "Lake House", "propertyType": "House", "features": {"Pool", "Gym"}})

    payload = next(call for call in query.calls if call[0] == "insert")[1][0]
    assert payload["property_type"] == "House"
    assert payload["features"] == ["Gym", "Pool"]
    assert isinstance(payload["listed_date"], str)


class LostResponseTable:
    """Tabla falsa que aplica la escritura y pierde la respuesta una vez."""

    def __init__(self, rows):
        self.rows = list(rows)
        self.executions = 0
        self._pending = None

    def __getattr__(self, name):
        def method(*args, **kwargs):
            if name == "insert":
                self._pending = ("insert", args[0])
            elif name == "eq" and self._pending == ("delete", None):
                self._pending = ("delete", args[1])
            elif name == "delete":
                self._pending = ("delete", None)
            return self

        return method

    def execute(self):
        self.executions += 1
        kind, value = self._pending
        if kind == "insert":
            self.rows.append({**value, "id": len(self.rows) + 1})
        else:
            self.rows = [row for row in self.rows if str(row["id"]) != str(value)]
        if self.executions == 1:
            raise ConnectionError("respuesta perdida")
        return SimpleNamespace(data=[])


def test_create_is_not_repeated_after_lost_response():
    table = LostResponseTable([])
    repo = _repo(SupabaseSavedRelationRepository, table, retry_attempts=3)

    with pytest.raises(StoreUnavailableError) as exc_info:
        repo.create({"property_id": "7"})

    assert exc_info.value.operation == "create"
    assert table.executions == 1
    assert [row["property_id"] for row in table.rows] == ["7"]


def test_delete_is_not_repeated_after_lost_response():
    table = LostResponseTable([{"id": 1, "property_id": "7"}])
    repo = _repo(SupabaseSavedRelationRepository, table, retry_attempts=3)

    with pytest.raises(StoreUnavailableError):
        repo.delete("1")

    assert table.executions == 1
    assert table.rows == []


def test_update_runs_once():
    query = FakeQuery(data=[LISTING_ROW], errors=[ConnectionError("blip")])
    repo = _repo(SupabaseListingRepository, query, retry_attempts=3)

    with pytest.raises(StoreUnavailableError):
        repo.update("7", {"price": 1})
    assert query.executions == 1


def test_postgrest_error_on_read_is_not_retried():
    error = PostgrestAPIError({"message": "permission denied", "code": "42501"})
    query = FakeQuery(data=[LISTING_ROW], errors=[error])
    repo = _repo(SupabaseListingRepository, query, retry_attempts=3)

    with pytest.raises(StoreUnavailableError):
        repo.get_all()
    assert query.executions == 1
