import json

import pytest
import requests

from pg_typegen.codegen.core.schema import (
    DatabaseSchema,
    ForeignKey,
    SchemaError,
    convert_schema_dump,
)
from pg_typegen.utils import SchemaLoaderError, load_schema


class FakeResponse:
    def __init__(self, data=None, status_code=200, text=None):
        self._data = data
        self.status_code = status_code
        self._text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self._text is not None:
            return json.loads(self._text)
        return self._data


def test_convert_schema_dump(blog_schema):
    assert blog_schema.schema_name == "public"
    assert list(blog_schema.tables) == ["users", "comments", "active_users"]
    assert blog_schema.enums == {"mood": ["happy", "sad"]}

    users = blog_schema.tables["users"]
    assert list(users.columns) == ["id", "name", "pinned_comment_id", "mood"]
    assert users.primary_key == "id"
    assert users.columns["id"].has_default
    assert users.columns["mood"].nullable
    assert users.columns["pinned_comment_id"].foreign_key == ForeignKey(
        table="comments", column="id"
    )
    assert users.columns["name"].foreign_key is None

    view = blog_schema.tables["active_users"]
    assert view.is_view
    assert not view.is_updatable


def test_column_defaults():
    schema = convert_schema_dump({"tables": {"t": {"columns": {"c": {}}}}})

    column = schema.tables["t"].columns["c"]
    assert column.udt_name is None
    assert column.ts_type is None
    assert not column.nullable
    assert not column.has_default
    assert column.comment is None
    assert column.foreign_key is None


def test_schema_name_resolution():
    assert convert_schema_dump({}).schema_name == "public"
    assert convert_schema_dump({"schemaName": "blog"}).schema_name == "blog"
    assert convert_schema_dump({"schemaName": "blog"}, "audit").schema_name == "audit"


def test_updatable_defaults_to_not_view():
    schema = convert_schema_dump(
        {"tables": {"t": {"columns": {}}, "v": {"columns": {}, "isView": True}}}
    )

    assert schema.tables["t"].is_updatable
    assert not schema.tables["v"].is_updatable


def test_tables_and_columns_keep_document_order():
    schema = convert_schema_dump(
        {"tables": {"zeta": {"columns": {"b": {}, "a": {}}}, "alpha": {"columns": {}}}}
    )

    assert list(schema.tables) == ["zeta", "alpha"]
    assert list(schema.tables["zeta"].columns) == ["b", "a"]


def test_enum_values_are_strings():
    schema = convert_schema_dump({"enums": {"level": [1, "two"]}})

    assert schema.enums == {"level": ["1", "two"]}


@pytest.mark.parametrize(
    "dump, message",
    [
        ([], "schema dump"),
        ({"tables": []}, "tables"),
        ({"tables": {"t": "nope"}}, "table 't'"),
        ({"tables": {"t": {"columns": {"c": 5}}}}, "t.c"),
        ({"enums": {"mood": "happy"}}, "enum 'mood'"),
        (
            {"tables": {"t": {"columns": {"c": {"foreignKey": {"table": "u"}}}}}},
            "missing 'column'",
        ),
    ],
)
def test_malformed_dumps(dump, message):
    with pytest.raises(SchemaError, match=message):
        convert_schema_dump(dump)


def test_load_schema_from_file(blog_dump_file):
    source, schema = load_schema(file_path=blog_dump_file)

    assert source == str(blog_dump_file)
    assert isinstance(schema, DatabaseSchema)
    assert list(schema.tables) == ["users", "comments", "active_users"]


def test_load_schema_overrides_schema_name(blog_dump_file):
    _, schema = load_schema(file_path=blog_dump_file, schema_name="blog")

    assert schema.schema_name == "blog"


def test_load_missing_file(tmp_path):
    with pytest.raises(SchemaLoaderError, match="not found"):
        load_schema(file_path=tmp_path / "missing.json")


def test_load_invalid_json_file(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text("{oops")

    with pytest.raises(SchemaLoaderError, match="not valid JSON"):
        load_schema(file_path=path)


def test_load_malformed_dump(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps({"tables": ["users"]}))

    with pytest.raises(SchemaError, match="tables"):
        load_schema(file_path=path)


def test_load_requires_exactly_one_source(blog_dump_file):
    with pytest.raises(SchemaLoaderError, match="Exactly one"):
        load_schema()

    with pytest.raises(SchemaLoaderError, match="Exactly one"):
        load_schema(file_path=blog_dump_file, url="https://example.com/schema.json")


def test_load_schema_from_url(monkeypatch, blog_dump):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse(blog_dump)

    monkeypatch.setattr("pg_typegen.utils.requests.get", fake_get)

    source, schema = load_schema(url="https://example.com/schema", timeout=5)

    assert source == "https://example.com/schema"
    assert schema.enums == {"mood": ["happy", "sad"]}
    assert calls == [("https://example.com/schema", 5)]


@pytest.mark.parametrize("url", ["not-a-url", "ftp://example.com/schema.json"])
def test_load_invalid_url(url):
    with pytest.raises(SchemaLoaderError, match="Invalid schema dump URL"):
        load_schema(url=url)


def test_load_url_http_error(monkeypatch):
    monkeypatch.setattr(
        "pg_typegen.utils.requests.get",
        lambda url, timeout: FakeResponse(status_code=404),
    )

    with pytest.raises(SchemaLoaderError, match="HTTP error 404"):
        load_schema(url="https://example.com/schema.json")


def test_load_url_timeout(monkeypatch):
    def fake_get(url, timeout):
        raise requests.exceptions.Timeout()

    monkeypatch.setattr("pg_typegen.utils.requests.get", fake_get)

    with pytest.raises(SchemaLoaderError, match="Timed out"):
        load_schema(url="https://example.com/schema.json")


def test_load_url_connection_error(monkeypatch):
    def fake_get(url, timeout):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr("pg_typegen.utils.requests.get", fake_get)

    with pytest.raises(SchemaLoaderError, match="Cannot fetch"):
        load_schema(url="https://example.com/schema.json")


def test_load_url_invalid_json(monkeypatch):
    monkeypatch.setattr(
        "pg_typegen.utils.requests.get",
        lambda url, timeout: FakeResponse(text="<html>"),
    )

    with pytest.raises(SchemaLoaderError, match="not valid JSON"):
        load_schema(url="https://example.com/schema")
