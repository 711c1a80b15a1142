import json

import pytest

from pg_typegen.codegen.core.config import GeneratorConfig
from pg_typegen.codegen.core.schema import (
    ColumnDefinition,
    ForeignKey,
    TableDefinition,
    convert_schema_dump,
)


@pytest.fixture
def config():
    return GeneratorConfig()


@pytest.fixture
def table_with_foreign_key():
    return TableDefinition(
        columns={
            "id": ColumnDefinition(udt_name="varchar", ts_type="string"),
            "user_id": ColumnDefinition(
                udt_name="char",
                ts_type="string",
                foreign_key=ForeignKey(table="other_table", column="id"),
            ),
            "sentiment": ColumnDefinition(udt_name="char", ts_type="string"),
        },
        primary_key="id",
    )


@pytest.fixture
def blog_dump():
    """Schema dump with a users <-> comments cycle, a view and an enum."""
    return {
        "schemaName": "public",
        "tables": {
            "users": {
                "columns": {
                    "id": {"udtName": "int4", "nullable": False, "hasDefault": True},
                    "name": {"udtName": "text", "nullable": False, "hasDefault": False},
                    "pinned_comment_id": {
                        "udtName": "int4",
                        "nullable": True,
                        "hasDefault": False,
                        "foreignKey": {"table": "comments", "column": "id"},
                    },
                    "mood": {"udtName": "mood", "nullable": True, "hasDefault": False},
                },
                "primaryKey": "id",
                "isView": False,
                "isUpdatable": True,
            },
            "comments": {
                "columns": {
                    "id": {"udtName": "int4", "nullable": False, "hasDefault": True},
                    "author_id": {
                        "udtName": "int4",
                        "nullable": False,
                        "hasDefault": False,
                        "foreignKey": {"table": "users", "column": "id"},
                    },
                    "body": {"udtName": "text", "nullable": False, "hasDefault": False},
                    "created_at": {
                        "udtName": "timestamptz",
                        "nullable": False,
                        "hasDefault": True,
                    },
                },
                "primaryKey": "id",
                "isView": False,
                "isUpdatable": True,
            },
            "active_users": {
                "columns": {
                    "id": {"udtName": "int4", "nullable": True, "hasDefault": False},
                    "name": {"udtName": "text", "nullable": True, "hasDefault": False},
                },
                "primaryKey": None,
                "isView": True,
                "isUpdatable": False,
            },
        },
        "enums": {"mood": ["happy", "sad"]},
    }


@pytest.fixture
def blog_schema(blog_dump):
    return convert_schema_dump(blog_dump)


@pytest.fixture
def blog_dump_file(tmp_path, blog_dump):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(blog_dump), encoding="utf-8")
    return path
