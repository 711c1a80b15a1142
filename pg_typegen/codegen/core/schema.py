"""
Core schema representation for code generation.

Converts a database schema dump (as produced by an introspection step) into
the normalized internal format the generators work with.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class SchemaError(Exception):
    """Exception raised when a schema dump has the wrong structure."""

    pass


@dataclass(frozen=True)
class ForeignKey:
    """Reference from a column to a column of another table (raw names)."""

    table: str
    column: str


@dataclass
class ColumnDefinition:
    """Represents a single column of a table or view."""

    udt_name: Optional[str] = None  # Store-native type name, e.g. "int4"
    ts_type: Optional[str] = None  # Already-mapped target type, e.g. "number"
    nullable: bool = False
    has_default: bool = False
    comment: Optional[str] = None
    foreign_key: Optional[ForeignKey] = None


@dataclass
class TableDefinition:
    """Represents a table or view. Column order is declaration order."""

    columns: Dict[str, ColumnDefinition] = field(default_factory=dict)
    primary_key: Optional[str] = None
    is_view: bool = False
    is_updatable: bool = True
    comment: Optional[str] = None


@dataclass
class DatabaseSchema:
    """All tables and enumerations of one database schema."""

    schema_name: str
    tables: Dict[str, TableDefinition] = field(default_factory=dict)
    enums: Dict[str, List[str]] = field(default_factory=dict)


def _expect_mapping(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaError(f"Expected an object for {what}, got {type(value).__name__}")
    return value


def convert_column(column_data: Dict[str, Any], context: str) -> ColumnDefinition:
    """Convert one column entry of a schema dump."""
    column_data = _expect_mapping(column_data, context)

    foreign_key = None
    fk_data = column_data.get("foreignKey")
    if fk_data:
        fk_data = _expect_mapping(fk_data, f"{context}.foreignKey")
        try:
            foreign_key = ForeignKey(table=fk_data["table"], column=fk_data["column"])
        except KeyError as e:
            raise SchemaError(f"Foreign key of {context} is missing {e}") from e

    return ColumnDefinition(
        udt_name=column_data.get("udtName"),
        ts_type=column_data.get("tsType"),
        nullable=bool(column_data.get("nullable", False)),
        has_default=bool(column_data.get("hasDefault", False)),
        comment=column_data.get("comment"),
        foreign_key=foreign_key,
    )


def convert_table(table_data: Dict[str, Any], table_name: str) -> TableDefinition:
    """Convert one table entry of a schema dump."""
    table_data = _expect_mapping(table_data, f"table '{table_name}'")
    columns_data = _expect_mapping(
        table_data.get("columns", {}), f"columns of table '{table_name}'"
    )

    columns = {
        column_name: convert_column(column_data, f"{table_name}.{column_name}")
        for column_name, column_data in columns_data.items()
    }

    is_view = bool(table_data.get("isView", False))
    return TableDefinition(
        columns=columns,
        primary_key=table_data.get("primaryKey"),
        is_view=is_view,
        is_updatable=bool(table_data.get("isUpdatable", not is_view)),
        comment=table_data.get("comment"),
    )


def convert_schema_dump(data: Any, schema_name: Optional[str] = None) -> DatabaseSchema:
    """
    Convert a schema dump to the internal DatabaseSchema representation.

    Args:
        data: Parsed JSON document with ``schemaName``, ``tables`` and ``enums``
        schema_name: Overrides the dump's ``schemaName`` when given

    Returns:
        DatabaseSchema with tables and enums in document order

    Raises:
        SchemaError: If the document does not have the expected structure
    """
    data = _expect_mapping(data, "schema dump")
    tables_data = _expect_mapping(data.get("tables", {}), "tables")
    enums_data = _expect_mapping(data.get("enums", {}), "enums")

    enums = {}
    for enum_name, values in enums_data.items():
        if not isinstance(values, list):
            raise SchemaError(f"Values of enum '{enum_name}' must be a list")
        enums[enum_name] = [str(value) for value in values]

    return DatabaseSchema(
        schema_name=schema_name or data.get("schemaName") or "public",
        tables={
            table_name: convert_table(table_data, table_name)
            for table_name, table_data in tables_data.items()
        },
        enums=enums,
    )
