"""
TypeScript type system for code generation.

Resolves the emitted type of a column: the already-mapped type or the
PostgreSQL udt fallback, the optional comment-annotation override and
nullability.
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from ...core.config import GeneratorConfig
from ...core.schema import ColumnDefinition
from .naming import transform_enum_name

# Base type of JSON/JSONB columns; an annotation hook may narrow it
JSON_TYPE = "Json"

UNKNOWN_TYPE = "unknown"

UDT_TYPE_MAP: Dict[str, str] = {
    **dict.fromkeys(
        [
            "bpchar",
            "char",
            "varchar",
            "text",
            "citext",
            "uuid",
            "bytea",
            "inet",
            "time",
            "timetz",
            "interval",
            "name",
        ],
        "string",
    ),
    **dict.fromkeys(
        ["int2", "int4", "int8", "float4", "float8", "numeric", "money", "oid"],
        "number",
    ),
    "bool": "boolean",
    "json": JSON_TYPE,
    "jsonb": JSON_TYPE,
}

DATE_UDT_NAMES = frozenset({"date", "timestamp", "timestamptz"})

JSDOC_TYPE_RE = re.compile(r"@type \{([^}]+)\}")

AnnotationHook = Callable[[str, Optional[str]], Optional[str]]


def jsdoc_type_annotation(base_type: str, comment: Optional[str]) -> Optional[str]:
    """
    Read an ``@type {Name}`` annotation from a JSON column's comment.

    Returns:
        The annotated type name, or None when the column is not JSON or
        carries no annotation
    """
    if base_type != JSON_TYPE or not comment:
        return None
    match = JSDOC_TYPE_RE.search(comment)
    if not match:
        return None
    return match.group(1).strip()


@dataclass(frozen=True)
class TsType:
    """A column's resolved TypeScript type."""

    name: str  # Without nullability, e.g. "string" or an imported type
    nullable: bool = False
    import_name: Optional[str] = None  # Type that must be imported, if any

    @property
    def declaration(self) -> str:
        """Type as written in an interface member."""
        return f"{self.name} | null" if self.nullable else self.name


class TypeMapper:
    """Maps column definitions to TypeScript types."""

    def __init__(
        self,
        config: GeneratorConfig,
        enum_names: Optional[Iterable[str]] = None,
        annotation_hook: Optional[AnnotationHook] = jsdoc_type_annotation,
    ):
        """
        Initialize type mapper.

        Args:
            config: Generator options
            enum_names: Raw enum names known to the schema, for udt fallback
            annotation_hook: Override hook applied when json_types_file is set
        """
        self.config = config
        self.enum_names = frozenset(enum_names or ())
        self.annotation_hook = annotation_hook

    def map_udt_type(self, udt_name: Optional[str]) -> str:
        """Map a PostgreSQL udt name to a TypeScript type name."""
        if not udt_name:
            return UNKNOWN_TYPE

        if udt_name.startswith("_"):
            return f"{self.map_udt_type(udt_name[1:])}[]"

        if udt_name in DATE_UDT_NAMES:
            return "string" if self.config.dates_as_strings else "Date"

        if udt_name in self.enum_names:
            return transform_enum_name(udt_name, self.config)

        return UDT_TYPE_MAP.get(udt_name, UNKNOWN_TYPE)

    def base_type(self, column: ColumnDefinition) -> str:
        """Type before overrides and nullability."""
        if column.ts_type:
            return column.ts_type
        return self.map_udt_type(column.udt_name)

    def map_column(self, column: ColumnDefinition) -> TsType:
        """Resolve the emitted type of a column."""
        base = self.base_type(column)

        if self.config.json_types_file and self.annotation_hook is not None:
            override = self.annotation_hook(base, column.comment)
            if override:
                return TsType(name=override, nullable=column.nullable, import_name=override)

        return TsType(name=base, nullable=column.nullable)

    @staticmethod
    def is_insert_optional(column: ColumnDefinition) -> bool:
        """A column may be omitted on insert when it is nullable or has a default."""
        return column.nullable or column.has_default
