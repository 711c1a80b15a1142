"""
TypeScript code generator module.

Generates table interfaces, runtime table descriptors and enum union types
from a database schema.
"""

from .generator import (
    TableDeclaration,
    TypeScriptGenerator,
    create_typescript_generator,
    generate_enum_type,
    generate_table_interface,
)
from .joins import (
    JoinResolver,
    NameRegistry,
    TableNames,
    attach_join_types,
    forward_reference,
    unresolved_tables,
)
from .naming import (
    create_typescript_sanitizer,
    is_reserved,
    safe_symbol_name,
    transform_column_name,
    transform_enum_name,
    transform_type_name,
)
from .types import JSON_TYPE, TsType, TypeMapper, jsdoc_type_annotation

__all__ = [
    "TypeScriptGenerator",
    "TableDeclaration",
    "create_typescript_generator",
    "generate_table_interface",
    "generate_enum_type",
    # Cross-table references
    "JoinResolver",
    "NameRegistry",
    "TableNames",
    "attach_join_types",
    "forward_reference",
    "unresolved_tables",
    # Naming
    "create_typescript_sanitizer",
    "is_reserved",
    "safe_symbol_name",
    "transform_column_name",
    "transform_enum_name",
    "transform_type_name",
    # Types
    "JSON_TYPE",
    "TsType",
    "TypeMapper",
    "jsdoc_type_annotation",
]
