"""
TypeScript-specific naming utilities.

Handles reserved identifiers, column/type name transforms and schema
qualification of table names.
"""

from typing import Optional, Tuple

from ...core.config import DEFAULT_RESERVED_WORDS, GeneratorConfig
from ...core.naming import NameSanitizer, NamingCase

# Identifiers that would clash with the generated module's symbols
TYPESCRIPT_RESERVED_WORDS = DEFAULT_RESERVED_WORDS


def create_typescript_sanitizer(config: Optional[GeneratorConfig] = None) -> NameSanitizer:
    """Create a name sanitizer configured for TypeScript."""
    if config is None:
        return NameSanitizer(TYPESCRIPT_RESERVED_WORDS)
    return NameSanitizer(config.reserved_words, config.reserved_suffix)


def is_reserved(name: str, config: Optional[GeneratorConfig] = None) -> bool:
    return create_typescript_sanitizer(config).is_reserved(name)


def safe_symbol_name(name: str, config: Optional[GeneratorConfig] = None) -> str:
    """'package' -> 'package_'; anything not reserved is returned unchanged."""
    return create_typescript_sanitizer(config).safe_symbol_name(name)


def transform_column_name(name: str, config: GeneratorConfig) -> str:
    """Column names are kept verbatim unless camel_case is set."""
    if not config.camel_case:
        return name
    return NameSanitizer().convert_case(name, NamingCase.CAMEL_CASE)


def transform_type_name(name: str, config: GeneratorConfig) -> str:
    """Type names are always PascalCase, singularized when configured."""
    return NameSanitizer().to_pascal_case(name, singularize=config.singularize)


def transform_enum_name(name: str, config: GeneratorConfig) -> str:
    """
    Enum type names keep the database spelling unless camel_case is set,
    in which case they are PascalCase. They are never singularized.
    """
    if not config.camel_case:
        return name
    return NameSanitizer().convert_case(name, NamingCase.PASCAL_CASE)


def qualify_table_name(
    table_name: str, schema_name: str, config: GeneratorConfig
) -> Tuple[str, str]:
    """
    Return (SQL-visible name, identifier base) for a table.

    With prefix_with_schema_names: ("schema.table", "schema_table").
    """
    if config.prefix_with_schema_names:
        return f"{schema_name}.{table_name}", f"{schema_name}_{table_name}"
    return table_name, table_name
