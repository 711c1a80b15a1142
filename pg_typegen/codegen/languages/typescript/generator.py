"""
TypeScript code generator implementation.

Generates, per table, a read-shape interface, a write-shape interface and a
runtime descriptor constant, plus string-literal union types for enums.
"""

from pathlib import Path
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Set

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator
from ...core.schema import DatabaseSchema, TableDefinition
from .joins import (
    JoinResolver,
    NameRegistry,
    TableNames,
    forward_reference,
    unresolved_tables,
)
from .naming import (
    create_typescript_sanitizer,
    qualify_table_name,
    transform_column_name,
    transform_enum_name,
    transform_type_name,
)
from .types import TypeMapper

logger = get_logger(__name__)


class TableDeclaration(NamedTuple):
    """Result of generating one table."""

    code: str
    names: TableNames
    types_to_import: Set[str]
    is_updatable: bool


# Template filters


def ts_string(value: str) -> str:
    """Single-quoted TypeScript string literal."""
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def ts_array(values: Iterable[str]) -> str:
    return "[" + ", ".join(ts_string(value) for value in values) + "]"


def ts_nullable(value: Optional[str]) -> str:
    return "null" if value is None else ts_string(value)


def ts_union(values: List[str]) -> str:
    """Union of string literals; an enum without values has no inhabitants."""
    if not values:
        return "never"
    return " | ".join(ts_string(value) for value in values)


class TypeScriptGenerator(CodeGenerator):
    """Code generator for TypeScript table interfaces and descriptors."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize TypeScript generator with configuration."""
        super().__init__(config)

        self.sanitizer = create_typescript_sanitizer(self.config)

        self.template_engine.add_filter("ts_string", ts_string)
        self.template_engine.add_filter("ts_array", ts_array)
        self.template_engine.add_filter("ts_nullable", ts_nullable)
        self.template_engine.add_filter("ts_union", ts_union)
        self.template_engine.add_filter("forward_reference", forward_reference)

        # State of the last generate() call
        self._metadata: Dict[str, Any] = {}

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "typescript"

    @property
    def file_extension(self) -> str:
        """Return TypeScript file extension."""
        return ".ts"

    def get_template_directory(self) -> Path:
        """Return the TypeScript templates directory."""
        return Path(__file__).parent / "templates"

    def get_metadata(self) -> Dict[str, Any]:
        return dict(self._metadata)

    def generate(
        self,
        schema: DatabaseSchema,
        tables: Optional[Iterable[str]] = None,
        excluded_tables: Optional[Iterable[str]] = None,
    ) -> str:
        """Generate the complete TypeScript module for a schema."""
        selected = self.select_tables(schema, tables, excluded_tables)
        logger.info(
            "Generating %d of %d tables from schema '%s'",
            len(selected),
            len(schema.tables),
            schema.schema_name,
        )

        type_mapper = TypeMapper(self.config, schema.enums)
        registry = NameRegistry()
        declarations: List[TableDeclaration] = []
        types_to_import: Set[str] = set()

        for table_name in selected:
            declaration = self.generate_table_interface(
                table_name,
                schema.tables[table_name],
                schema.schema_name,
                type_mapper,
            )
            registry.register(table_name, declaration.names)
            declarations.append(declaration)
            types_to_import |= declaration.types_to_import

        # Every table is registered before any reference is resolved
        resolver = JoinResolver(registry.freeze())
        tables_code = resolver.resolve("".join(d.code for d in declarations))

        unresolved = unresolved_tables(tables_code)
        if unresolved:
            logger.debug(
                "Foreign keys reference tables outside the output: %s",
                ", ".join(unresolved),
            )

        parts = []
        if self.config.write_header:
            parts.append(self._render_header(types_to_import))

        enums_code = self.generate_enum_type(schema.enums)
        if enums_code:
            parts.append(enums_code)

        if declarations:
            parts.append(tables_code)
            parts.append(self._render_footer(declarations))

        self._metadata = {
            "table_count": sum(1 for name in selected if not schema.tables[name].is_view),
            "view_count": sum(1 for name in selected if schema.tables[name].is_view),
            "enum_count": len(schema.enums),
            "types_to_import": sorted(types_to_import),
            "unresolved_references": unresolved,
        }

        code = "\n\n".join(part.strip("\n") for part in parts) + "\n"
        return self.format_code(code)

    def select_tables(
        self,
        schema: DatabaseSchema,
        tables: Optional[Iterable[str]] = None,
        excluded_tables: Optional[Iterable[str]] = None,
    ) -> List[str]:
        """
        Raw names of the tables to generate, in output order.

        Explicitly requested tables keep the requested order; otherwise the
        schema's order is used. Excluded tables are always dropped.
        """
        excluded = set(excluded_tables or ())
        requested = list(tables or ())

        if not requested:
            return [name for name in schema.tables if name not in excluded]

        selected = []
        for name in requested:
            if name not in schema.tables:
                logger.warning("Table '%s' not found in schema '%s'", name, schema.schema_name)
                continue
            if name not in excluded and name not in selected:
                selected.append(name)
        return selected

    def generate_table_interface(
        self,
        table_name: str,
        table: TableDefinition,
        schema_name: str,
        type_mapper: Optional[TypeMapper] = None,
    ) -> TableDeclaration:
        """
        Generate the declarations for one table.

        Foreign keys are emitted with forward-reference markers naming the raw
        referenced table; JoinResolver fills them in once every table is known.

        Args:
            table_name: Raw table name
            table: Table definition
            schema_name: Schema the table lives in
            type_mapper: Shared mapper (one is created from the config if omitted)

        Returns:
            TableDeclaration with code, names, types to import and updatability
        """
        if type_mapper is None:
            type_mapper = TypeMapper(self.config)

        sql_name, identifier_base = qualify_table_name(table_name, schema_name, self.config)
        type_name = transform_type_name(identifier_base, self.config)
        names = TableNames(
            var=self.sanitizer.safe_symbol_name(identifier_base),
            type=type_name,
            input=type_name + "Input",
        )

        members = []
        columns = []
        required_for_insert = []
        foreign_keys = {}
        types_to_import = set()

        for column_name_raw, column in table.columns.items():
            column_name = transform_column_name(column_name_raw, self.config)
            ts_type = type_mapper.map_column(column)
            if ts_type.import_name:
                types_to_import.add(ts_type.import_name)

            members.append(
                {
                    "name": column_name,
                    "type": ts_type.declaration,
                    "optional": type_mapper.is_insert_optional(column),
                    "comment": column.comment,
                }
            )

            columns.append(column_name)
            if not type_mapper.is_insert_optional(column):
                required_for_insert.append(column_name)
            if column.foreign_key is not None:
                foreign_keys[column_name] = column.foreign_key

        context = {
            "names": names,
            "sql_name": sql_name,
            "is_view": table.is_view,
            "is_updatable": table.is_updatable,
            "comment": table.comment,
            "members": members,
            "columns": columns,
            "required_for_insert": required_for_insert,
            "primary_key": table.primary_key,
            "foreign_keys": foreign_keys,
        }

        code = self.render_template("table.ts.j2", context)
        return TableDeclaration(
            "\n" + code + "\n", names, types_to_import, table.is_updatable
        )

    def generate_enum_type(self, enums: Dict[str, List[str]]) -> str:
        """
        Generate string-literal union types, one line per enum.

        Returns:
            Declarations, each terminated by a newline; "" when there are no enums
        """
        if not enums:
            return ""

        context = {
            "enums": [
                {"name": transform_enum_name(name, self.config), "members": values}
                for name, values in enums.items()
            ]
        }
        return self.render_template("enums.ts.j2", context)

    def _render_header(self, types_to_import: Set[str]) -> str:
        imports = sorted(types_to_import) if self.config.json_types_file else []
        return self.render_template(
            "header.ts.j2",
            {"imports": imports, "json_types_file": self.config.json_types_file},
        )

    def _render_footer(self, declarations: List[TableDeclaration]) -> str:
        return self.render_template(
            "footer.ts.j2",
            {
                "tables": [
                    {"names": d.names, "is_updatable": d.is_updatable}
                    for d in declarations
                ]
            },
        )


# Factory functions


def create_typescript_generator(config: Optional[GeneratorConfig] = None) -> TypeScriptGenerator:
    """Create a TypeScript generator with the given or default configuration."""
    return TypeScriptGenerator(config or GeneratorConfig())


def generate_table_interface(
    table_name: str,
    table: TableDefinition,
    schema_name: str,
    config: Optional[GeneratorConfig] = None,
) -> TableDeclaration:
    """Generate one table's declarations with unresolved foreign-key markers."""
    return create_typescript_generator(config).generate_table_interface(
        table_name, table, schema_name
    )


def generate_enum_type(
    enums: Dict[str, List[str]], config: Optional[GeneratorConfig] = None
) -> str:
    """Generate union types for an enum-name -> values mapping."""
    return create_typescript_generator(config).generate_enum_type(enums)
