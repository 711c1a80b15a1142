"""
pg-typegen Code Generation Module

Generates typed declarations from database schema dumps.
"""

from .core.generator import CodeGenerator, GenerationResult, GeneratorError, generate_code
from .core.schema import DatabaseSchema, convert_schema_dump
from .core.config import GeneratorConfig, ConfigError, load_config
from .languages.typescript import TypeScriptGenerator, create_typescript_generator


def generate_from_dump(schema_dump, config=None, schema_name=None):
    """
    Generate TypeScript from a parsed schema dump.

    Args:
        schema_dump: Parsed JSON document describing tables and enums
        config: GeneratorConfig, or a dict of overrides
        schema_name: Overrides the dump's schema name

    Returns:
        GenerationResult with generated code
    """
    if not isinstance(config, GeneratorConfig):
        config = load_config(custom_config=config)

    schema = convert_schema_dump(schema_dump, schema_name)
    generator = create_typescript_generator(config)
    return generate_code(generator, schema, config.tables, config.excluded_tables)


__all__ = [
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "DatabaseSchema",
    "GeneratorConfig",
    "ConfigError",
    "TypeScriptGenerator",
    "convert_schema_dump",
    "create_typescript_generator",
    "generate_code",
    "generate_from_dump",
    "load_config",
]
