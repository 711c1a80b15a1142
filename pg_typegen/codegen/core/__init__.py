"""
Core code generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import CodeGenerator, GeneratorError, GenerationResult, generate_code
from .schema import (
    DatabaseSchema,
    TableDefinition,
    ColumnDefinition,
    ForeignKey,
    SchemaError,
    convert_schema_dump,
)
from .naming import NameSanitizer, NamingCase
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_code",
    # Schema model
    "DatabaseSchema",
    "TableDefinition",
    "ColumnDefinition",
    "ForeignKey",
    "SchemaError",
    "convert_schema_dump",
    # Naming utilities - language-agnostic
    "NameSanitizer",
    "NamingCase",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
