"""
Base generator interface for all code generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ...logging_config import get_logger
from .config import GeneratorConfig
from .schema import DatabaseSchema
from .templates import TemplateEngine, TemplateError, create_template_engine

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class CodeGenerator(ABC):
    """Abstract base class for all code generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        self._template_engine = create_template_engine(self.get_template_directory())

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'typescript')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.ts')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.

        Returns:
            Path to template directory or None
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def generate(
        self,
        schema: DatabaseSchema,
        tables: Optional[Iterable[str]] = None,
        excluded_tables: Optional[Iterable[str]] = None,
    ) -> str:
        """
        Generate code for a database schema.

        Args:
            schema: Tables and enums to generate code for
            tables: Raw names of the tables to include (default: all)
            excluded_tables: Raw names of tables to leave out

        Returns:
            Generated code as a string
        """
        pass

    def format_code(self, code: str) -> str:
        """
        Apply light whitespace cleanup to generated code.

        Args:
            code: Raw generated code

        Returns:
            Code without trailing whitespace or runs of more than two blank lines
        """
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines)

    def get_metadata(self) -> Dict[str, Any]:
        """Return metadata describing the last generate() call."""
        return {}

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template file name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self, code: str, warnings: List[str] = None, metadata: Dict[str, Any] = None
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="")
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator,
    schema: DatabaseSchema,
    tables: Optional[Iterable[str]] = None,
    excluded_tables: Optional[Iterable[str]] = None,
) -> GenerationResult:
    """
    Generate code using the specified generator with error handling.

    Args:
        generator: Code generator instance
        schema: Schema to generate code for
        tables: Raw names of the tables to include (default: all)
        excluded_tables: Raw names of tables to leave out

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    try:
        code = generator.generate(schema, tables, excluded_tables)
    except (GeneratorError, TemplateError) as e:
        logger.error("Code generation failed: %s", e, exc_info=True)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "schema_name": schema.schema_name,
        **generator.get_metadata(),
    }

    warnings = [
        f"Foreign key references table '{table}' which is not part of the output"
        for table in metadata.get("unresolved_references", [])
    ]

    return GenerationResult(code, warnings, metadata)
