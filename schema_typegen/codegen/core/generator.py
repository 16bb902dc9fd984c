"""
Base generator interface for all type generation targets.

Defines the contract that all language generators must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .config import GeneratorConfig, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine


class GeneratorError(Exception):
    """Base exception for type generation errors."""

    pass


class SchemaContractError(GeneratorError):
    """The schema corpus breaks a convention the generator relies on."""

    pass


@dataclass(frozen=True)
class EmissionUnit:
    """One rendered output file."""

    file_name: str
    content: str
    imports: Tuple[str, ...] = ()
    declared: Tuple[str, ...] = ()


class CodeGenerator(ABC):
    """Abstract base class for all type generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or load_config(self.language_name)
        self._template_engine = None

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'typescript')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.d.ts')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._template_engine = create_template_engine(self.get_template_directory())
        return self._template_engine

    @abstractmethod
    def generate(
        self,
        schema_index: Mapping[str, Dict[str, Any]],
        value_sets: Optional[Mapping[str, Dict[str, Any]]] = None,
    ) -> List[EmissionUnit]:
        """
        Generate every output unit for a schema index.

        Args:
            schema_index: Mapping of type name to normalized schema record
            value_sets: Mapping of enumeration URL to CodeSystem/ValueSet

        Returns:
            Rendered units, ordered by file name
        """
        pass

    def validate_schemas(self, schema_index: Mapping[str, Dict[str, Any]]) -> List[str]:
        """
        Validate the schema index for basic structural issues.

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for name, record in schema_index.items():
            if not record.get("properties"):
                warnings.append(f"Schema '{name}' has no properties - skipped")

            parent = record.get("parentType")
            if parent and parent not in schema_index:
                warnings.append(f"Schema '{name}' has unknown parent type '{parent}'")

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Strips trailing whitespace, collapses consecutive blank lines and
        ends the text with exactly one line ending.
        """
        lines = code.split("\n")
        formatted_lines = []
        previous_blank = True

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                if not previous_blank:
                    formatted_lines.append("")
                previous_blank = True
            else:
                previous_blank = False
                formatted_lines.append(stripped)

        while formatted_lines and not formatted_lines[-1]:
            formatted_lines.pop()

        ending = self.config.line_ending
        return ending.join(formatted_lines) + ending

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        units: List[EmissionUnit],
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            units: Rendered output units
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
        """
        self.units = units
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @property
    def files(self) -> Dict[str, str]:
        """Mapping of file name to content."""
        return {unit.file_name: unit.content for unit in self.units}

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(units=[])
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(
    generator: CodeGenerator,
    schema_index: Mapping[str, Dict[str, Any]],
    value_sets: Optional[Mapping[str, Dict[str, Any]]] = None,
) -> GenerationResult:
    """
    Generate output using the specified generator with error handling.

    Returns:
        GenerationResult with units, warnings, and metadata
    """
    try:
        warnings = generator.validate_schemas(schema_index)
        units = generator.generate(schema_index, value_sets)

        metadata = {
            "language": generator.language_name,
            "file_extension": generator.file_extension,
            "schema_count": len(schema_index),
            "file_count": len(units),
        }
        metadata.update(getattr(generator, "last_run_metadata", {}))

        return GenerationResult(units, warnings, metadata)

    except (GeneratorError, TemplateError, KeyError, ValueError, TypeError) as e:
        return GenerationResult.error(f"Type generation failed: {e}", exception=e)
