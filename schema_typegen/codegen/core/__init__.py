"""
Core type generation components.

Provides base classes and utilities used by all language generators.
"""

from .generator import (
    CodeGenerator,
    EmissionUnit,
    GenerationResult,
    GeneratorError,
    SchemaContractError,
    generate_code,
)
from .schema import Binding, ElementType, PropertyNode, TypeNode, build_type_node
from .graph import TypeGraph, build_type_graph
from .valuesets import ValueSetResolver
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "EmissionUnit",
    "GenerationResult",
    "GeneratorError",
    "SchemaContractError",
    "generate_code",
    # Schema model
    "Binding",
    "ElementType",
    "PropertyNode",
    "TypeNode",
    "build_type_node",
    "TypeGraph",
    "build_type_graph",
    # Enumerations
    "ValueSetResolver",
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
