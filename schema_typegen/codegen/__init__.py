"""
Type Generation Module

Generates type declarations from a normalized schema index and an
enumeration corpus.
"""

from typing import Any, Dict, Mapping, Optional, Union

from .registry import (
    GeneratorRegistry,
    RegistryError,
    create_default_registry,
    get_generator,
    get_language_info,
    list_supported_languages,
)
from .core.generator import (
    CodeGenerator,
    EmissionUnit,
    GenerationResult,
    GeneratorError,
    SchemaContractError,
    generate_code,
)
from .core.config import ConfigError, ConfigManager, GeneratorConfig, load_config


def generate_types(
    schema_index: Mapping[str, Dict[str, Any]],
    value_sets: Optional[Mapping[str, Dict[str, Any]]] = None,
    config: Optional[Union[GeneratorConfig, Dict[str, Any]]] = None,
    language: str = "typescript",
) -> GenerationResult:
    """
    Generate declarations for a schema index.

    Args:
        schema_index: Mapping of type name to normalized schema record
        value_sets: Mapping of enumeration URL to CodeSystem/ValueSet resource
        config: Generator configuration object or dict overrides
        language: Target language name

    Returns:
        GenerationResult with the rendered units
    """
    generator = get_generator(language, config)
    return generate_code(generator, schema_index, value_sets)


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "create_default_registry",
    "CodeGenerator",
    "EmissionUnit",
    "GenerationResult",
    "GeneratorError",
    "SchemaContractError",
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    "generate_code",
    "generate_types",
    "get_generator",
    "get_language_info",
    "list_supported_languages",
]
