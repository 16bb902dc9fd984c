"""
Schema-driven type declaration generator.

Reads a normalized schema index and an enumeration corpus and writes one
declaration file per type, plus the index, union and discriminator files.
"""

from .codegen import (
    GenerationResult,
    GeneratorConfig,
    GeneratorError,
    SchemaContractError,
    generate_types,
    get_generator,
    list_supported_languages,
    load_config,
)
from .utils import load_schema_index, load_value_sets, write_units

__version__ = "0.1.0"

__all__ = [
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "SchemaContractError",
    "generate_types",
    "get_generator",
    "list_supported_languages",
    "load_config",
    "load_schema_index",
    "load_value_sets",
    "write_units",
]
