"""
TypeScript declaration generator module.

Generates ``.d.ts`` interface declarations from a normalized schema index.
"""

from .generator import TypeScriptGenerator, create_typescript_generator
from .imports import resolve_imports
from .types import ResolvedField, TsType, TypeScriptTypeMapper, literal_union

__all__ = [
    "TypeScriptGenerator",
    "create_typescript_generator",
    "resolve_imports",
    "ResolvedField",
    "TsType",
    "TypeScriptTypeMapper",
    "literal_union",
]
