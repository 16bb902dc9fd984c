"""
Language-specific type generators.

This module contains generators for different target languages.
"""

from .typescript import TypeScriptGenerator, create_typescript_generator

__all__ = ["TypeScriptGenerator", "create_typescript_generator"]
