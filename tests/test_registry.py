from __future__ import annotations

"""
Unit tests for the generator registry.
"""

from pathlib import Path

import pytest

from schema_typegen.codegen import (
    GeneratorConfig,
    GeneratorRegistry,
    RegistryError,
    create_default_registry,
    get_generator,
    get_language_info,
    list_supported_languages,
)
from schema_typegen.codegen.languages.typescript import TypeScriptGenerator


def test_builtin_languages() -> None:
    assert list_supported_languages() == ["typescript"]


def test_alias_resolves_to_primary() -> None:
    registry = create_default_registry()
    assert registry.resolve_language("TS") == "typescript"
    assert registry.is_supported("ts")
    assert registry.get_aliases_for_language("typescript") == ["ts"]


def test_unknown_language() -> None:
    registry = create_default_registry()
    assert not registry.is_supported("go")
    with pytest.raises(RegistryError, match="Available: typescript"):
        registry.get_generator_class("go")


def test_register_rejects_non_generators() -> None:
    with pytest.raises(RegistryError):
        GeneratorRegistry().register("text", str)


def test_alias_conflicts() -> None:
    registry = GeneratorRegistry()
    registry.register("typescript", TypeScriptGenerator, aliases=["ts"])

    with pytest.raises(RegistryError, match="already points"):
        registry.register("tsx", TypeScriptGenerator, aliases=["ts"])
    with pytest.raises(RegistryError, match="primary language"):
        registry.register("other", TypeScriptGenerator, aliases=["typescript"])


def test_duplicate_registration_is_ignored_without_replace() -> None:
    registry = GeneratorRegistry()
    registry.register("typescript", TypeScriptGenerator)
    registry.register("typescript", TypeScriptGenerator, aliases=["ts"])
    assert not registry.is_supported("ts")

    registry.register("typescript", TypeScriptGenerator, aliases=["ts"], replace=True)
    assert registry.is_supported("ts")


def test_get_generator_accepts_config_forms(tmp_path: Path) -> None:
    """A config object, an override dict and a file path all work."""
    config = GeneratorConfig(indent_size=3)
    assert get_generator("ts", config).config is config
    assert get_generator("typescript", {"indent_size": 4}).config.indent_size == 4

    path = tmp_path / "typegen.json"
    path.write_text('{"indent_size": 8}', encoding="utf-8")
    assert get_generator("typescript", path).config.indent_size == 8
    assert get_generator("typescript", str(path)).config.indent_size == 8


def test_get_generator_rejects_other_config_types() -> None:
    with pytest.raises(RegistryError, match="Invalid config type"):
        get_generator("typescript", 42)


def test_language_info() -> None:
    info = get_language_info("ts")
    assert info["name"] == "typescript"
    assert info["class"] == "TypeScriptGenerator"
    assert info["file_extension"] == ".d.ts"
    assert info["aliases"] == ["ts"]
