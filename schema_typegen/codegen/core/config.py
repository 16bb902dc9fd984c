"""
Configuration management for type generation.

Handles loading and merging configuration from JSON files, providing the
naming conventions and special-case tables the generator relies on.
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


FHIR_R4_VALUE_SETS = "http://hl7.org/fhir/ValueSet/"


@dataclass
class GeneratorConfig:
    """Base configuration for type generators."""

    # Output settings
    output_dir: str = "dist"

    # Code style settings
    indent_size: int = 2
    line_ending: str = "\n"
    wrap_width: int = 70
    add_comments: bool = True

    # Aggregate artifacts
    union_name: str = "Resource"
    discriminator_name: str = "ResourceType"
    discriminant_field: str = "resourceType"
    type_parameter: str = "T"

    # Graph building
    record_markers: List[str] = field(
        default_factory=lambda: ["id", "meta", "implicitRules", "language"]
    )
    extended_record_markers: List[str] = field(
        default_factory=lambda: ["text", "contained", "extension", "modifierExtension"]
    )
    excluded_types: List[str] = field(
        default_factory=lambda: [
            "Resource",
            "BackboneElement",
            "DomainResource",
            "MetadataResource",
        ]
    )
    skip_lowercase_types: bool = True

    # Aliases of one canonical shape, left out of the index
    index_excluded_names: List[str] = field(
        default_factory=lambda: ["MoneyQuantity", "SimpleQuantity"]
    )

    # Generic carriers
    generic_types: List[str] = field(
        default_factory=lambda: ["Bundle", "BundleEntry", "OperationOutcome", "Reference"]
    )
    generic_fields: Dict[str, str] = field(
        default_factory=lambda: {
            "BundleEntry.resource": "T",
            "OperationOutcome.resource": "T",
            "Reference.resource": "T",
            "Bundle.entry": "BundleEntry<T>[]",
        }
    )
    reference_type: str = "Reference"

    # Enumeration handling (URLs compared without their |version suffix)
    value_set_aliases: Dict[str, str] = field(
        default_factory=lambda: {FHIR_R4_VALUE_SETS + "resource-types": "ResourceType"}
    )
    exempt_value_sets: List[str] = field(
        default_factory=lambda: [
            FHIR_R4_VALUE_SETS + "all-types",
            FHIR_R4_VALUE_SETS + "defined-types",
        ]
    )

    # Type code -> expression overrides
    type_overrides: Dict[str, str] = field(default_factory=dict)

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    def generic_field_type(self, owner: str, name: str) -> Optional[str]:
        """Return the configured type-parameter expression for a carrier field."""
        return self.generic_fields.get(f"{owner}.{name}")


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        self._configs["typescript"] = {
            "output_dir": "dist",
            "indent_size": 2,
            "wrap_width": 70,
            "add_comments": True,
            "custom": {
                "file_extension": ".d.ts",
                "index_file": "index",
            },
        }

    def get_config(
        self,
        language: str = "typescript",
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language
        """
        base_config = dict(self._configs.get(language, {}))
        base_config["custom"] = dict(base_config.get("custom", {}))

        if config_file:
            self._merge(base_config, self._load_config_file(config_file))

        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    @staticmethod
    def _merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """Merge overrides into base; the custom dict is merged key by key."""
        for key, value in overrides.items():
            if key == "custom" and isinstance(value, dict):
                base.setdefault("custom", {}).update(value)
            else:
                base[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = set(GeneratorConfig.__dataclass_fields__)

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)
        config_dict = asdict(config)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def list_languages(self) -> list[str]:
        """Get list of languages with default configurations."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig) -> list[str]:
        """
        Validate a configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.indent_size < 0:
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        if config.wrap_width < 10:
            warnings.append(f"wrap_width too small: {config.wrap_width}")

        for name in (config.union_name, config.discriminator_name, config.type_parameter):
            if not name.isidentifier():
                warnings.append(f"Invalid type name: {name!r}")

        if not config.discriminant_field.isidentifier():
            warnings.append(f"Invalid discriminant field: {config.discriminant_field!r}")

        for key in config.generic_fields:
            owner, _, name = key.partition(".")
            if not owner or not name:
                warnings.append(f"Generic field key must be 'Type.field': {key!r}")
            elif owner not in config.generic_types:
                warnings.append(
                    f"Generic field {key} belongs to {owner}, which is not a generic type"
                )

        if config.reference_type not in config.generic_types:
            warnings.append(
                f"Reference type {config.reference_type} is not a generic type"
            )

        return warnings


def load_config(
    language: str = "typescript",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    return ConfigManager().get_config(language, custom_config, config_file)
