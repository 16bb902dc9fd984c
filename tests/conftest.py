from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

Provides a small normalized schema index and enumeration corpus shaped like
the FHIR R4 definitions the generator is built for.
"""

from typing import Any, Dict

import pytest

from schema_typegen.codegen.core.config import GeneratorConfig, load_config
from schema_typegen.codegen.core.valuesets import ValueSetResolver
from schema_typegen.codegen.languages.typescript import (
    TypeScriptGenerator,
    TypeScriptTypeMapper,
)

FHIR = "http://hl7.org/fhir/StructureDefinition/"
VS = "http://hl7.org/fhir/ValueSet/"
CS = "http://hl7.org/fhir/"


def _prop(code: str, max_: str = "1", **extra: Any) -> Dict[str, Any]:
    """Build a normalized element definition with a single type code."""
    definition: Dict[str, Any] = {"min": 0, "max": max_, "type": [{"code": code}]}
    definition.update(extra)
    return definition


def _resource_base() -> Dict[str, Dict[str, Any]]:
    return {
        "id": _prop(
            "http://hl7.org/fhirpath/System.String",
            definition="The logical id of the resource.",
        ),
        "meta": _prop("Meta"),
        "implicitRules": _prop("uri"),
        "language": _prop(
            "code",
            binding={"strength": "preferred", "valueSet": VS + "languages"},
        ),
    }


def _domain_resource_base() -> Dict[str, Dict[str, Any]]:
    base = _resource_base()
    base.update(
        {
            "text": _prop("Narrative"),
            "contained": _prop("Resource", "*"),
            "extension": _prop("Extension", "*"),
            "modifierExtension": _prop("Extension", "*"),
        }
    )
    return base


# -----------------------------------------------------------------------------
# Corpora
# -----------------------------------------------------------------------------
@pytest.fixture
def schema_index() -> Dict[str, Dict[str, Any]]:
    """Return a normalized schema index covering every generator rule."""
    patient = _domain_resource_base()
    patient.update(
        {
            "gender": _prop(
                "code",
                binding={
                    "strength": "required",
                    "valueSet": VS + "administrative-gender|4.0.1",
                },
                definition="Administrative Gender.",
            ),
            "birthDate": _prop("date"),
            "_birthDate": _prop("Element"),
            "deceased[x]": {
                "min": 0,
                "max": "1",
                "type": [{"code": "boolean"}, {"code": "dateTime"}],
            },
            "contact": _prop("BackboneElement", "*"),
            "generalPractitioner": {
                "min": 0,
                "max": "*",
                "type": [
                    {
                        "code": "Reference",
                        "targetProfile": [FHIR + "Organization", FHIR + "Practitioner"],
                    }
                ],
            },
        }
    )

    organization = _resource_base()
    organization["name"] = _prop("string")

    practitioner = _resource_base()
    practitioner["active"] = _prop("boolean")

    bundle = _resource_base()
    bundle.update(
        {
            "type": _prop(
                "code",
                binding={"strength": "required", "valueSet": VS + "bundle-type|4.0.1"},
            ),
            "total": _prop("unsignedInt"),
            "link": _prop("BackboneElement", "*"),
            "entry": _prop("BackboneElement", "*"),
        }
    )

    return {
        "Patient": {
            "description": "Demographics and other administrative information about an individual.",
            "properties": patient,
        },
        "PatientContact": {
            "parentType": "Patient",
            "description": "A contact party for the patient.",
            "properties": {
                "name": _prop("HumanName"),
                "organization": {
                    "type": [{"code": "Reference", "targetProfile": [FHIR + "Organization"]}]
                },
            },
        },
        "Organization": {"description": "A grouping of people.", "properties": organization},
        "Practitioner": {"properties": practitioner},
        "Bundle": {"description": "A container for resources.", "properties": bundle},
        "BundleLink": {
            "parentType": "Bundle",
            "properties": {"relation": _prop("string"), "url": _prop("uri")},
        },
        "BundleEntry": {
            "parentType": "Bundle",
            "properties": {
                "link": {"max": "*", "contentReference": "#Bundle.link"},
                "fullUrl": _prop("uri"),
                "resource": _prop("Resource"),
            },
        },
        "Reference": {
            "description": "A reference from one resource to another.",
            "properties": {
                "reference": _prop("string"),
                "type": _prop(
                    "uri",
                    binding={"strength": "extensible", "valueSet": VS + "resource-types"},
                ),
                "display": _prop("string"),
            },
        },
        "Meta": {
            "properties": {"versionId": _prop("id"), "lastUpdated": _prop("instant")}
        },
        "Extension": {
            "properties": {
                "url": _prop("uri"),
                "value[x]": {
                    "type": [{"code": "string"}, {"code": "Quantity"}],
                },
            }
        },
        "Narrative": {
            "properties": {
                "status": _prop(
                    "code",
                    binding={"strength": "required", "valueSet": VS + "narrative-status"},
                ),
                "div": _prop("xhtml"),
            }
        },
        "HumanName": {"properties": {"family": _prop("string"), "given": _prop("string", "*")}},
        "Quantity": {"properties": {"value": _prop("decimal"), "unit": _prop("string")}},
        "MoneyQuantity": {"properties": {"value": _prop("decimal")}},
        "SimpleQuantity": {"properties": {"value": _prop("decimal")}},
        "Element": {"description": "Base for all elements", "properties": {}},
        "boolean": {"properties": {"value": _prop("boolean")}},
        "Resource": {"properties": _resource_base()},
    }


@pytest.fixture
def value_sets() -> Dict[str, Dict[str, Any]]:
    """Return an enumeration corpus keyed by canonical URL."""
    return {
        VS + "administrative-gender": {
            "resourceType": "ValueSet",
            "url": VS + "administrative-gender",
            "compose": {"include": [{"system": CS + "administrative-gender"}]},
        },
        CS + "administrative-gender": {
            "resourceType": "CodeSystem",
            "url": CS + "administrative-gender",
            "concept": [
                {"code": "male"},
                {"code": "female"},
                {"code": "other"},
                {"code": "unknown"},
            ],
        },
        VS + "bundle-type": {
            "resourceType": "ValueSet",
            "url": VS + "bundle-type",
            "compose": {
                "include": [
                    {
                        "system": CS + "bundle-type",
                        "concept": [{"code": "document"}, {"code": "message"}],
                    },
                    {"concept": [{"code": "collection"}]},
                ]
            },
        },
        VS + "narrative-status": {
            "resourceType": "ValueSet",
            "url": VS + "narrative-status",
            "compose": {"include": [{"system": CS + "narrative-status"}]},
        },
        CS + "narrative-status": {
            "resourceType": "CodeSystem",
            "url": CS + "narrative-status",
            "concept": [
                {"code": "generated"},
                {"code": "extensions", "concept": [{"code": "additional"}]},
                {"code": "empty"},
            ],
        },
    }


# -----------------------------------------------------------------------------
# Generator fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def config() -> GeneratorConfig:
    """Default TypeScript configuration."""
    return load_config("typescript")


@pytest.fixture
def mapper(config: GeneratorConfig, value_sets: Dict[str, Dict[str, Any]]) -> TypeScriptTypeMapper:
    """Type mapper bound to the fixture enumeration corpus."""
    return TypeScriptTypeMapper(config, ValueSetResolver(value_sets))


@pytest.fixture
def generator(config: GeneratorConfig) -> TypeScriptGenerator:
    return TypeScriptGenerator(config)


@pytest.fixture
def files(
    generator: TypeScriptGenerator,
    schema_index: Dict[str, Dict[str, Any]],
    value_sets: Dict[str, Dict[str, Any]],
) -> Dict[str, str]:
    """Rendered output of the fixture corpora, keyed by file name."""
    units = generator.generate(schema_index, value_sets)
    return {unit.file_name: unit.content for unit in units}
