from __future__ import annotations

"""
Unit tests for the schema model and type graph construction.

Verifies:
1. Property conversion (cardinality, bindings, choice markers).
2. Record classification from the marker sets.
3. Nesting under parents, sorting and freezing.
4. Skipped entries and contract violations in the parent chain.
"""

from typing import Any, Dict

import pytest

from schema_typegen.codegen.core.config import GeneratorConfig
from schema_typegen.codegen.core.generator import SchemaContractError
from schema_typegen.codegen.core.graph import build_type_graph
from schema_typegen.codegen.core.schema import build_property, build_type_node


# -----------------------------------------------------------------------------
# Schema model
# -----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "max_, expected",
    [("*", True), ("2", True), ("1", False), ("0", False), ("many", False)],
)
def test_property_cardinality(max_: str, expected: bool) -> None:
    prop = build_property("Owner", "field", {"max": max_})
    assert prop.is_array is expected


def test_property_defaults() -> None:
    """Missing bounds mean an optional single value."""
    prop = build_property("Owner", "field", {})
    assert prop.min == 0
    assert prop.max == "1"
    assert prop.types == ()
    assert prop.binding is None


def test_choice_property_base_name() -> None:
    prop = build_property("Observation", "value[x]", {"type": [{"code": "string"}]})
    assert prop.is_choice
    assert prop.base_name == "value"


def test_required_value_set_only_for_required_bindings() -> None:
    required = build_property(
        "A", "status", {"binding": {"strength": "required", "valueSet": "http://vs"}}
    )
    preferred = build_property(
        "A", "language", {"binding": {"strength": "preferred", "valueSet": "http://vs"}}
    )
    assert required.required_value_set == "http://vs"
    assert preferred.required_value_set is None


def test_target_profiles_are_kept_in_order() -> None:
    prop = build_property(
        "A",
        "subject",
        {"type": [{"code": "Reference", "targetProfile": ["http://x/Patient", "http://x/Group"]}]},
    )
    assert prop.types[0].target_profiles == ("http://x/Patient", "http://x/Group")


def test_type_node_without_properties_is_skipped() -> None:
    assert build_type_node("Element", {"properties": {}}, [], []) is None
    assert build_type_node("Element", {"properties": {"_x": {}}}, [], []) is None


def test_underscore_properties_are_not_declared() -> None:
    node = build_type_node(
        "Patient", {"properties": {"birthDate": {}, "_birthDate": {}}}, [], []
    )
    assert node is not None
    assert node.property_names == {"birthDate"}


def test_frozen_node_rejects_nested_types(schema_index: Dict[str, Dict[str, Any]]) -> None:
    graph = build_type_graph(schema_index, GeneratorConfig())
    patient = graph.nodes["Patient"]
    with pytest.raises(RuntimeError):
        patient.add_nested(graph.nodes["Meta"])


# -----------------------------------------------------------------------------
# Graph building
# -----------------------------------------------------------------------------

def test_top_level_nodes_are_sorted(schema_index: Dict[str, Dict[str, Any]]) -> None:
    graph = build_type_graph(schema_index, GeneratorConfig())
    assert graph.top_level_names == (
        "Bundle",
        "Extension",
        "HumanName",
        "Meta",
        "MoneyQuantity",
        "Narrative",
        "Organization",
        "Patient",
        "Practitioner",
        "Quantity",
        "Reference",
        "SimpleQuantity",
    )


def test_skipped_entries(schema_index: Dict[str, Dict[str, Any]]) -> None:
    """Excluded names, lowercase primitives and empty entries are not built."""
    graph = build_type_graph(schema_index, GeneratorConfig())
    assert "Resource" not in graph.nodes
    assert "boolean" not in graph.nodes
    assert "Element" not in graph.nodes


def test_record_classification(schema_index: Dict[str, Dict[str, Any]]) -> None:
    graph = build_type_graph(schema_index, GeneratorConfig())
    assert graph.record_names == ("Bundle", "Organization", "Patient", "Practitioner")
    assert graph.extended_record_names == ("Patient",)
    assert not graph.nodes["Reference"].is_record


def test_nested_types_sorted_under_parent(schema_index: Dict[str, Dict[str, Any]]) -> None:
    """Children are attached to their parent, not emitted at top level."""
    graph = build_type_graph(schema_index, GeneratorConfig())
    bundle = graph.nodes["Bundle"]

    assert [node.output_name for node in bundle.nested_types] == ["BundleEntry", "BundleLink"]
    assert [node.output_name for node in bundle.walk()] == [
        "Bundle",
        "BundleEntry",
        "BundleLink",
    ]
    assert "BundleEntry" not in graph.top_level_names


def test_deeply_nested_types_walk_depth_first() -> None:
    schema = {
        "Questionnaire": {"properties": {"item": {"type": [{"code": "BackboneElement"}]}}},
        "QuestionnaireItem": {
            "parentType": "Questionnaire",
            "properties": {"enableWhen": {"type": [{"code": "BackboneElement"}]}},
        },
        "QuestionnaireItemEnableWhen": {
            "parentType": "QuestionnaireItem",
            "properties": {"question": {"type": [{"code": "string"}]}},
        },
        "QuestionnaireAnswer": {
            "parentType": "Questionnaire",
            "properties": {"value": {"type": [{"code": "string"}]}},
        },
    }
    graph = build_type_graph(schema, GeneratorConfig())
    root = graph.nodes["Questionnaire"]

    assert graph.top_level_names == ("Questionnaire",)
    assert [node.output_name for node in root.walk()] == [
        "Questionnaire",
        "QuestionnaireAnswer",
        "QuestionnaireItem",
        "QuestionnaireItemEnableWhen",
    ]


def test_missing_parent_is_contract_violation() -> None:
    schema = {
        "PatientContact": {
            "parentType": "Patient",
            "properties": {"name": {"type": [{"code": "string"}]}},
        }
    }
    with pytest.raises(SchemaContractError, match="PatientContact"):
        build_type_graph(schema, GeneratorConfig())


def test_cyclic_parent_chain_is_contract_violation() -> None:
    prop = {"properties": {"x": {"type": [{"code": "string"}]}}}
    schema = {
        "A": {"parentType": "B", **prop},
        "B": {"parentType": "A", **prop},
    }
    with pytest.raises(SchemaContractError, match="cyclic"):
        build_type_graph(schema, GeneratorConfig())


def test_custom_marker_sets() -> None:
    """Record classification follows the configured markers."""
    config = GeneratorConfig(record_markers=["key"], extended_record_markers=["notes"])
    schema = {
        "Item": {"properties": {"key": {}, "notes": {}}},
        "Tag": {"properties": {"key": {}}},
        "Note": {"properties": {"notes": {}}},
    }
    graph = build_type_graph(schema, config)
    assert graph.record_names == ("Item", "Tag")
    assert graph.extended_record_names == ("Item", "Note")
