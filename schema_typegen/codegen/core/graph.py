"""
Type graph construction.

Builds a TypeNode per schema entry, groups nested types under their parents
and freezes the result for the emitter.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from ...logging_config import get_logger
from .config import GeneratorConfig
from .generator import SchemaContractError
from .naming import is_lower_case
from .schema import TypeNode, build_type_node

logger = get_logger(__name__)


@dataclass(frozen=True)
class TypeGraph:
    """Frozen forest of type nodes."""

    nodes: Dict[str, TypeNode]
    top_level: Tuple[TypeNode, ...]

    @property
    def top_level_names(self) -> Tuple[str, ...]:
        return tuple(node.output_name for node in self.top_level)

    @property
    def record_names(self) -> Tuple[str, ...]:
        """Sorted names of record-classified top-level types."""
        return tuple(node.output_name for node in self.top_level if node.is_record)

    @property
    def extended_record_names(self) -> Tuple[str, ...]:
        return tuple(
            node.output_name for node in self.top_level if node.is_extended_record
        )


def _is_skipped(name: str, config: GeneratorConfig) -> bool:
    if name in config.excluded_types:
        return True
    return config.skip_lowercase_types and is_lower_case(name)


def build_type_graph(
    schema_index: Mapping[str, Dict[str, Any]], config: GeneratorConfig
) -> TypeGraph:
    """
    Build the type graph for one generation run.

    Args:
        schema_index: Mapping of type name to normalized schema record
        config: Generator configuration (marker sets, excluded names)

    Returns:
        TypeGraph whose top-level nodes are sorted by output name

    Raises:
        SchemaContractError: If a node names a parent that was not built
    """
    nodes: Dict[str, TypeNode] = {}

    for name, record in schema_index.items():
        if _is_skipped(name, config):
            logger.debug("Skipping excluded type %s", name)
            continue

        node = build_type_node(
            name, record, config.record_markers, config.extended_record_markers
        )
        if node is None:
            logger.debug("Skipping %s: no declared properties", name)
            continue

        nodes[node.output_name] = node

    for node in nodes.values():
        if not node.parent_name:
            continue
        parent = nodes.get(node.parent_name)
        if parent is None or parent is node:
            raise SchemaContractError(
                f"Type {node.output_name} declares parent {node.parent_name}, "
                "which is not a generated type"
            )
        parent.add_nested(node)

    for node in nodes.values():
        node.freeze()

    top_level = tuple(
        sorted(
            (node for node in nodes.values() if not node.parent_name),
            key=lambda node: node.output_name,
        )
    )

    reachable = {nested.output_name for node in top_level for nested in node.walk()}
    if len(reachable) != len(nodes):
        orphaned = sorted(set(nodes) - reachable)
        raise SchemaContractError(
            f"Types with a cyclic parent chain: {', '.join(orphaned)}"
        )

    logger.info(
        "Built type graph: %d types, %d top-level, %d records",
        len(nodes),
        len(top_level),
        sum(1 for node in top_level if node.is_record),
    )
    return TypeGraph(nodes=nodes, top_level=top_level)
