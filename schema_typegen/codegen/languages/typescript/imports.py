"""
Cross-file import resolution for TypeScript declaration units.
"""

from typing import List, Set

from ...core.config import GeneratorConfig
from ...core.schema import TypeNode
from .types import TypeScriptTypeMapper


def resolve_imports(
    node: TypeNode, mapper: TypeScriptTypeMapper, config: GeneratorConfig
) -> List[str]:
    """
    Compute the sorted imports of the unit rooted at ``node``.

    Every type referenced by the node or its nested descendants is imported,
    except names declared in the unit itself and the type parameter. Units
    that declare, parameterize or reference a generic carrier also import
    the aggregate union.
    """
    declared: Set[str] = set()
    referenced: Set[str] = set()
    needs_union = False

    for unit_node in node.walk():
        declared.add(unit_node.output_name)
        if unit_node.output_name in config.generic_types:
            needs_union = True

        for prop in unit_node.properties:
            for resolved in mapper.expand(prop):
                referenced.update(resolved.type.references)
                if resolved.type.uses_type_parameter:
                    needs_union = True

    if referenced.intersection(config.generic_types):
        needs_union = True

    if needs_union:
        referenced.add(config.union_name)

    referenced.discard(config.type_parameter)
    return sorted(name for name in referenced if name not in declared)
