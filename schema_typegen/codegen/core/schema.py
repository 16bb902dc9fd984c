"""
Core schema representation for type generation.

Converts normalized schema index records into the internal format that
generators work with consistently.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

CHOICE_MARKER = "[x]"
REQUIRED_STRENGTH = "required"


@dataclass(frozen=True)
class ElementType:
    """One declared type alternative of a property."""

    code: str
    target_profiles: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Binding:
    """Enumeration binding of a property."""

    strength: str
    value_set: str

    @property
    def is_required(self) -> bool:
        return self.strength == REQUIRED_STRENGTH


@dataclass(frozen=True)
class PropertyNode:
    """Represents a single declared field of a schema type."""

    owner: str
    name: str
    min: int = 0
    max: str = "1"
    types: Tuple[ElementType, ...] = ()
    binding: Optional[Binding] = None
    content_reference: Optional[str] = None
    definition: Optional[str] = None

    @property
    def is_array(self) -> bool:
        """True when the upper bound allows more than one value."""
        if self.max == "*":
            return True
        try:
            return int(self.max) > 1
        except ValueError:
            return False

    @property
    def is_choice(self) -> bool:
        return self.name.endswith(CHOICE_MARKER)

    @property
    def base_name(self) -> str:
        """Field name without the polymorphic marker."""
        if self.is_choice:
            return self.name[: -len(CHOICE_MARKER)]
        return self.name

    @property
    def required_value_set(self) -> Optional[str]:
        if self.binding and self.binding.is_required and self.binding.value_set:
            return self.binding.value_set
        return None


@dataclass
class TypeNode:
    """Represents one named schema type and its nested types."""

    output_name: str
    input_name: str
    properties: Tuple[PropertyNode, ...] = ()
    parent_name: Optional[str] = None
    description: Optional[str] = None
    nested_types: List["TypeNode"] = field(default_factory=list)
    is_record: bool = False
    is_extended_record: bool = False
    _frozen: bool = field(default=False, repr=False, compare=False)

    @property
    def property_names(self) -> set:
        return {prop.name for prop in self.properties}

    def add_nested(self, node: "TypeNode") -> None:
        """Append a nested type (only before the node is frozen)."""
        if self._frozen:
            raise RuntimeError(f"Type {self.output_name} is frozen")
        self.nested_types.append(node)

    def freeze(self) -> None:
        """Sort nested types by name and make the list immutable."""
        self.nested_types = tuple(
            sorted(self.nested_types, key=lambda node: node.output_name)
        )
        self._frozen = True

    def walk(self):
        """Yield this node and every nested descendant, depth-first."""
        yield self
        for nested in self.nested_types:
            yield from nested.walk()


def build_property(owner: str, name: str, definition: Dict[str, Any]) -> PropertyNode:
    """Convert one normalized element definition into a PropertyNode."""
    types = tuple(
        ElementType(
            code=str(type_def.get("code", "")),
            target_profiles=tuple(type_def.get("targetProfile") or ()),
        )
        for type_def in definition.get("type") or ()
    )

    binding = None
    binding_def = definition.get("binding")
    if isinstance(binding_def, dict) and binding_def.get("valueSet"):
        binding = Binding(
            strength=str(binding_def.get("strength", "")),
            value_set=str(binding_def["valueSet"]),
        )

    return PropertyNode(
        owner=owner,
        name=name,
        min=int(definition.get("min") or 0),
        max=str(definition.get("max", "1")),
        types=types,
        binding=binding,
        content_reference=definition.get("contentReference"),
        definition=definition.get("definition") or definition.get("description"),
    )


def build_type_node(
    name: str,
    record: Dict[str, Any],
    record_markers: List[str],
    extended_record_markers: List[str],
) -> Optional[TypeNode]:
    """
    Convert a normalized schema record into a TypeNode.

    Returns None for records without declared properties (abstract markers).
    Property names starting with an underscore are primitive extension
    shadows and are not part of the declared shape.
    """
    raw_properties = record.get("properties") or {}
    properties = tuple(
        build_property(name, prop_name, prop_def or {})
        for prop_name, prop_def in raw_properties.items()
        if not prop_name.startswith("_")
    )
    if not properties:
        return None

    names = {prop.name for prop in properties}

    return TypeNode(
        output_name=name,
        input_name=name,
        properties=properties,
        parent_name=record.get("parentType"),
        description=record.get("description"),
        is_record=names.issuperset(record_markers),
        is_extended_record=names.issuperset(extended_record_markers),
    )
