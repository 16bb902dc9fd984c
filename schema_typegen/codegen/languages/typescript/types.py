"""
TypeScript type system for declaration generation.

Maps schema properties to TypeScript type expressions, expanding choice
fields, content references and generic carrier fields along the way.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.generator import SchemaContractError
from ...core.naming import (
    choice_field_name,
    content_reference_name,
    identifiers,
    nested_type_name,
    strip_version,
    target_type_name,
)
from ...core.schema import ElementType, PropertyNode
from ...core.valuesets import ValueSetResolver

logger = get_logger(__name__)

STRING_CODES = frozenset(
    {
        "base64Binary",
        "canonical",
        "code",
        "id",
        "markdown",
        "oid",
        "string",
        "uri",
        "url",
        "uuid",
        "xhtml",
        "http://hl7.org/fhirpath/System.String",
    }
)

DATE_CODES = frozenset({"date", "dateTime", "instant", "time"})

NUMBER_CODES = frozenset({"decimal", "integer", "positiveInt", "unsignedInt", "number"})

# FHIRPath system types used as primitive value codes
FHIRPATH_CODES = {
    "http://hl7.org/fhirpath/System.Boolean": "boolean",
    "http://hl7.org/fhirpath/System.Integer": "number",
    "http://hl7.org/fhirpath/System.Decimal": "number",
    "http://hl7.org/fhirpath/System.Date": "string",
    "http://hl7.org/fhirpath/System.DateTime": "string",
    "http://hl7.org/fhirpath/System.Time": "string",
}

ELEMENT_CODES = frozenset({"Element", "BackboneElement"})

RESOURCE_LIST_CODE = "ResourceList"
REFERENCE_CODE = "Reference"


@dataclass(frozen=True)
class TsType:
    """
    Immutable TypeScript type expression with the names it depends on.

    ``references`` holds every named type the expression needs imported
    (lowercase scalars such as ``string`` never appear there).
    """

    expression: str
    references: FrozenSet[str] = field(default_factory=frozenset)
    uses_type_parameter: bool = False
    is_literal_union: bool = False

    def as_array(self) -> "TsType":
        """Return the sequence version of this type."""
        if self.is_literal_union:
            expression = f"({self.expression})[]"
        else:
            expression = f"{self.expression}[]"

        return TsType(
            expression=expression,
            references=self.references,
            uses_type_parameter=self.uses_type_parameter,
            is_literal_union=False,
        )


@dataclass(frozen=True)
class ResolvedField:
    """One output field of a declaration."""

    name: str
    type: TsType
    description: Optional[str] = None


def literal_union(codes: List[str]) -> TsType:
    """Build ``'a' | 'b'`` from a list of codes, keeping order and duplicates."""
    literals = [
        "'" + code.replace("\\", "\\\\").replace("'", "\\'") + "'" for code in codes
    ]
    return TsType(expression=" | ".join(literals), is_literal_union=True)


class TypeScriptTypeMapper:
    """
    Central engine for mapping schema properties to TypeScript types.

    One mapper serves one generation run; the value set resolver it owns
    memoizes enumeration lookups for that run only.
    """

    def __init__(self, config: GeneratorConfig, value_sets: Optional[ValueSetResolver] = None):
        self.config = config
        self.value_sets = value_sets or ValueSetResolver()
        self._aliases = {
            strip_version(url): alias for url, alias in config.value_set_aliases.items()
        }
        self._exempt = {strip_version(url) for url in config.exempt_value_sets}
        self._cache: Dict[PropertyNode, List[ResolvedField]] = {}

    def expand(self, prop: PropertyNode) -> List[ResolvedField]:
        """
        Expand a property into its output fields.

        Raises:
            SchemaContractError: If the property cannot be matched against
                the generic carrier or content reference conventions.
        """
        if prop not in self._cache:
            self._cache[prop] = self._expand(prop)
        return list(self._cache[prop])

    def _expand(self, prop: PropertyNode) -> List[ResolvedField]:
        generic = self.config.generic_field_type(prop.owner, prop.name)
        if generic is not None:
            return [ResolvedField(prop.name, self._generic_type(prop, generic), prop.definition)]

        if prop.content_reference:
            name = content_reference_name(prop.owner, prop.name, prop.content_reference)
            ts_type = TsType(expression=name, references=frozenset({name}))
            if prop.is_array:
                ts_type = ts_type.as_array()
            return [ResolvedField(prop.name, ts_type, prop.definition)]

        if prop.is_choice:
            if not prop.types:
                raise SchemaContractError(
                    f"Choice field {prop.owner}.{prop.name} declares no types"
                )
            return [
                ResolvedField(
                    choice_field_name(prop.base_name, element_type.code),
                    self.map_type(prop, element_type),
                    prop.definition,
                )
                for element_type in prop.types
            ]

        element_type = prop.types[0] if prop.types else ElementType(code="")
        return [ResolvedField(prop.name, self.map_type(prop, element_type), prop.definition)]

    def _generic_type(self, prop: PropertyNode, expression: str) -> TsType:
        """Type of a designated generic carrier field."""
        if prop.owner not in self.config.generic_types:
            raise SchemaContractError(
                f"Generic carrier field {prop.owner}.{prop.name} belongs to "
                f"{prop.owner}, which takes no type parameter"
            )

        parameter = self.config.type_parameter
        references = {name for name in identifiers(expression) if name != parameter}
        references.add(self.config.union_name)

        return TsType(
            expression=expression,
            references=frozenset(references),
            uses_type_parameter=parameter in identifiers(expression),
        )

    def map_type(self, prop: PropertyNode, element_type: ElementType) -> TsType:
        """Map one type alternative of a property, applying cardinality."""
        base_type = self._map_base_type(prop, element_type)
        if prop.is_array:
            return base_type.as_array()
        return base_type

    def _map_base_type(self, prop: PropertyNode, element_type: ElementType) -> TsType:
        """Map the base type without considering cardinality."""
        code = element_type.code

        if code in self.config.type_overrides:
            return self._named(self.config.type_overrides[code])

        if code in STRING_CODES:
            return self._map_string_type(prop)

        if code in DATE_CODES:
            return TsType(expression="string")

        if code in NUMBER_CODES:
            return TsType(expression="number")

        if code in FHIRPATH_CODES:
            return TsType(expression=FHIRPATH_CODES[code])

        if code == RESOURCE_LIST_CODE:
            return self._named(self.config.union_name)

        if code in ELEMENT_CODES:
            return self._named(nested_type_name(prop.owner, prop.name))

        if code == REFERENCE_CODE:
            return self._map_reference_type(element_type)

        if not code:
            return TsType(expression="any")

        if not code.isidentifier():
            logger.warning(
                "Type code %r of %s.%s is not a type name; using any",
                code,
                prop.owner,
                prop.name,
            )
            return TsType(expression="any")

        return self._named(code)

    def _map_string_type(self, prop: PropertyNode) -> TsType:
        """String scalar, or a literal union for required enumeration bindings."""
        value_set = prop.required_value_set
        if not value_set:
            return TsType(expression="string")

        url = strip_version(value_set)
        if url in self._aliases:
            return self._named(self._aliases[url])

        if url in self._exempt:
            return TsType(expression="string")

        codes = self.value_sets.resolve(url)
        if codes:
            return literal_union(codes)

        return TsType(expression="string")

    def _map_reference_type(self, element_type: ElementType) -> TsType:
        """``Reference<A | B>`` for restricted references, bare otherwise."""
        reference = self.config.reference_type
        targets = [target_type_name(profile) for profile in element_type.target_profiles]

        if not targets:
            return self._named(reference)

        return TsType(
            expression=f"{reference}<{' | '.join(targets)}>",
            references=frozenset([reference, *targets]),
        )

    @staticmethod
    def _named(name: str) -> TsType:
        """A named type; lowercase scalar names need no import."""
        references = frozenset(
            ident for ident in identifiers(name) if ident[0].isupper()
        )
        return TsType(expression=name, references=references)
