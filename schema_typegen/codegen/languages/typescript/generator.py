"""
TypeScript declaration generator implementation.

Renders one ``.d.ts`` file per top-level schema type plus the index, the
aggregate union and the discriminator utility files.
"""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ....logging_config import get_logger
from ...core.config import GeneratorConfig, load_config
from ...core.generator import CodeGenerator, EmissionUnit
from ...core.graph import TypeGraph, build_type_graph
from ...core.naming import doc_comment_lines
from ...core.schema import TypeNode
from ...core.valuesets import ValueSetResolver
from .imports import resolve_imports
from .types import TypeScriptTypeMapper

logger = get_logger(__name__)


class TypeScriptGenerator(CodeGenerator):
    """Code generator for TypeScript interface declarations."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize TypeScript generator with configuration."""
        super().__init__(config)
        self.last_run_metadata: Dict[str, Any] = {}

    @property
    def language_name(self) -> str:
        return "typescript"

    @property
    def file_extension(self) -> str:
        return self.config.custom.get("file_extension", ".d.ts")

    def get_template_directory(self) -> Path:
        """Return the TypeScript templates directory."""
        return Path(__file__).parent / "templates"

    @property
    def _pad(self) -> str:
        return " " * self.config.indent_size

    def generate(
        self,
        schema_index: Mapping[str, Dict[str, Any]],
        value_sets: Optional[Mapping[str, Dict[str, Any]]] = None,
    ) -> List[EmissionUnit]:
        """Generate every declaration unit for a schema index."""
        resolver = ValueSetResolver(value_sets)
        mapper = TypeScriptTypeMapper(self.config, resolver)
        graph = build_type_graph(schema_index, self.config)

        units = [self.generate_type_unit(node, mapper) for node in graph.top_level]
        units.append(self.generate_index_unit(graph))
        units.append(self.generate_union_unit(graph))
        units.append(self.generate_discriminator_unit())
        units.sort(key=lambda unit: unit.file_name)

        self.last_run_metadata = {
            "type_count": len(graph.nodes),
            "top_level_count": len(graph.top_level),
            "record_count": len(graph.record_names),
            "extended_record_count": len(graph.extended_record_names),
            "record_names": list(graph.record_names),
        }
        logger.info(
            "Generated %d files for %d top-level types",
            len(units),
            len(graph.top_level),
        )
        return units

    def generate_type_unit(
        self, node: TypeNode, mapper: TypeScriptTypeMapper
    ) -> EmissionUnit:
        """Render the unit of a top-level type and its nested types."""
        imports = resolve_imports(node, mapper, self.config)
        nodes = list(node.walk())
        declarations = [self.generate_declaration(unit_node, mapper) for unit_node in nodes]

        content = self.render_template(
            "unit.d.ts.j2", {"imports": imports, "declarations": declarations}
        )
        return EmissionUnit(
            file_name=node.output_name + self.file_extension,
            content=self.format_code(content),
            imports=tuple(imports),
            declared=tuple(unit_node.output_name for unit_node in nodes),
        )

    def generate_declaration(self, node: TypeNode, mapper: TypeScriptTypeMapper) -> str:
        """Render the interface declaration of a single node."""
        name = node.output_name
        config = self.config
        fields = []

        if node.is_record:
            fields.append(
                self._field_data(
                    f"This is a {name} resource",
                    f"readonly {config.discriminant_field}: '{name}';",
                )
            )

        field_names = set()
        for prop in node.properties:
            for resolved in mapper.expand(prop):
                field_names.add(resolved.name)
                fields.append(
                    self._field_data(
                        resolved.description,
                        f"{resolved.name}?: {resolved.type.expression};",
                    )
                )

        if name == config.reference_type and "resource" not in field_names:
            fields.append(
                self._field_data(
                    "Optional Resource referred to by this reference.",
                    f"resource?: {config.type_parameter};",
                )
            )

        type_parameters = ""
        if name in config.generic_types:
            type_parameters = (
                f"<{config.type_parameter} extends {config.union_name}"
                f" = {config.union_name}>"
            )

        return self.render_template(
            "interface.d.ts.j2",
            {
                "name": name,
                "type_parameters": type_parameters,
                "doc": self._doc(node.description),
                "fields": fields,
                "pad": self._pad,
            },
        )

    def generate_index_unit(self, graph: TypeGraph) -> EmissionUnit:
        """Render the module index re-exporting every top-level name."""
        config = self.config
        candidates = [
            *graph.top_level_names,
            config.union_name,
            config.discriminator_name,
        ]
        names = sorted(
            name for name in set(candidates) if name not in config.index_excluded_names
        )

        index_file = config.custom.get("index_file", "index")
        content = self.render_template("index.d.ts.j2", {"names": names})
        return EmissionUnit(
            file_name=index_file + self.file_extension,
            content=self.format_code(content),
        )

    def generate_union_unit(self, graph: TypeGraph) -> EmissionUnit:
        """Render the tagged union of every record-classified top-level type."""
        config = self.config
        names = list(graph.record_names)
        content = self.render_template(
            "union.d.ts.j2",
            {
                "names": names,
                "union_name": config.union_name,
                "separator": "\n" + self._pad + "| ",
            },
        )
        return EmissionUnit(
            file_name=config.union_name + self.file_extension,
            content=self.format_code(content),
            imports=tuple(names),
            declared=(config.union_name,),
        )

    def generate_discriminator_unit(self) -> EmissionUnit:
        """Render the discriminator type and the extraction utility."""
        config = self.config
        content = self.render_template(
            "discriminator.d.ts.j2",
            {
                "union_name": config.union_name,
                "discriminator_name": config.discriminator_name,
                "discriminant_field": config.discriminant_field,
            },
        )
        return EmissionUnit(
            file_name=config.discriminator_name + self.file_extension,
            content=self.format_code(content),
            imports=(config.union_name,),
            declared=(config.discriminator_name, f"Extract{config.union_name}"),
        )

    def _doc(self, text: Optional[str]) -> List[str]:
        if not self.config.add_comments:
            return []
        return doc_comment_lines(text, self.config.wrap_width)

    def _field_data(self, description: Optional[str], declaration: str) -> Dict[str, Any]:
        return {"doc": self._doc(description), "declaration": declaration}


def create_typescript_generator(config: Optional[Dict[str, Any]] = None) -> TypeScriptGenerator:
    """Create a TypeScript generator, applying dict overrides to the defaults."""
    return TypeScriptGenerator(load_config("typescript", custom_config=config))
