"""
C# binding emitter implementation.

Renders a resource binding as a CustomResource subclass with a public
constructor, a static Get lookup and a sealed ResourceArgs type.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ...core.binding import ArgsField, OutputAccessor, ResourceBinding
from ...core.config import GeneratorConfig, load_config
from ...core.generator import CodeGenerator
from ...core.naming import NamingCase, convert_case
from ...core.schema import ShapeKind, ValueShape
from .naming import validate_dotnet_namespace

DOTNET_PRIMITIVES = {
    "string": "string",
    "integer": "int",
    "number": "double",
    "boolean": "bool",
    "any": "object",
}


class DotnetGenerator(CodeGenerator):
    """Emitter for C# resource classes."""

    def __init__(self, config: GeneratorConfig):
        """Initialize C# generator with configuration."""
        super().__init__(config)

        self.namespace = config.namespace or (
            "Pulumi." + convert_case(config.package_name, NamingCase.PASCAL_CASE)
        )
        self.attribute_prefix = convert_case(config.package_name, NamingCase.PASCAL_CASE)
        self.add_comments = config.add_comments
        self.tool_name = config.custom.get("tool_name", "sdkgen")

    def get_template_directory(self) -> Optional[Path]:
        """Return the C# templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "dotnet"

    @property
    def file_extension(self) -> str:
        """Return C# file extension."""
        return ".cs"

    def type_name(self, shape: ValueShape, optional: bool = False) -> str:
        """Plain C# type for a value shape."""
        if shape.kind == ShapeKind.PRIMITIVE:
            name = DOTNET_PRIMITIVES[shape.name]
        elif shape.kind == ShapeKind.REFERENCE:
            name = f"Outputs.{shape.name}"
        elif shape.kind == ShapeKind.ARRAY:
            name = f"ImmutableArray<{self.type_name(shape.element)}>"
        else:
            name = f"ImmutableDictionary<string, {self.type_name(shape.element)}>"

        if optional and shape.kind in (ShapeKind.PRIMITIVE, ShapeKind.REFERENCE):
            return f"{name}?"
        return name

    def input_type_name(self, shape: ValueShape) -> str:
        """C# input wrapper type for an args member."""
        if shape.kind == ShapeKind.ARRAY:
            return f"InputList<{self._input_element(shape.element)}>"
        if shape.kind == ShapeKind.MAP:
            return f"InputMap<{self._input_element(shape.element)}>"
        return f"Input<{self._input_element(shape)}>"

    def _input_element(self, shape: ValueShape) -> str:
        if shape.kind == ShapeKind.REFERENCE:
            return f"Inputs.{shape.name}Args"
        return self.type_name(shape)

    def generate(self, binding: ResourceBinding) -> str:
        """Generate the C# source file for one resource binding."""
        context = {
            "tool_name": self.tool_name,
            "namespace": self.namespace,
            "attribute": f"{self.attribute_prefix}ResourceType",
            "token": binding.type_token,
            "class_name": binding.class_name.spelling,
            "create_name": binding.create.name,
            "lookup_name": binding.lookup.name,
            "args_type": binding.args.type_name,
            "empty_factory": binding.args.empty_factory,
            "description": binding.resource.description if self.add_comments else None,
            "outputs": [self._output_data(o) for o in binding.outputs],
            "args_fields": [self._args_field_data(f) for f in binding.args.fields],
            "version": binding.version,
        }
        return self.render_template("resource.cs.j2", context)

    def _output_data(self, accessor: OutputAccessor) -> Dict[str, Any]:
        prop = accessor.property
        return {
            "name": accessor.name,
            "wire_name": accessor.wire_name,
            "type": f"Output<{self.type_name(prop.shape, optional=not prop.required)}>",
            "comment": prop.description if self.add_comments else None,
        }

    def _args_field_data(self, args_field: ArgsField) -> Dict[str, Any]:
        prop = args_field.property
        input_type = self.input_type_name(prop.shape)
        if args_field.required:
            attribute_args = f"{self._quote(prop.name)}, required: true"
            declaration = f"public {input_type} {args_field.name} {{ get; set; }} = null!;"
        else:
            attribute_args = self._quote(prop.name)
            declaration = f"public {input_type}? {args_field.name} {{ get; set; }}"

        return {
            "attribute_args": attribute_args,
            "declaration": declaration,
            "comment": prop.description if self.add_comments else None,
        }

    @staticmethod
    def _quote(value: str) -> str:
        return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'

    def validate_binding(self, binding: ResourceBinding) -> List[str]:
        """Validate binding for C# generation."""
        warnings = super().validate_binding(binding)
        warnings.extend(validate_dotnet_namespace(self.namespace))
        return warnings


# Factory functions
def create_dotnet_generator(config: Optional[Dict[str, Any]] = None) -> DotnetGenerator:
    """Create a C# generator with default configuration plus overrides."""
    return DotnetGenerator(load_config("dotnet", config))
