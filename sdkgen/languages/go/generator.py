"""
Go binding emitter implementation.

Renders a resource binding as a struct embedding
pulumi.CustomResourceState, a New<Type> constructor, a Get<Type> lookup
and an Args struct implementing pulumi.Input.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ...core.binding import ArgsField, OutputAccessor, ResourceBinding
from ...core.config import GeneratorConfig, load_config
from ...core.generator import CodeGenerator
from ...core.naming import NamingCase, convert_case
from ...core.schema import ShapeKind, ValueShape
from .naming import validate_go_package_name

# Prefix of the pulumi.<X>Output / pulumi.<X>Input family per primitive
GO_WRAPPER_NAMES = {
    "string": "String",
    "integer": "Int",
    "number": "Float64",
    "boolean": "Bool",
    "any": "Any",
}

# Plain Go types used by the unexported args struct
GO_PLAIN_TYPES = {
    "string": "string",
    "integer": "int",
    "number": "float64",
    "boolean": "bool",
    "any": "interface{}",
}


class GoGenerator(CodeGenerator):
    """Emitter for Go resource files."""

    def __init__(self, config: GeneratorConfig):
        """Initialize Go generator with configuration."""
        super().__init__(config)

        self.package_name = config.package_name
        self.sdk_import = config.custom.get(
            "sdk_import", "github.com/pulumi/pulumi/sdk/v3/go/pulumi"
        )
        self.add_comments = config.add_comments
        self.tool_name = config.custom.get("tool_name", "sdkgen")

    def get_template_directory(self) -> Optional[Path]:
        """Return the Go templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "go"

    @property
    def file_extension(self) -> str:
        """Return Go file extension."""
        return ".go"

    def file_stem(self, binding: ResourceBinding) -> str:
        """Go source files are lower camelCase."""
        return convert_case(binding.class_name.spelling, NamingCase.CAMEL_CASE)

    def _wrapper_name(self, shape: ValueShape) -> str:
        """Pulumi wrapper stem, e.g. String, StringArray, BucketMap."""
        if shape.kind == ShapeKind.PRIMITIVE:
            return GO_WRAPPER_NAMES[shape.name]
        if shape.kind == ShapeKind.REFERENCE:
            return shape.name
        suffix = "Array" if shape.kind == ShapeKind.ARRAY else "Map"
        return self._wrapper_name(shape.element) + suffix

    def _needs_ptr(self, shape: ValueShape, optional: bool) -> bool:
        return optional and not shape.is_container and shape.name != "any"

    def _qualified(self, stem: str, shape: ValueShape) -> str:
        # References resolve to types in the generated package itself
        if _base_kind(shape) == ShapeKind.REFERENCE:
            return stem
        return f"pulumi.{stem}"

    def type_name(self, shape: ValueShape, optional: bool = False) -> str:
        """Output wrapper type for a value shape."""
        stem = self._wrapper_name(shape)
        if self._needs_ptr(shape, optional):
            stem += "Ptr"
        return self._qualified(stem + "Output", shape)

    def input_type_name(self, shape: ValueShape, optional: bool = False) -> str:
        """Input wrapper type for an args member."""
        stem = self._wrapper_name(shape)
        if self._needs_ptr(shape, optional):
            stem += "Ptr"
        return self._qualified(stem + "Input", shape)

    def plain_type_name(self, shape: ValueShape, optional: bool = False) -> str:
        """Plain Go type used by the unexported args struct."""
        if shape.kind == ShapeKind.PRIMITIVE:
            name = GO_PLAIN_TYPES[shape.name]
        elif shape.kind == ShapeKind.REFERENCE:
            name = shape.name
        elif shape.kind == ShapeKind.ARRAY:
            return f"[]{self.plain_type_name(shape.element)}"
        else:
            return f"map[string]{self.plain_type_name(shape.element)}"

        if self._needs_ptr(shape, optional):
            return f"*{name}"
        return name

    def generate(self, binding: ResourceBinding) -> str:
        """Generate the Go source file for one resource binding."""
        args_fields = [self._args_field_data(f) for f in binding.args.fields]
        imports = ["reflect", self.sdk_import]
        if any(f["required"] for f in args_fields):
            imports.append("errors")

        context = {
            "tool_name": self.tool_name,
            "package_name": self.package_name,
            "imports": sorted(imports),
            "token": binding.type_token,
            "class_name": binding.class_name.spelling,
            "create_name": binding.create.name,
            "lookup_name": binding.lookup.name,
            "args_type": binding.args.type_name,
            "plain_args_type": _unexported(binding.args.type_name),
            "description": binding.resource.description if self.add_comments else None,
            "outputs": [self._output_data(o) for o in binding.outputs],
            "args_fields": args_fields,
            "version": binding.version,
        }
        return self.render_template("resource.go.j2", context)

    def _output_data(self, accessor: OutputAccessor) -> Dict[str, Any]:
        prop = accessor.property
        return {
            "name": accessor.name,
            "type": self.type_name(prop.shape, optional=not prop.required),
            "tag": f'`pulumi:"{accessor.wire_name}"`',
            "comment": prop.description if self.add_comments else None,
        }

    def _args_field_data(self, args_field: ArgsField) -> Dict[str, Any]:
        prop = args_field.property
        optional = not args_field.required
        return {
            "name": args_field.name,
            "wire_name": prop.name,
            "required": args_field.required,
            "input_type": self.input_type_name(prop.shape, optional=optional),
            "plain_type": self.plain_type_name(prop.shape, optional=optional),
            "tag": f'`pulumi:"{prop.name}"`',
            "comment": prop.description if self.add_comments else None,
        }

    def format_code(self, code: str) -> str:
        """Apply Go-specific formatting: tabs for indentation."""
        lines = []
        for line in code.split("\n"):
            stripped = line.lstrip(" ")
            depth = (len(line) - len(stripped)) // 4
            lines.append("\t" * depth + stripped)
        return super().format_code("\n".join(lines))

    def validate_binding(self, binding: ResourceBinding) -> List[str]:
        """Validate binding for Go generation."""
        warnings = super().validate_binding(binding)
        warnings.extend(validate_go_package_name(self.package_name))
        return warnings


def _base_kind(shape: ValueShape) -> ShapeKind:
    while shape.is_container:
        shape = shape.element
    return shape.kind


def _unexported(name: str) -> str:
    return name[:1].lower() + name[1:]


# Factory functions
def create_go_generator(config: Optional[Dict[str, Any]] = None) -> GoGenerator:
    """Create a Go generator with default configuration plus overrides."""
    return GoGenerator(load_config("go", config))
