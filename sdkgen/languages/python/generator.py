"""
Python binding emitter implementation.

Renders a resource binding as a pulumi.CustomResource subclass with an
input type, property getters returning pulumi.Output and a static get.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ...core.binding import ArgsField, OutputAccessor, ResourceBinding
from ...core.config import GeneratorConfig, load_config
from ...core.generator import CodeGenerator
from ...core.schema import ShapeKind, ValueShape
from .naming import module_name

# Python type mappings
PYTHON_TYPE_MAP = {
    "string": "str",
    "integer": "int",
    "number": "float",
    "boolean": "bool",
    "any": "Any",
}


def _has_reference(shape: ValueShape) -> bool:
    if shape.kind == ShapeKind.REFERENCE:
        return True
    return shape.is_container and _has_reference(shape.element)


class PythonGenerator(CodeGenerator):
    """Emitter for Python resource modules."""

    def __init__(self, config: GeneratorConfig):
        """Initialize Python generator with configuration."""
        super().__init__(config)

        self.add_comments = config.add_comments
        self.tool_name = config.custom.get("tool_name", "sdkgen")

    def get_template_directory(self) -> Optional[Path]:
        """Return the Python templates directory."""
        template_dir = Path(__file__).parent / "templates"
        return template_dir if template_dir.exists() else None

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "python"

    @property
    def file_extension(self) -> str:
        """Return Python file extension."""
        return ".py"

    def file_stem(self, binding: ResourceBinding) -> str:
        """Python modules are snake_case."""
        return module_name(binding.class_name.spelling)

    def type_name(self, shape: ValueShape, optional: bool = False) -> str:
        """Python annotation for a value shape."""
        if shape.kind == ShapeKind.PRIMITIVE:
            name = PYTHON_TYPE_MAP[shape.name]
        elif shape.kind == ShapeKind.REFERENCE:
            name = f"'outputs.{shape.name}'"
        elif shape.kind == ShapeKind.ARRAY:
            name = f"Sequence[{self.type_name(shape.element)}]"
        else:
            name = f"Mapping[str, {self.type_name(shape.element)}]"

        return f"Optional[{name}]" if optional else name

    def input_type_name(self, shape: ValueShape) -> str:
        """Annotation of an args member, wrapped in pulumi.Input."""
        if shape.kind == ShapeKind.REFERENCE:
            return f"pulumi.Input['{shape.name}Args']"
        if shape.kind == ShapeKind.ARRAY:
            return f"pulumi.Input[Sequence[{self.input_type_name(shape.element)}]]"
        if shape.kind == ShapeKind.MAP:
            return f"pulumi.Input[Mapping[str, {self.input_type_name(shape.element)}]]"
        return f"pulumi.Input[{self.type_name(shape)}]"

    def generate(self, binding: ResourceBinding) -> str:
        """Generate the Python module for one resource binding."""
        args_fields = [self._args_field_data(f) for f in binding.args.fields]

        # A bare "*" with no keyword parameters after it is a syntax error
        if args_fields:
            parameters = ["__self__", "*"] + [f["parameter"] for f in args_fields]
        else:
            parameters = ["__self__"]

        context = {
            "tool_name": self.tool_name,
            "token": binding.type_token,
            "class_name": binding.class_name.spelling,
            "create_name": binding.create.name,
            "lookup_name": binding.lookup.name,
            "args_type": binding.args.type_name,
            "args_parameters": parameters,
            "args_fields": args_fields,
            "outputs": [self._output_data(o) for o in binding.outputs],
            "output_only_names": [
                o.name for o in binding.outputs if o.property.output_only
            ],
            "needs_outputs": any(
                _has_reference(o.property.shape) for o in binding.outputs
            ),
            "description": binding.resource.description if self.add_comments else None,
            "version": binding.version,
        }
        return self.render_template("resource.py.j2", context)

    def _args_field_data(self, args_field: ArgsField) -> Dict[str, Any]:
        prop = args_field.property
        annotation = self.input_type_name(prop.shape)
        if args_field.required:
            parameter = f"{args_field.name}: {annotation}"
        else:
            annotation = f"Optional[{annotation}]"
            parameter = f"{args_field.name}: {annotation} = None"

        return {
            "name": args_field.name,
            "wire_name": prop.name,
            "required": args_field.required,
            "annotation": annotation,
            "parameter": parameter,
            "comment": prop.description if self.add_comments else None,
        }

    def _output_data(self, accessor: OutputAccessor) -> Dict[str, Any]:
        prop = accessor.property
        return {
            "name": accessor.name,
            "wire_name": accessor.wire_name,
            "type": f"pulumi.Output[{self.type_name(prop.shape, optional=not prop.required)}]",
            "comment": prop.description if self.add_comments else None,
        }

    def validate_binding(self, binding: ResourceBinding) -> List[str]:
        """Validate binding for Python generation."""
        warnings = super().validate_binding(binding)
        for args_field in binding.args.fields:
            if not args_field.name.isidentifier():
                warnings.append(f"Args member {args_field.name} is not a valid identifier")
        return warnings


# Factory functions
def create_python_generator(config: Optional[Dict[str, Any]] = None) -> PythonGenerator:
    """Create a Python generator with default configuration plus overrides."""
    return PythonGenerator(load_config("python", config))
