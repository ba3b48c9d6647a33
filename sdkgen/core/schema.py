"""
Core schema representation for binding generation.

Holds the already-validated description of resource types and their
properties, and converts decoded schema documents into that model.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import SchemaError
from ..logging_config import get_logger

logger = get_logger(__name__)


PRIMITIVE_NAMES = frozenset({"string", "integer", "number", "boolean", "any"})


class ShapeKind(Enum):
    """Value shapes a property can take."""

    PRIMITIVE = "primitive"
    REFERENCE = "reference"
    ARRAY = "array"
    MAP = "map"


@dataclass(frozen=True)
class ValueShape:
    """Shape of a property value: primitive, reference or container-of-T."""

    kind: ShapeKind
    name: str = ""
    element: Optional["ValueShape"] = None

    @classmethod
    def primitive(cls, name: str) -> "ValueShape":
        return cls(ShapeKind.PRIMITIVE, name)

    @classmethod
    def reference(cls, name: str) -> "ValueShape":
        return cls(ShapeKind.REFERENCE, name)

    @classmethod
    def array_of(cls, element: "ValueShape") -> "ValueShape":
        return cls(ShapeKind.ARRAY, element=element)

    @classmethod
    def map_of(cls, element: "ValueShape") -> "ValueShape":
        return cls(ShapeKind.MAP, element=element)

    @property
    def is_container(self) -> bool:
        return self.kind in (ShapeKind.ARRAY, ShapeKind.MAP)


STRING = ValueShape.primitive("string")


@dataclass(frozen=True)
class PropertyDef:
    """A single property declared on a resource type."""

    name: str  # Schema name, also used as the wire name
    shape: ValueShape = STRING
    required: bool = False
    output_only: bool = False
    description: Optional[str] = None

    # Per-language desired member names, keyed by language tag
    overrides: Mapping[str, str] = field(default_factory=dict, compare=False, hash=False)

    def desired_name(self, language: str) -> str:
        """Name to feed the namer for ``language``, honoring overrides."""
        return self.overrides.get(language, self.name)


@dataclass(frozen=True)
class ResourceType:
    """A declared resource type and its ordered properties."""

    token: str
    name: str
    properties: Tuple[PropertyDef, ...] = ()
    version: str = "0.0.0"
    description: Optional[str] = None
    overrides: Mapping[str, str] = field(default_factory=dict, compare=False, hash=False)

    @property
    def input_properties(self) -> Tuple[PropertyDef, ...]:
        """Properties settable at construction time."""
        return tuple(p for p in self.properties if not p.output_only)

    @property
    def output_only_properties(self) -> Tuple[PropertyDef, ...]:
        return tuple(p for p in self.properties if p.output_only)

    def desired_name(self, language: str) -> str:
        return self.overrides.get(language, self.name)

    def get_property(self, name: str) -> Optional[PropertyDef]:
        """Get property by schema name."""
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


def _validate_shape(shape: ValueShape, path: str) -> None:
    if shape.is_container:
        if shape.element is None:
            raise SchemaError(f"{shape.kind.value} shape has no element shape", path)
        _validate_shape(shape.element, f"{path}.element")
    elif shape.kind == ShapeKind.PRIMITIVE:
        if shape.name not in PRIMITIVE_NAMES:
            raise SchemaError(f"unknown primitive type '{shape.name}'", path)
    elif not shape.name:
        raise SchemaError("reference shape has no target name", path)


def validate_resource(resource: ResourceType) -> None:
    """
    Check a resource type for malformed or ambiguous declarations.

    Raises:
        SchemaError: With the schema path of the first offending entry.
    """
    path = f"resources.{resource.token or '<unnamed>'}"

    if not resource.token:
        raise SchemaError("resource type has no token", path)
    if not resource.name or not resource.name.strip():
        raise SchemaError("resource type has no name", path)

    seen: Dict[str, int] = {}
    for index, prop in enumerate(resource.properties):
        prop_path = f"{path}.properties[{index}]"
        if not prop.name or not prop.name.strip():
            raise SchemaError("property has no name", prop_path)
        if prop.name in seen:
            raise SchemaError(
                f"property '{prop.name}' is declared more than once "
                f"(first at index {seen[prop.name]})",
                prop_path,
            )
        seen[prop.name] = index
        _validate_shape(prop.shape, f"{prop_path}.type")


def name_from_token(token: str) -> str:
    """Last segment of a ``pkg:module:Name`` token."""
    return token.rsplit(":", 1)[-1]


def convert_type_spec(spec: Any, path: str) -> ValueShape:
    """Convert a schema type spec dict into a ValueShape."""
    if not isinstance(spec, dict):
        raise SchemaError("type spec must be an object", path)

    ref = spec.get("$ref")
    if ref:
        if ref.endswith("/Any"):
            return ValueShape.primitive("any")
        # "#/types/pkg:module:Name" or "#/resources/pkg:module:Name"
        return ValueShape.reference(name_from_token(ref.rsplit("/", 1)[-1]))

    type_name = spec.get("type")
    if type_name == "array":
        if "items" not in spec:
            raise SchemaError("array type has no 'items'", path)
        return ValueShape.array_of(convert_type_spec(spec["items"], f"{path}.items"))
    if type_name == "object":
        element = spec.get("additionalProperties", {"type": "string"})
        return ValueShape.map_of(
            convert_type_spec(element, f"{path}.additionalProperties")
        )
    if type_name in PRIMITIVE_NAMES:
        return ValueShape.primitive(type_name)

    raise SchemaError(f"unsupported type '{type_name}'", path)


def _language_overrides(spec: Dict[str, Any]) -> Dict[str, str]:
    """Pull ``language.<tag>.name`` overrides out of a schema entry."""
    overrides = {}
    for language, options in (spec.get("language") or {}).items():
        if isinstance(options, dict) and options.get("name"):
            overrides[language] = options["name"]
    return overrides


def convert_resource(
    token: str, spec: Dict[str, Any], version: str = "0.0.0"
) -> ResourceType:
    """
    Convert one resource entry of a schema document.

    A property listed in ``properties`` but not in ``inputProperties`` is
    output-only. Declaration order is ``properties`` order followed by
    input-only properties.
    """
    path = f"resources.{token}"
    if not isinstance(spec, dict):
        raise SchemaError("resource entry must be an object", path)

    outputs = spec.get("properties") or {}
    inputs = spec.get("inputProperties") or {}
    required_outputs = set(spec.get("required") or [])
    required_inputs = set(spec.get("requiredInputs") or [])

    ordered = list(outputs) + [name for name in inputs if name not in outputs]

    properties: List[PropertyDef] = []
    for name in ordered:
        is_input = name in inputs
        source = "inputProperties" if is_input else "properties"
        prop_spec = inputs[name] if is_input else outputs[name]
        prop_path = f"{path}.{source}.{name}"
        if not isinstance(prop_spec, dict):
            raise SchemaError("property entry must be an object", prop_path)

        properties.append(
            PropertyDef(
                name=name,
                shape=convert_type_spec(prop_spec, prop_path),
                required=name in (required_inputs if is_input else required_outputs),
                output_only=not is_input,
                description=prop_spec.get("description"),
                overrides=_language_overrides(prop_spec),
            )
        )

    resource = ResourceType(
        token=token,
        name=name_from_token(token),
        properties=tuple(properties),
        version=spec.get("version", version),
        description=spec.get("description"),
        overrides=_language_overrides(spec),
    )
    validate_resource(resource)
    return resource


def convert_schema_document(
    document: Dict[str, Any],
) -> Tuple[List[ResourceType], List[SchemaError]]:
    """
    Convert a decoded schema document into resource types.

    Failures are collected per resource so that one malformed resource
    does not hide its siblings.

    Returns:
        Tuple of (converted resource types, schema errors).
    """
    if not isinstance(document, dict):
        raise SchemaError("schema document must be an object", "$")

    version = document.get("version", "0.0.0")
    resources = document.get("resources") or {}
    if not isinstance(resources, dict):
        raise SchemaError("'resources' must be an object keyed by token", "resources")

    converted: List[ResourceType] = []
    errors: List[SchemaError] = []

    for token, spec in resources.items():
        try:
            converted.append(convert_resource(token, spec, version))
        except SchemaError as e:
            logger.error("Skipping resource %s: %s", token, e)
            e.token = e.token or token
            errors.append(e)

    logger.info(
        "Converted %d resource type(s) from schema '%s' (%d failed)",
        len(converted),
        document.get("name", "<unnamed>"),
        len(errors),
    )
    return converted, errors
