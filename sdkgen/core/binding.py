"""
Language-agnostic resource bindings.

A ResourceBinding is everything an emitter needs to print one resource
class: resolved member names, the args container, deferred output
accessors, the create and lookup entry points and the options merge that
both of them run through.
"""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .errors import NamingConfigurationError
from .naming import (
    CollisionCallback,
    CollisionResolved,
    Identifier,
    NamingRules,
    Scope,
    resolve,
)
from .schema import PropertyDef, ResourceType, validate_resource
from ..logging_config import get_logger

logger = get_logger(__name__)


class _Absent:
    """Marker for an optional value that was not supplied."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return "ABSENT"


ABSENT = _Absent()

# Id passed by create: an empty id clears whatever the caller supplied
NO_ID = ""


@dataclass(frozen=True)
class ResourceOptions:
    """Options bag controlling a resource's behavior. ``None`` means unset."""

    id: Optional[str] = None
    version: Optional[str] = None
    parent: Optional[str] = None
    provider: Optional[str] = None
    depends_on: Optional[Tuple[str, ...]] = None
    protect: Optional[bool] = None
    ignore_changes: Optional[Tuple[str, ...]] = None
    delete_before_replace: Optional[bool] = None
    aliases: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ResourceOptions":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise TypeError(f"Unknown resource option(s): {', '.join(unknown)}")
        converted = {
            key: tuple(value) if isinstance(value, list) else value
            for key, value in values.items()
        }
        return cls(**converted)

    def set_fields(self) -> Dict[str, Any]:
        """Fields that carry a value."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


OptionsLike = Union[ResourceOptions, Mapping[str, Any], None]


def _coerce_options(options: OptionsLike) -> Optional[ResourceOptions]:
    if options is None or isinstance(options, ResourceOptions):
        return options
    return ResourceOptions.from_mapping(options)


def merge_options(
    defaults: ResourceOptions, caller: OptionsLike = None
) -> ResourceOptions:
    """Overlay the caller's set fields onto ``defaults``, field by field."""
    caller = _coerce_options(caller)
    if caller is None:
        return defaults
    return replace(defaults, **caller.set_fields())


def make_resource_options(
    version: str, options: OptionsLike = None, id: Optional[str] = None
) -> ResourceOptions:
    """
    Compute the effective options for a create or lookup call.

    Defaults always carry the generator version. When ``id`` is given it
    replaces any id the caller put in ``options``: lookup passes the
    provider id and create passes ``NO_ID`` so it never adopts an
    existing resource.
    """
    merged = merge_options(ResourceOptions(version=version), options)
    if id is None:
        return merged

    if merged.id is not None and merged.id != id:
        logger.warning(
            "Options bag id '%s' ignored; explicit id '%s' takes precedence",
            merged.id,
            id,
        )
    return replace(merged, id=id)


class EntryPointKind(Enum):
    CREATE = "create"
    LOOKUP = "lookup"


@dataclass(frozen=True)
class Parameter:
    name: str
    optional: bool = False


@dataclass(frozen=True)
class EntryPoint:
    """A way to obtain a resource instance."""

    kind: EntryPointKind
    name: str
    parameters: Tuple[Parameter, ...]
    forces_id: bool = False

    @property
    def parameter_names(self) -> List[str]:
        return [p.name for p in self.parameters]


@dataclass(frozen=True)
class ArgsField:
    """One constructor-settable property on the args container."""

    identifier: Identifier
    property: PropertyDef
    required: bool
    # ABSENT for optional fields, None when there is no default
    default: Optional[_Absent] = None

    @property
    def name(self) -> str:
        return self.identifier.spelling

    @property
    def has_default(self) -> bool:
        return self.default is ABSENT


@dataclass(frozen=True)
class ArgsContainer:
    """Input type passed to the create entry point."""

    type_name: str
    fields: Tuple[ArgsField, ...] = ()
    empty_factory: Optional[str] = None

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def construct(self, values: Union[Mapping[str, Any], _Absent] = ABSENT) -> Dict[str, Any]:
        """
        Populate the container, keyed by resolved member name.

        Raises:
            TypeError: On unknown members or missing required members.
        """
        values = {} if values is ABSENT else dict(values)

        unknown = sorted(set(values) - set(self.field_names))
        if unknown:
            raise TypeError(f"{self.type_name} has no member(s): {', '.join(unknown)}")

        missing = [f.name for f in self.fields if f.required and f.name not in values]
        if missing:
            raise TypeError(
                f"{self.type_name} is missing required member(s): {', '.join(missing)}"
            )

        return {f.name: values.get(f.name, ABSENT) for f in self.fields}


@dataclass(frozen=True)
class OutputAccessor:
    """A property exposed on the resource, resolved after the provider responds."""

    identifier: Identifier
    property: PropertyDef
    deferred: bool = True

    @property
    def name(self) -> str:
        return self.identifier.spelling

    @property
    def wire_name(self) -> str:
        return self.property.name


@dataclass(frozen=True)
class ResourceRequest:
    """What a create or lookup call hands to the engine."""

    type_token: str
    name: str
    args: Optional[Dict[str, Any]] = field(default=None, hash=False)
    options: ResourceOptions = field(default_factory=ResourceOptions)


@dataclass(frozen=True)
class ResourceBinding:
    """Emission unit for one resource type in one target language."""

    resource: ResourceType
    language: str
    class_name: Identifier
    type_token: str
    version: str
    args: ArgsContainer
    outputs: Tuple[OutputAccessor, ...]
    create: EntryPoint
    lookup: EntryPoint
    identifiers: Tuple[Identifier, ...] = ()
    renames: Tuple[CollisionResolved, ...] = ()

    @property
    def member_names(self) -> List[str]:
        """Resolved spellings of the schema-declared properties."""
        return [i.spelling for i in self.identifiers if not i.structural]

    def output(self, schema_name: str) -> OutputAccessor:
        for accessor in self.outputs:
            if accessor.wire_name == schema_name:
                return accessor
        raise KeyError(schema_name)

    def create_options(self, options: OptionsLike = None) -> ResourceOptions:
        return make_resource_options(self.version, options, id=NO_ID)

    def lookup_options(self, id: str, options: OptionsLike = None) -> ResourceOptions:
        return make_resource_options(self.version, options, id=id)

    def create_request(
        self,
        name: str,
        args: Union[Mapping[str, Any], _Absent] = ABSENT,
        options: OptionsLike = None,
    ) -> ResourceRequest:
        """Model a create call; absent args fall back to an empty container."""
        if not name:
            raise ValueError("resource name must not be empty")
        return ResourceRequest(
            type_token=self.type_token,
            name=name,
            args=self.args.construct(args),
            options=self.create_options(options),
        )

    def lookup_request(
        self, name: str, id: str, options: OptionsLike = None
    ) -> ResourceRequest:
        """Model a lookup of an existing resource by provider id."""
        if not name:
            raise ValueError("resource name must not be empty")
        if not id:
            raise ValueError("lookup requires a provider id")
        return ResourceRequest(
            type_token=self.type_token,
            name=name,
            args=None,
            options=self.lookup_options(id, options),
        )


CREATE_PARAMETERS = (
    Parameter("name"),
    Parameter("args", optional=True),
    Parameter("options", optional=True),
)

LOOKUP_PARAMETERS = (
    Parameter("name"),
    Parameter("id"),
    Parameter("options", optional=True),
)


def build(
    resource: ResourceType,
    rules: NamingRules,
    version: Optional[str] = None,
    *,
    on_collision: Optional[CollisionCallback] = None,
) -> ResourceBinding:
    """
    Build the binding for ``resource`` in the language described by ``rules``.

    Structural members are reserved before any property is resolved, and
    properties are resolved in declaration order.

    Args:
        resource: Validated resource type
        rules: Naming rules of the target language
        version: Version stamped into default options (defaults to the
            resource type's version)
        on_collision: Called for every rename

    Returns:
        ResourceBinding

    Raises:
        SchemaError: If the resource type is malformed
        NamingConfigurationError: If the rules cannot disambiguate a name
    """
    validate_resource(resource)
    language = rules.language

    type_scope = Scope.for_rules(rules, label=f"{language}:{resource.token}:types")
    class_name = resolve(
        resource.desired_name(language),
        type_scope,
        rules,
        case=rules.type_case,
        on_collision=on_collision,
    )
    args_type = resolve(
        class_name.spelling + rules.args_suffix,
        type_scope,
        rules,
        case=rules.type_case,
        on_collision=on_collision,
    )

    scope = Scope.for_rules(rules, label=f"{language}:{resource.token}")
    for member in rules.structural_members:
        scope.reserve(rules.expand(member, class_name.spelling))
    if rules.reserve_type_name:
        scope.reserve(class_name.spelling)
        scope.reserve(args_type.spelling)

    resolved: List[Tuple[PropertyDef, Identifier]] = []
    for prop in resource.properties:
        identifier = resolve(
            prop.desired_name(language), scope, rules, on_collision=on_collision
        )
        resolved.append((prop, identifier))

    args_fields = tuple(
        ArgsField(
            identifier=identifier,
            property=prop,
            required=prop.required,
            default=None if prop.required else ABSENT,
        )
        for prop, identifier in resolved
        if not prop.output_only
    )
    outputs = tuple(
        OutputAccessor(identifier=identifier, property=prop, deferred=True)
        for prop, identifier in resolved
    )

    create = EntryPoint(
        EntryPointKind.CREATE,
        rules.expand(rules.create_name, class_name.spelling),
        CREATE_PARAMETERS,
        forces_id=False,
    )
    lookup = EntryPoint(
        EntryPointKind.LOOKUP,
        rules.expand(rules.lookup_name, class_name.spelling),
        LOOKUP_PARAMETERS,
        forces_id=True,
    )
    if create.name == lookup.name:
        raise NamingConfigurationError(
            f"create and lookup entry points both resolve to '{create.name}'",
            language,
        )

    binding = ResourceBinding(
        resource=resource,
        language=language,
        class_name=class_name,
        type_token=resource.token,
        version=version or resource.version,
        args=ArgsContainer(
            type_name=args_type.spelling,
            fields=args_fields,
            empty_factory=rules.empty_factory_name or None,
        ),
        outputs=outputs,
        create=create,
        lookup=lookup,
        identifiers=scope.identifiers,
        renames=tuple(type_scope.events) + tuple(scope.events),
    )

    logger.debug(
        "Built %s binding for %s: %d args field(s), %d output(s), %d rename(s)",
        language,
        resource.token,
        len(args_fields),
        len(outputs),
        len(binding.renames),
    )
    return binding
