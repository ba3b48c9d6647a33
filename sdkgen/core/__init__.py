"""
Core binding generation components.

Provides the schema model, name resolution, binding builder and the base
classes used by all language emitters.
"""

from .binding import (
    ABSENT,
    NO_ID,
    ArgsContainer,
    ArgsField,
    EntryPoint,
    EntryPointKind,
    OutputAccessor,
    ResourceBinding,
    ResourceOptions,
    ResourceRequest,
    build,
    make_resource_options,
    merge_options,
)
from .config import ConfigManager, GeneratorConfig, load_config, load_rules
from .errors import ConfigError, GeneratorError, NamingConfigurationError, SchemaError
from .generator import (
    CodeGenerator,
    GenerationResult,
    generate_bindings,
    generate_code,
    generate_resource,
)
from .naming import (
    CaseEquality,
    CollisionReason,
    CollisionResolved,
    DisambiguationStrategy,
    Identifier,
    NamingCase,
    NamingRules,
    Scope,
    convert_case,
    normalize,
    resolve,
    resolve_all,
)
from .schema import (
    PropertyDef,
    ResourceType,
    ShapeKind,
    ValueShape,
    convert_schema_document,
    validate_resource,
)
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Schema model
    "PropertyDef",
    "ResourceType",
    "ShapeKind",
    "ValueShape",
    "convert_schema_document",
    "validate_resource",
    # Name resolution
    "CaseEquality",
    "CollisionReason",
    "CollisionResolved",
    "DisambiguationStrategy",
    "Identifier",
    "NamingCase",
    "NamingRules",
    "Scope",
    "convert_case",
    "normalize",
    "resolve",
    "resolve_all",
    # Bindings
    "ABSENT",
    "NO_ID",
    "ArgsContainer",
    "ArgsField",
    "EntryPoint",
    "EntryPointKind",
    "OutputAccessor",
    "ResourceBinding",
    "ResourceOptions",
    "ResourceRequest",
    "build",
    "make_resource_options",
    "merge_options",
    # Emission
    "CodeGenerator",
    "GenerationResult",
    "generate_bindings",
    "generate_code",
    "generate_resource",
    # Configuration
    "ConfigManager",
    "GeneratorConfig",
    "load_config",
    "load_rules",
    # Errors
    "ConfigError",
    "GeneratorError",
    "NamingConfigurationError",
    "SchemaError",
    # Templates
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
