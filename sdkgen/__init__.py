"""
sdkgen - resource binding generator.

Generates per-language resource bindings (C#, Python, Go) from a provider
schema, resolving member names so that they never collide with reserved
words or the members every generated resource class already has.
"""

from .core.binding import ResourceBinding, build
from .core.config import ConfigManager, GeneratorConfig, load_config, load_rules
from .core.errors import ConfigError, GeneratorError, NamingConfigurationError, SchemaError
from .core.generator import CodeGenerator, GenerationResult, generate_bindings, generate_code
from .core.schema import PropertyDef, ResourceType, ValueShape, convert_schema_document
from .registry import (
    GeneratorRegistry,
    get_generator,
    get_language_info,
    list_supported_languages,
)

# Version info
__version__ = "0.1.0"


# Convenience functions
def generate_from_schema(document, languages=("dotnet",), config=None, max_workers=None):
    """
    Generate bindings for every resource in a decoded schema document.

    Args:
        document: Decoded Pulumi-style schema document
        languages: Target language names or aliases
        config: Per-run overrides applied to every language, or a config file path
        max_workers: Thread pool size (None lets the executor decide)

    Returns:
        List of GenerationResult sorted by (resource token, language), one
        per pair; resources rejected during conversion yield a failed
        result for every language
    """
    resources, errors = convert_schema_document(document)
    generators = [get_generator(language, config) for language in languages]

    results = generate_bindings(resources, generators, max_workers=max_workers)
    for error in errors:
        for generator in generators:
            results.append(
                GenerationResult.error(
                    f"Schema error: {error}",
                    exception=error,
                    metadata={"resource": error.token or "", "language": generator.language_name},
                )
            )
    results.sort(key=lambda r: (r.resource_token, r.language))
    return results


def quick_generate(resource: ResourceType, language: str = "dotnet", **options) -> str:
    """
    Generate the binding source for a single resource type.

    Args:
        resource: Resource type to emit
        language: Target language
        **options: Generator configuration overrides

    Returns:
        Generated code string
    """
    generator = get_generator(language, options or None)
    result = generate_code(generator, generator.build_binding(resource))

    if result.success:
        return result.code
    raise GeneratorError(f"Code generation failed: {result.error_message}")


# Export main interfaces
__all__ = [
    "CodeGenerator",
    "ConfigError",
    "ConfigManager",
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "GeneratorRegistry",
    "NamingConfigurationError",
    "PropertyDef",
    "ResourceBinding",
    "ResourceType",
    "SchemaError",
    "ValueShape",
    "build",
    "generate_bindings",
    "generate_from_schema",
    "get_generator",
    "get_language_info",
    "list_supported_languages",
    "load_config",
    "load_rules",
    "quick_generate",
    "__version__",
]
