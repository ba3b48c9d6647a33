"""
Base generator interface for all binding emitters.

Defines the contract every language emitter implements and the driver
that builds and emits bindings for many resource types in parallel.
"""

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .binding import ResourceBinding, build
from .config import GeneratorConfig
from .errors import GeneratorError, SchemaError
from .naming import CollisionCallback
from .schema import ResourceType, ShapeKind, ValueShape
from .templates import TemplateEngine, TemplateError, create_template_engine
from ..logging_config import get_logger

logger = get_logger(__name__)


class CodeGenerator(ABC):
    """Abstract base class for all binding emitters.

    Emitters render a ResourceBinding to text. They never resolve or
    re-case names: every member spelling comes from the binding.
    """

    def __init__(self, config: GeneratorConfig):
        """Initialize generator with its language configuration."""
        self.config = config
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        template_dir = self.get_template_directory()
        if template_dir:
            self._template_engine = create_template_engine(template_dir)
        else:
            # Fallback to in-memory templates
            self._template_engine = create_template_engine()

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Return the name of the target language (e.g., 'dotnet', 'go')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.cs', '.go')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        Subclasses should override this to provide their template directory.
        Return None to use in-memory templates only.
        """
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    def build_binding(
        self,
        resource: ResourceType,
        on_collision: Optional[CollisionCallback] = None,
    ) -> ResourceBinding:
        """Build the binding for ``resource`` with this language's rules."""
        return build(
            resource, self.config.rules, self.config.version, on_collision=on_collision
        )

    @abstractmethod
    def generate(self, binding: ResourceBinding) -> str:
        """
        Render source text for one resource binding.

        Args:
            binding: Binding built with this generator's rules

        Returns:
            Generated code as a string
        """
        pass

    @abstractmethod
    def type_name(self, shape: ValueShape, optional: bool = False) -> str:
        """Spell the value type of ``shape`` in the target language."""
        pass

    def file_stem(self, binding: ResourceBinding) -> str:
        """File name without extension; derived from the resource type only."""
        return binding.class_name.spelling

    def output_path(self, binding: ResourceBinding) -> PurePosixPath:
        """
        Relative output path for a binding.

        Depends only on the resource token and the language, so parallel
        emission never writes the same file twice.
        """
        parts = binding.type_token.split(":")
        module = parts[1] if len(parts) == 3 else ""
        path = PurePosixPath(self.language_name)
        if module and module != "index":
            path = path / module
        return path / f"{self.file_stem(binding)}{self.file_extension}"

    def validate_binding(self, binding: ResourceBinding) -> List[str]:
        """
        Collect warnings about a binding before emission.

        Language generators may override this to add their own checks.
        """
        warnings = []

        if not binding.resource.properties:
            warnings.append(
                f"Resource {binding.type_token} has no properties - "
                f"will generate an empty {binding.args.type_name}"
            )

        for event in binding.renames:
            warnings.append(
                f"{event.desired} renamed to {event.resolved} "
                f"({event.reason.value} '{event.conflicts_with}')"
            )

        for accessor in binding.outputs:
            if accessor.property.shape.kind == ShapeKind.PRIMITIVE and (
                accessor.property.shape.name == "any"
            ):
                warnings.append(
                    f"Output {binding.class_name}.{accessor.name} has an untyped value"
                )

        return warnings

    def format_code(self, code: str) -> str:
        """
        Apply language-specific formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines).rstrip("\n") + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context."""
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        code: str,
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
        binding: Optional[ResourceBinding] = None,
        path: Optional[PurePosixPath] = None,
    ):
        """
        Initialize generation result.

        Args:
            code: Generated code
            warnings: Any warnings from generation
            metadata: Additional metadata about generation
            binding: Binding the code was rendered from
            path: Relative output path
        """
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.binding = binding
        self.path = path
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @property
    def resource_token(self) -> str:
        return self.metadata.get("resource", "")

    @property
    def language(self) -> str:
        return self.metadata.get("language", "")

    @classmethod
    def error(
        cls,
        message: str,
        exception: Exception = None,
        metadata: Dict[str, Any] = None,
    ) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(code="", metadata=metadata)
        result.success = False
        result.error_message = message
        result.exception = exception
        return result


def generate_code(generator: CodeGenerator, binding: ResourceBinding) -> GenerationResult:
    """
    Emit code for one binding with error handling.

    Args:
        generator: Emitter for the binding's language
        binding: Binding to render

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    metadata = {
        "language": generator.language_name,
        "resource": binding.type_token,
        "class_name": binding.class_name.spelling,
        "file_extension": generator.file_extension,
        "args_fields": len(binding.args.fields),
        "outputs": len(binding.outputs),
        "renames": len(binding.renames),
    }

    try:
        warnings = generator.validate_binding(binding)
        code = generator.format_code(generator.generate(binding))
    except TemplateError as e:
        logger.error("Emission failed for %s (%s): %s", binding.type_token, generator.language_name, e)
        return GenerationResult.error(
            f"Code generation failed: {e}", exception=e, metadata=metadata
        )

    return GenerationResult(
        code,
        warnings,
        metadata,
        binding=binding,
        path=generator.output_path(binding),
    )


def generate_resource(
    generator: CodeGenerator,
    resource: ResourceType,
    on_collision: Optional[CollisionCallback] = None,
) -> GenerationResult:
    """
    Build and emit one resource type in one language.

    A SchemaError only fails this resource; a NamingConfigurationError
    propagates because the language rules themselves are broken.
    """
    try:
        binding = generator.build_binding(resource, on_collision=on_collision)
    except SchemaError as e:
        logger.error("Schema error in %s: %s", resource.token, e)
        return GenerationResult.error(
            f"Schema error: {e}",
            exception=e,
            metadata={"language": generator.language_name, "resource": resource.token},
        )

    return generate_code(generator, binding)


def generate_bindings(
    resources: Iterable[ResourceType],
    generators: Sequence[CodeGenerator],
    max_workers: Optional[int] = None,
) -> List[GenerationResult]:
    """
    Build and emit every (resource type, language) pair.

    Pairs are processed on a thread pool; each task owns its scopes, so
    no coordination is needed beyond collecting results. Results are
    sorted by (resource token, language) regardless of completion order.

    Raises:
        NamingConfigurationError: If any language's rules cannot make progress
        GeneratorError: If two results would be written to the same path
    """
    resources = list(resources)
    tasks = [(generator, resource) for resource in resources for generator in generators]
    logger.info(
        "Generating %d binding(s) for %d resource type(s) in %d language(s)",
        len(tasks),
        len(resources),
        len(generators),
    )

    results: List[GenerationResult] = []
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [pool.submit(generate_resource, g, r) for g, r in tasks]
        try:
            for future in as_completed(futures):
                results.append(future.result())
        except GeneratorError:
            for future in futures:
                future.cancel()
            raise

    results.sort(key=lambda r: (r.resource_token, r.language))

    seen: Dict[PurePosixPath, str] = {}
    for result in results:
        if result.path is None:
            continue
        if result.path in seen:
            raise GeneratorError(
                f"{result.resource_token} and {seen[result.path]} both map to {result.path}"
            )
        seen[result.path] = result.resource_token

    failed = sum(1 for r in results if not r.success)
    logger.info("Generation finished: %d succeeded, %d failed", len(results) - failed, failed)
    return results
