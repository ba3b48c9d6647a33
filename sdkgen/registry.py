"""
Emitter registry for managing available target languages.

Provides registration by canonical name plus aliases, and instantiation
of emitters with merged configuration.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from .core.config import GeneratorConfig, load_config
from .core.errors import GeneratorError
from .core.generator import CodeGenerator
from .logging_config import get_logger

logger = get_logger(__name__)


class RegistryError(GeneratorError):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Registry for managing available binding emitters."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[CodeGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register an emitter for a language.

        Args:
            language: Canonical language name (e.g., 'dotnet', 'go')
            generator_class: Emitter class implementing CodeGenerator
            aliases: Alternative names for this language
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If generator class is invalid or an alias conflicts
        """
        if not (isinstance(generator_class, type) and issubclass(generator_class, CodeGenerator)):
            raise RegistryError("Generator class must inherit from CodeGenerator")

        language_key = language.lower()

        if language_key in self._generators and not replace:
            logger.debug("Language %s already registered, skipping", language_key)
            return

        self._generators[language_key] = generator_class

        for alias in aliases or []:
            alias_key = alias.lower()
            if alias_key == language_key:
                continue

            if not replace:
                if alias_key in self._generators:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing primary language"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != language_key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )

            self._aliases[alias_key] = language_key

    def unregister(self, language: str):
        """Unregister an emitter and its aliases."""
        language_key = self.canonical_name(language)
        self._generators.pop(language_key, None)

        for alias in [a for a, target in self._aliases.items() if target == language_key]:
            del self._aliases[alias]

    def canonical_name(self, language: str) -> str:
        """Resolve an alias to its canonical language name."""
        language_key = language.lower()
        return self._aliases.get(language_key, language_key)

    def get_generator_class(self, language: str) -> Type[CodeGenerator]:
        """
        Get emitter class for language.

        Raises:
            RegistryError: If language not found
        """
        language_key = self.canonical_name(language)
        if language_key in self._generators:
            return self._generators[language_key]

        raise RegistryError(
            f"No generator registered for language: {language}. "
            f"Available: {', '.join(self.list_languages())}"
        )

    def create_generator(
        self,
        language: str,
        config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> CodeGenerator:
        """
        Create emitter instance for language.

        Args:
            language: Language name or alias
            config: GeneratorConfig, override dict, or config file path
            config_file: Config file applied beneath dict overrides

        Returns:
            Configured emitter instance

        Raises:
            RegistryError: If the language is unknown or config has a bad type
            ConfigError: If the merged configuration is invalid
        """
        generator_class = self.get_generator_class(language)
        language_key = self.canonical_name(language)

        if isinstance(config, GeneratorConfig):
            final_config = config
        elif isinstance(config, (str, Path)):
            final_config = load_config(language_key, config_file=config)
        elif isinstance(config, dict) or config is None:
            final_config = load_config(language_key, config, config_file)
        else:
            raise RegistryError(f"Invalid config type: {type(config)}")

        return generator_class(final_config)

    def list_languages(self) -> List[str]:
        """Get list of registered canonical language names."""
        return sorted(self._generators.keys())

    def get_aliases_for_language(self, language: str) -> List[str]:
        """Get all aliases for a specific language."""
        language_key = self.canonical_name(language)
        return sorted(alias for alias, target in self._aliases.items() if target == language_key)

    def list_all_names(self) -> Dict[str, List[str]]:
        """Map each canonical language to all names it answers to."""
        return {
            language: [language] + self.get_aliases_for_language(language)
            for language in self.list_languages()
        }

    def is_supported(self, language: str) -> bool:
        """Check if language (or alias) is supported."""
        return self.canonical_name(language) in self._generators

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """
        Get information about a registered language.

        Raises:
            RegistryError: If language not found
        """
        generator = self.create_generator(language)
        rules = generator.config.rules

        return {
            "name": generator.language_name,
            "class": type(generator).__name__,
            "file_extension": generator.file_extension,
            "aliases": self.get_aliases_for_language(language),
            "module": type(generator).__module__,
            "case_equality": rules.case_equality.value,
            "disambiguation": rules.disambiguation.value,
            "structural_members": list(rules.structural_members),
            "reserved_words": len(rules.reserved_words),
        }


# Global registry instance - created once
_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global emitter registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: GeneratorRegistry):
    """Register the built-in emitters with their aliases."""
    from .languages.dotnet import DotnetGenerator
    from .languages.go import GoGenerator
    from .languages.python import PythonGenerator

    registry.register("dotnet", DotnetGenerator, aliases=["csharp", "c#", "cs"])
    registry.register("python", PythonGenerator, aliases=["py"])
    registry.register("go", GoGenerator, aliases=["golang"])


# Public API functions using the global registry


def register_generator(
    language: str,
    generator_class: Type[CodeGenerator],
    aliases: Optional[List[str]] = None,
):
    """Register an emitter in the global registry."""
    get_registry().register(language, generator_class, aliases)


def get_generator(
    language: str,
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> CodeGenerator:
    """Get emitter instance from global registry."""
    return get_registry().create_generator(language, config, config_file)


def list_supported_languages() -> List[str]:
    """List all supported languages from global registry."""
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    """Check if language is supported by global registry."""
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    """Get information about a supported language."""
    return get_registry().get_language_info(language)


def list_all_language_info() -> Dict[str, Dict[str, Any]]:
    """Get information about all supported languages."""
    return {language: get_language_info(language) for language in list_supported_languages()}
