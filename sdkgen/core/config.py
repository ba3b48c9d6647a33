"""
Configuration management for binding generation.

Handles loading and merging configuration from JSON files, providing
per-language naming rules as plain data plus generator settings.
"""

import copy
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import ConfigError
from .naming import (
    CaseEquality,
    DisambiguationStrategy,
    NamingCase,
    NamingRules,
    check_rules,
)
from ..logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class GeneratorConfig:
    """Settings for generating one target language."""

    language: str
    rules: NamingRules

    # Output settings
    package_name: str = "example"
    namespace: Optional[str] = None

    # Stamped into default resource options; None uses the schema version
    version: Optional[str] = None

    # Code style settings
    add_comments: bool = True

    # Custom settings (language-specific)
    custom: Dict[str, Any] = field(default_factory=dict)


_ENUM_FIELDS = {
    "case_equality": CaseEquality,
    "disambiguation": DisambiguationStrategy,
    "member_case": NamingCase,
    "type_case": NamingCase,
}

_NAMING_FIELDS = set(NamingRules.__dataclass_fields__) - {"language"}


def rules_from_dict(language: str, data: Dict[str, Any]) -> NamingRules:
    """
    Build NamingRules from a plain dictionary.

    ``extra_reserved_words`` is added to ``reserved_words`` rather than
    replacing it.

    Raises:
        ConfigError: On unknown keys or invalid enum values.
    """
    data = dict(data)
    extra = data.pop("extra_reserved_words", [])

    unknown = sorted(set(data) - _NAMING_FIELDS)
    if unknown:
        raise ConfigError(
            f"Unknown naming setting(s) for {language}: {', '.join(unknown)}"
        )

    kwargs: Dict[str, Any] = {}
    for key, value in data.items():
        if key in _ENUM_FIELDS:
            enum_type = _ENUM_FIELDS[key]
            try:
                value = value if isinstance(value, enum_type) else enum_type(value)
            except ValueError:
                valid = ", ".join(member.value for member in enum_type)
                raise ConfigError(
                    f"Invalid {key} for {language}: {value!r} (expected one of {valid})"
                )
        elif key == "reserved_words":
            value = frozenset(value)
        elif key == "structural_members":
            value = tuple(value)
        elif key == "rename_table":
            value = dict(value)
        kwargs[key] = value

    if extra:
        kwargs["reserved_words"] = frozenset(kwargs.get("reserved_words", ())) | set(extra)

    return NamingRules(language=language, **kwargs)


def rules_to_dict(rules: NamingRules) -> Dict[str, Any]:
    """Inverse of :func:`rules_from_dict`, JSON-serializable."""
    result: Dict[str, Any] = {}
    for name in sorted(_NAMING_FIELDS):
        value = getattr(rules, name)
        if name in _ENUM_FIELDS:
            value = value.value
        elif name == "reserved_words":
            value = sorted(value)
        elif name == "structural_members":
            value = list(value)
        elif name == "rename_table":
            value = dict(value)
        result[name] = value
    return result


def _merge_settings(base: Dict[str, Any], overrides: Dict[str, Any]) -> None:
    """Merge ``overrides`` into ``base``; ``naming`` merges field by field."""
    for key, value in overrides.items():
        if key == "naming":
            if not isinstance(value, dict):
                raise ConfigError("'naming' must be a JSON object")
            base.setdefault("naming", {}).update(value)
        else:
            base[key] = value


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported languages."""
        from ..languages.dotnet.naming import DOTNET_NAMING
        from ..languages.go.naming import GO_NAMING
        from ..languages.python.naming import PYTHON_NAMING

        self._configs["dotnet"] = {
            "package_name": "example",
            "namespace": "Pulumi.Example",
            "add_comments": True,
            "naming": DOTNET_NAMING,
        }

        self._configs["python"] = {
            "package_name": "pulumi_example",
            "add_comments": True,
            "naming": PYTHON_NAMING,
        }

        self._configs["go"] = {
            "package_name": "example",
            "add_comments": True,
            "custom": {"sdk_import": "github.com/pulumi/pulumi/sdk/v3/go/pulumi"},
            "naming": GO_NAMING,
        }

    def register_language(self, language: str, defaults: Dict[str, Any]) -> None:
        """Add or replace the defaults of a language."""
        self._configs[language.lower()] = copy.deepcopy(defaults)

    def get_config(
        self,
        language: str,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a language.

        Precedence: defaults, then the config file (top-level keys and
        its ``languages.<language>`` section), then ``custom_config``.

        Args:
            language: Target language name
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the language

        Raises:
            ConfigError: If the language is unknown or settings are invalid
            NamingConfigurationError: If the naming rules cannot make progress
        """
        language = language.lower()
        if language not in self._configs:
            raise ConfigError(
                f"No configuration for language: {language}. "
                f"Available: {', '.join(self.list_languages())}"
            )

        base_config = copy.deepcopy(self._configs[language])

        if config_file:
            file_config = self._load_config_file(config_file)
            sections = file_config.pop("languages", {})
            _merge_settings(base_config, file_config)
            _merge_settings(base_config, sections.get(language, {}))

        if custom_config:
            _merge_settings(base_config, custom_config)

        config = self._dict_to_config(language, base_config)
        check_rules(config.rules)
        return config

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")
        if not isinstance(config.get("languages", {}), dict):
            raise ConfigError(f"'languages' must be a JSON object: {path}")

        logger.debug("Loaded configuration file %s", path)
        return config

    def _dict_to_config(self, language: str, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = set(GeneratorConfig.__dataclass_fields__) - {"language", "rules"}

        config_args: Dict[str, Any] = {}
        custom_args: Dict[str, Any] = {}

        for key, value in config_dict.items():
            if key == "naming":
                continue
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        # Unknown keys land in the custom dict
        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        rules = rules_from_dict(language, config_dict.get("naming", {}))
        return GeneratorConfig(language=language, rules=rules, **config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = {
            "package_name": config.package_name,
            "namespace": config.namespace,
            "version": config.version,
            "add_comments": config.add_comments,
            "naming": rules_to_dict(config.rules),
        }
        config_dict.update(config.custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(
                    {"languages": {config.language: config_dict}},
                    f,
                    indent=2,
                    ensure_ascii=False,
                )
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def list_languages(self) -> List[str]:
        """Get list of configured languages."""
        return sorted(self._configs.keys())

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration for a language.

        Returns:
            List of validation warnings
        """
        warnings = []
        rules = config.rules

        for member in rules.structural_members:
            reserved = rules.reserved_match(member)
            if reserved is not None:
                warnings.append(f"Structural member '{member}' is a reserved word")

        for source, target in rules.rename_table.items():
            if rules.reserved_match(target) is not None:
                warnings.append(
                    f"Rename of '{source}' targets reserved word '{target}'"
                )

        if not rules.args_suffix:
            warnings.append("Empty args_suffix: args type will be disambiguated")

        if config.package_name and not config.package_name.replace(".", "_").isidentifier():
            warnings.append(f"Invalid package name: {config.package_name}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    language: str,
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        language: Target language name
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the language
    """
    return get_config_manager().get_config(language, custom_config, config_file)


def load_rules(language: str, overrides: Optional[Dict[str, Any]] = None) -> NamingRules:
    """Naming rules of ``language`` with optional field overrides."""
    custom = {"naming": overrides} if overrides else None
    return load_config(language, custom).rules
