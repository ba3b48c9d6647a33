"""
Error taxonomy for binding generation.

SchemaError is local to one resource type; NamingConfigurationError
means the per-language rules are broken and aborts the whole run.
"""

from typing import Optional


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class SchemaError(GeneratorError):
    """Malformed or ambiguous resource type in the schema model."""

    def __init__(
        self, message: str, path: Optional[str] = None, token: Optional[str] = None
    ):
        self.message = message
        self.path = path
        self.token = token  # Resource type the error belongs to, when known
        super().__init__(f"{path}: {message}" if path else message)


class ConfigError(GeneratorError):
    """Exception raised for configuration-related errors."""

    pass


class NamingConfigurationError(ConfigError):
    """Naming rules cannot make forward progress when disambiguating."""

    def __init__(self, message: str, language: Optional[str] = None):
        self.language = language
        super().__init__(f"[{language}] {message}" if language else message)
