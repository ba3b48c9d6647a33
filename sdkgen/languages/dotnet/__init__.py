"""
C# binding emitter.

Generates Pulumi-style CustomResource classes with Output<T> properties,
a static Get lookup and a ResourceArgs input type.
"""

from .generator import DotnetGenerator, create_dotnet_generator
from .naming import CSHARP_RESERVED_WORDS, DOTNET_NAMING, validate_dotnet_namespace

__all__ = [
    "DotnetGenerator",
    "create_dotnet_generator",
    "CSHARP_RESERVED_WORDS",
    "DOTNET_NAMING",
    "validate_dotnet_namespace",
]
