"""
Language-specific binding emitters.

Each subpackage holds the naming rules, the emitter and its templates for
one target language.
"""

from .dotnet import DotnetGenerator, create_dotnet_generator
from .go import GoGenerator, create_go_generator
from .python import PythonGenerator, create_python_generator

__all__ = [
    "DotnetGenerator",
    "GoGenerator",
    "PythonGenerator",
    "create_dotnet_generator",
    "create_go_generator",
    "create_python_generator",
]
