"""
Go binding emitter.

Generates resource structs embedding pulumi.CustomResourceState with
New<Type>/Get<Type> functions and an Args input struct.
"""

from .generator import GoGenerator, create_go_generator
from .naming import GO_NAMING, GO_RESERVED_WORDS, validate_go_package_name

__all__ = [
    "GoGenerator",
    "create_go_generator",
    "GO_NAMING",
    "GO_RESERVED_WORDS",
    "validate_go_package_name",
]
