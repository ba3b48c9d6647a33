"""
Python binding emitter.

Generates pulumi.CustomResource subclasses with snake_case members and an
@pulumi.input_type args class.
"""

from .generator import PythonGenerator, create_python_generator
from .naming import PYTHON_NAMING, PYTHON_RESERVED_WORDS, module_name

__all__ = [
    "PythonGenerator",
    "create_python_generator",
    "PYTHON_NAMING",
    "PYTHON_RESERVED_WORDS",
    "module_name",
]
