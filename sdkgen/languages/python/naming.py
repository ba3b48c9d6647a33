"""
Python-specific naming rules.

Keywords get the conventional trailing underscore; everything else that
collides falls back to a numeric suffix.
"""

# Python reserved words
PYTHON_RESERVED_WORDS = {
    "False",
    "None",
    "True",
    "and",
    "as",
    "assert",
    "async",
    "await",
    "break",
    "class",
    "continue",
    "def",
    "del",
    "elif",
    "else",
    "except",
    "finally",
    "for",
    "from",
    "global",
    "if",
    "import",
    "in",
    "is",
    "lambda",
    "nonlocal",
    "not",
    "or",
    "pass",
    "raise",
    "return",
    "try",
    "while",
    "with",
    "yield",
}

# Members of the generated class and its CustomResource base
PYTHON_STRUCTURAL_MEMBERS = [
    "__init__",
    "get",
    "id",
    "urn",
    "resource_name",
    "opts",
    "args",
]

PYTHON_NAMING = {
    "reserved_words": PYTHON_RESERVED_WORDS,
    "case_equality": "case-sensitive",
    "disambiguation": "numeric-suffix",
    "structural_members": PYTHON_STRUCTURAL_MEMBERS,
    "member_case": "snake",
    "type_case": "pascal",
    "rename_table": {word: f"{word}_" for word in PYTHON_RESERVED_WORDS},
    "suffix_separator": "_",
    "reserve_type_name": False,
    "digit_prefix": "_",
    "args_suffix": "Args",
    "create_name": "__init__",
    "lookup_name": "get",
    "empty_factory_name": "",
}


def module_name(class_name: str) -> str:
    """File stem for a generated resource module."""
    from ...core.naming import NamingCase, convert_case

    return convert_case(class_name, NamingCase.SNAKE_CASE)
