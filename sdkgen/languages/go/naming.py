"""
Go-specific naming rules.

Handles Go reserved words, the fields promoted from the embedded
resource state and exported-identifier conventions.
"""

# Go reserved words
GO_RESERVED_WORDS = {
    "break",
    "case",
    "chan",
    "const",
    "continue",
    "default",
    "defer",
    "else",
    "fallthrough",
    "for",
    "func",
    "go",
    "goto",
    "if",
    "import",
    "interface",
    "map",
    "package",
    "range",
    "return",
    "select",
    "struct",
    "switch",
    "type",
    "var",
}

# Promoted from pulumi.CustomResourceState and the generated helpers
GO_STRUCTURAL_MEMBERS = [
    "CustomResourceState",
    "ID",
    "URN",
    "ElementType",
    "ToOutput",
    "New{type}",
    "Get{type}",
]

GO_NAMING = {
    "reserved_words": GO_RESERVED_WORDS,
    "case_equality": "case-sensitive",
    "disambiguation": "numeric-suffix",
    "structural_members": GO_STRUCTURAL_MEMBERS,
    "member_case": "pascal",
    "type_case": "pascal",
    "rename_table": {},
    "suffix_separator": "",
    "reserve_type_name": False,
    # Exported Go identifiers must start with an upper-case letter
    "digit_prefix": "X",
    "args_suffix": "Args",
    "create_name": "New{type}",
    "lookup_name": "Get{type}",
    "empty_factory_name": "",
}


def validate_go_package_name(name: str) -> list[str]:
    """
    Validate Go package name according to Go naming rules.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not name:
        errors.append("Package name cannot be empty")
        return errors

    if not name.isidentifier():
        errors.append(f"'{name}' is not a valid Go identifier")

    if name[0].isupper():
        errors.append("Package names should be lowercase")

    if "_" in name:
        errors.append("Package names should not contain underscores")

    if name.lower() in GO_RESERVED_WORDS:
        errors.append(f"'{name}' is a Go reserved word")

    return errors
