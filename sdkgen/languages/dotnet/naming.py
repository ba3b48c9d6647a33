"""
C#-specific naming rules.

Handles C# keywords, the members every generated resource class inherits
and the CLS requirement that public names differ by more than case.
"""

# C# keywords
CSHARP_RESERVED_WORDS = {
    "abstract",
    "as",
    "base",
    "bool",
    "break",
    "byte",
    "case",
    "catch",
    "char",
    "checked",
    "class",
    "const",
    "continue",
    "decimal",
    "default",
    "delegate",
    "do",
    "double",
    "else",
    "enum",
    "event",
    "explicit",
    "extern",
    "false",
    "finally",
    "fixed",
    "float",
    "for",
    "foreach",
    "goto",
    "if",
    "implicit",
    "in",
    "int",
    "interface",
    "internal",
    "is",
    "lock",
    "long",
    "namespace",
    "new",
    "null",
    "object",
    "operator",
    "out",
    "override",
    "params",
    "private",
    "protected",
    "public",
    "readonly",
    "ref",
    "return",
    "sbyte",
    "sealed",
    "short",
    "sizeof",
    "stackalloc",
    "static",
    "string",
    "struct",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "uint",
    "ulong",
    "unchecked",
    "unsafe",
    "ushort",
    "using",
    "virtual",
    "void",
    "volatile",
    "while",
}

# Members of the generated class and its CustomResource base
DOTNET_STRUCTURAL_MEMBERS = [
    "Get",
    "Empty",
    "Id",
    "Urn",
    "MakeResourceOptions",
    "GetResourceType",
    "GetResourceName",
    "RegisterOutputs",
]

DOTNET_NAMING = {
    "reserved_words": CSHARP_RESERVED_WORDS,
    "case_equality": "case-insensitive",
    "disambiguation": "numeric-suffix",
    "structural_members": DOTNET_STRUCTURAL_MEMBERS,
    "member_case": "pascal",
    "type_case": "pascal",
    "rename_table": {"Id": "ResourceId", "Urn": "ResourceUrn"},
    "suffix_separator": "",
    "reserve_type_name": True,
    "digit_prefix": "_",
    "args_suffix": "Args",
    "create_name": "{type}",
    "lookup_name": "Get",
    "empty_factory_name": "Empty",
}


def validate_dotnet_namespace(namespace: str) -> list[str]:
    """
    Validate a dotted C# namespace.

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    if not namespace:
        errors.append("Namespace cannot be empty")
        return errors

    for part in namespace.split("."):
        if not part.isidentifier():
            errors.append(f"'{part}' is not a valid C# identifier")
        elif part in CSHARP_RESERVED_WORDS:
            errors.append(f"'{part}' is a C# keyword")

    return errors
