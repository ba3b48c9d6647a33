"""Shared fixtures for unit tests."""

from __future__ import annotations

import copy
import json
from typing import TYPE_CHECKING

import pytest

from sdkgen.core.naming import CaseEquality, NamingRules
from sdkgen.core.schema import PropertyDef, ResourceType, ValueShape

if TYPE_CHECKING:
    from pathlib import Path


_SCHEMA_DOCUMENT = {
    "name": "example",
    "version": "1.0.0",
    "resources": {
        "example::ResourceInput": {
            "properties": {"Bar": {"type": "string"}},
        },
        "example:storage:Bucket": {
            "description": "A storage bucket.",
            "properties": {
                "id": {"type": "string"},
                "arn": {"type": "string", "description": "Bucket ARN."},
            },
            "required": ["arn"],
            "inputProperties": {
                "id": {"type": "string"},
                "tags": {"type": "object", "additionalProperties": {"type": "string"}},
            },
            "requiredInputs": ["id"],
        },
    },
}


@pytest.fixture
def schema_document() -> dict:
    """A decoded schema document with two resources."""
    return copy.deepcopy(_SCHEMA_DOCUMENT)


@pytest.fixture
def resource_input() -> ResourceType:
    """The ResourceInput resource: one optional, output-only string ``Bar``."""
    return ResourceType(
        token="example::ResourceInput",
        name="ResourceInput",
        properties=(PropertyDef("Bar", output_only=True),),
        version="0.0.1",
    )


@pytest.fixture
def bucket() -> ResourceType:
    return ResourceType(
        token="example:storage:Bucket",
        name="Bucket",
        properties=(
            PropertyDef("id", required=True),
            PropertyDef("arn", required=True, output_only=True),
            PropertyDef("tags", shape=ValueShape.map_of(ValueShape.primitive("string"))),
            PropertyDef("size", shape=ValueShape.primitive("integer")),
        ),
        version="1.0.0",
    )


@pytest.fixture
def structural_rules() -> NamingRules:
    """PascalCase, case-insensitive rules reserving only ``Get`` and ``Empty``."""
    return NamingRules(
        language="dotnet",
        case_equality=CaseEquality.INSENSITIVE,
        structural_members=("Get", "Empty"),
    )


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(_SCHEMA_DOCUMENT))
    return path
