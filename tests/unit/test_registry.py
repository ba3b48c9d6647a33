"""Tests for the emitter registry."""

from __future__ import annotations

import pytest

from sdkgen.core.config import load_config
from sdkgen.languages.dotnet import DotnetGenerator
from sdkgen.languages.go import GoGenerator
from sdkgen.languages.python import PythonGenerator
from sdkgen.registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    get_registry,
    list_supported_languages,
)


class TestDefaultRegistry:
    def test_languages(self) -> None:
        assert list_supported_languages() == ["dotnet", "go", "python"]

    @pytest.mark.parametrize(
        ("name", "cls"),
        [
            ("dotnet", DotnetGenerator),
            ("csharp", DotnetGenerator),
            ("C#", DotnetGenerator),
            ("py", PythonGenerator),
            ("golang", GoGenerator),
        ],
    )
    def test_aliases(self, name, cls) -> None:
        generator = get_generator(name)
        assert isinstance(generator, cls)

    def test_alias_uses_canonical_config(self) -> None:
        generator = get_generator("csharp")
        assert generator.config.language == "dotnet"
        assert generator.config.namespace == "Pulumi.Example"

    def test_dict_overrides(self) -> None:
        generator = get_generator("go", {"package_name": "aws"})
        assert generator.package_name == "aws"

    def test_config_instance_passes_through(self) -> None:
        config = load_config("python", {"add_comments": False})
        assert get_generator("python", config).config is config

    def test_unknown_language(self) -> None:
        with pytest.raises(RegistryError, match="No generator registered"):
            get_generator("cobol")

    def test_language_info(self) -> None:
        info = get_language_info("golang")
        assert info["name"] == "go"
        assert info["file_extension"] == ".go"
        assert info["aliases"] == ["golang"]
        assert info["case_equality"] == "case-sensitive"
        assert "ID" in info["structural_members"]

    def test_list_all_names(self) -> None:
        names = get_registry().list_all_names()
        assert names["python"] == ["python", "py"]


class TestRegistration:
    def test_rejects_non_generator(self) -> None:
        registry = GeneratorRegistry()
        with pytest.raises(RegistryError):
            registry.register("text", str)

    def test_alias_conflict(self) -> None:
        registry = GeneratorRegistry()
        registry.register("go", GoGenerator, aliases=["golang"])
        with pytest.raises(RegistryError, match="already points to"):
            registry.register("python", PythonGenerator, aliases=["golang"])

    def test_duplicate_registration_skipped(self) -> None:
        registry = GeneratorRegistry()
        registry.register("go", GoGenerator)
        registry.register("go", PythonGenerator)
        assert registry.get_generator_class("go") is GoGenerator

    def test_unregister_removes_aliases(self) -> None:
        registry = GeneratorRegistry()
        registry.register("go", GoGenerator, aliases=["golang"])
        registry.unregister("golang")
        assert not registry.is_supported("go")
        assert not registry.is_supported("golang")
