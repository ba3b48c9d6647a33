"""Tests for the language emitters and parallel generation."""

from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from sdkgen.core.config import GeneratorConfig
from sdkgen.core.errors import GeneratorError, NamingConfigurationError, SchemaError
from sdkgen.core.generator import generate_bindings, generate_code, generate_resource
from sdkgen.core.naming import NamingRules
from sdkgen.core.schema import PropertyDef, ResourceType, ValueShape
from sdkgen.core.templates import TemplateError, create_template_engine
from sdkgen.languages.dotnet import DotnetGenerator, create_dotnet_generator
from sdkgen.languages.go import GoGenerator, create_go_generator
from sdkgen.languages.python import create_python_generator


@pytest.fixture
def generators():
    return [create_dotnet_generator(), create_python_generator(), create_go_generator()]


@pytest.fixture
def broken() -> ResourceType:
    return ResourceType(
        token="example::Broken",
        name="Broken",
        properties=(PropertyDef("a"), PropertyDef("a")),
    )


class TestDotnetEmitter:
    def test_resource_input(self, resource_input) -> None:
        generator = create_dotnet_generator()
        result = generate_resource(generator, resource_input)
        code = result.code

        assert result.success
        assert result.path == PurePosixPath("dotnet/ResourceInput.cs")
        assert "namespace Pulumi.Example" in code
        assert '[ExampleResourceType("example::ResourceInput")]' in code
        assert "public partial class ResourceInput : global::Pulumi.CustomResource" in code
        assert '[Output("Bar")]' in code
        assert "public Output<string?> Bar { get; private set; } = null!;" in code
        assert 'MakeResourceOptions(options, ""))' in code
        assert "MakeResourceOptions(options, id)" in code
        assert "merged.Id = id ?? merged.Id;" in code
        assert 'Version = "0.0.1",' in code
        assert (
            "public static ResourceInput Get(string name, Input<string> id, "
            "CustomResourceOptions? options = null)" in code
        )
        assert "public static new ResourceInputArgs Empty => new ResourceInputArgs();" in code

    def test_args_fields_use_resolved_names(self, bucket) -> None:
        result = generate_resource(create_dotnet_generator(), bucket)
        code = result.code

        assert result.path == PurePosixPath("dotnet/storage/Bucket.cs")
        assert '[Input("id", required: true)]' in code
        assert "public Input<string> ResourceId { get; set; } = null!;" in code
        assert "public InputMap<string>? Tags { get; set; }" in code
        assert "public Input<int>? Size { get; set; }" in code
        assert "public Output<string> Arn { get; private set; } = null!;" in code

    def test_type_names(self) -> None:
        generator = create_dotnet_generator()
        string = ValueShape.primitive("string")
        assert generator.type_name(ValueShape.array_of(string)) == "ImmutableArray<string>"
        assert generator.type_name(ValueShape.reference("Rule"), optional=True) == "Outputs.Rule?"
        assert generator.input_type_name(ValueShape.array_of(ValueShape.reference("Rule"))) == (
            "InputList<Inputs.RuleArgs>"
        )

    def test_configured_namespace(self, resource_input) -> None:
        generator = create_dotnet_generator({"namespace": "Acme.Cloud"})
        code = generate_resource(generator, resource_input).code
        assert "namespace Acme.Cloud" in code

    def test_bad_namespace_warns(self, resource_input) -> None:
        generator = create_dotnet_generator({"namespace": "Acme.class"})
        result = generate_resource(generator, resource_input)
        assert any("C# keyword" in w for w in result.warnings)


class TestPythonEmitter:
    def test_resource_input(self, resource_input) -> None:
        result = generate_resource(create_python_generator(), resource_input)
        code = result.code

        assert result.path == PurePosixPath("python/resource_input.py")
        assert "class ResourceInputArgs:" in code
        assert "    def __init__(__self__):" in code
        assert "class ResourceInput(pulumi.CustomResource):" in code
        assert "args: Optional[ResourceInputArgs] = None," in code
        assert "def get(resource_name: str," in code
        assert "pulumi.ResourceOptions.merge(opts, pulumi.ResourceOptions(id=id))" in code
        assert "        opts.id = None" in code
        assert '@pulumi.getter(name="Bar")' in code
        assert "def bar(self) -> pulumi.Output[Optional[str]]:" in code
        assert "from . import outputs" not in code

    def test_args_keyword_parameters(self, bucket) -> None:
        code = generate_resource(create_python_generator(), bucket).code

        assert "id_1: pulumi.Input[str]," in code
        assert "tags: Optional[pulumi.Input[Mapping[str, pulumi.Input[str]]]] = None" in code
        assert 'pulumi.set(__self__, "id_1", id_1)' in code
        assert "        if tags is not None:" in code
        assert '@pulumi.getter(name="id")' in code

    def test_reference_outputs_import(self) -> None:
        resource = ResourceType(
            token="example::Policy",
            name="Policy",
            properties=(
                PropertyDef("rules", shape=ValueShape.array_of(ValueShape.reference("Rule"))),
            ),
        )
        code = generate_resource(create_python_generator(), resource).code
        assert "from . import outputs" in code
        assert "pulumi.Output[Optional[Sequence['outputs.Rule']]]" in code


class TestGoEmitter:
    def test_resource_input(self, resource_input) -> None:
        result = generate_resource(create_go_generator(), resource_input)
        code = result.code

        assert result.path == PurePosixPath("go/resourceInput.go")
        assert "package example" in code
        assert "\tpulumi.CustomResourceState" in code
        assert '\tBar pulumi.StringPtrOutput `pulumi:"Bar"`' in code
        assert "func NewResourceInput(ctx *pulumi.Context," in code
        assert "func GetResourceInput(ctx *pulumi.Context," in code
        assert 'ctx.ReadResource("example::ResourceInput", name, id, nil, &resource, opts...)' in code
        assert 'pulumi.Version("0.0.1")' in code
        assert '"errors"' not in code

    def test_required_args_checked(self, bucket) -> None:
        code = generate_resource(create_go_generator(), bucket).code

        assert '"errors"' in code
        assert "\tif args.Id == nil {" in code
        assert "\tTags pulumi.StringMapInput" in code
        assert "\tSize pulumi.IntPtrInput" in code
        assert '\tSize *int `pulumi:"size"`' in code
        assert "type bucketArgs struct {" in code
        assert "\tArn pulumi.StringOutput" in code

    def test_type_names(self) -> None:
        generator = create_go_generator()
        rule = ValueShape.reference("Rule")
        assert generator.type_name(ValueShape.array_of(rule)) == "RuleArrayOutput"
        assert generator.type_name(rule, optional=True) == "RulePtrOutput"
        assert generator.type_name(ValueShape.primitive("any"), optional=True) == "pulumi.AnyOutput"
        assert generator.plain_type_name(ValueShape.map_of(ValueShape.primitive("number"))) == (
            "map[string]float64"
        )


class TestNamesUsedVerbatim:
    @pytest.mark.parametrize("factory", [create_dotnet_generator, create_python_generator, create_go_generator])
    def test_every_member_appears(self, factory, bucket) -> None:
        generator = factory()
        binding = generator.build_binding(bucket)
        result = generate_code(generator, binding)

        for name in binding.member_names:
            assert name in result.code
        assert binding.create.name in result.code
        assert binding.lookup.name in result.code


class TestGenerateBindings:
    def test_schema_error_is_isolated(self, generators, resource_input, broken) -> None:
        results = generate_bindings([resource_input, broken], generators, max_workers=4)

        assert len(results) == 6
        failed = [r for r in results if not r.success]
        assert {r.resource_token for r in failed} == {"example::Broken"}
        assert all(isinstance(r.exception, SchemaError) for r in failed)
        assert all(r.success for r in results if r.resource_token == "example::ResourceInput")

    def test_results_sorted(self, generators, resource_input, bucket) -> None:
        results = generate_bindings([bucket, resource_input], generators)
        assert [(r.resource_token, r.language) for r in results] == [
            ("example::ResourceInput", "dotnet"),
            ("example::ResourceInput", "go"),
            ("example::ResourceInput", "python"),
            ("example:storage:Bucket", "dotnet"),
            ("example:storage:Bucket", "go"),
            ("example:storage:Bucket", "python"),
        ]
        assert len({r.path for r in results}) == 6

    def test_naming_configuration_error_aborts(self, resource_input, bucket) -> None:
        broken_rules = NamingRules(language="dotnet", lookup_name="{type}")
        generator = DotnetGenerator(GeneratorConfig(language="dotnet", rules=broken_rules))

        with pytest.raises(NamingConfigurationError):
            generate_bindings([resource_input, bucket], [generator, create_go_generator()])

    def test_duplicate_paths_rejected(self) -> None:
        first = ResourceType(token="example::Thing", name="Thing")
        second = ResourceType(token="example:index:Thing", name="Thing")
        with pytest.raises(GeneratorError, match="both map to"):
            generate_bindings([first, second], [create_go_generator()])

    def test_zero_property_resource(self, generators) -> None:
        nothing = ResourceType(token="example::Nothing", name="Nothing")
        results = generate_bindings([nothing], generators)
        assert all(r.success for r in results)
        assert all(any("no properties" in w for w in r.warnings) for r in results)


class TestTemplateEngine:
    def test_filters(self) -> None:
        engine = create_template_engine()
        rendered = engine.render_string(
            "{{ text | comment('//') }}|{{ name | quote }}", {"text": "a\n\nb", "name": 'x"y'}
        )
        assert rendered == '// a\n//\n// b|"x\\"y"'

    def test_undefined_variable_is_error(self) -> None:
        engine = create_template_engine()
        with pytest.raises(TemplateError):
            engine.render_string("{{ missing }}", {})

    def test_missing_template_fails_result(self, resource_input) -> None:
        class NoTemplates(GoGenerator):
            def get_template_directory(self):
                return None

        generator = NoTemplates(create_go_generator().config)
        result = generate_resource(generator, resource_input)
        assert not result.success
        assert "Code generation failed" in result.error_message
