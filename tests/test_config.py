import json
from pathlib import Path

from tfwrap.config import TerraformConfig


def _parsed(config: TerraformConfig) -> dict:
    return json.loads(config.to_json())


def test_empty_config():
    assert TerraformConfig().to_json() == "{}"


def test_required_provider():
    config = TerraformConfig().required_provider("aws", "hashicorp/aws", "~> 5.0")
    val = _parsed(config)
    assert val["terraform"]["required_providers"]["aws"]["source"] == "hashicorp/aws"
    assert val["terraform"]["required_providers"]["aws"]["version"] == "~> 5.0"


def test_full_config():
    config = (
        TerraformConfig()
        .required_provider("null", "hashicorp/null", "~> 3.0")
        .provider("null", {})
        .resource("null_resource", "example", {"triggers": {"value": "hello"}})
        .variable("name", {"type": "string", "default": "world"})
        .output("id", {"value": "${null_resource.example.id}"})
        .local("tag", "test")
    )
    val = _parsed(config)
    assert isinstance(val["resource"]["null_resource"]["example"], dict)
    assert val["variable"]["name"]["default"] == "world"
    assert val["output"]["id"]["value"] == "${null_resource.example.id}"
    assert val["locals"]["tag"] == "test"


def test_multiple_resources_same_type():
    config = (
        TerraformConfig()
        .resource("null_resource", "a", {})
        .resource("null_resource", "b", {})
    )
    val = _parsed(config)
    assert val["resource"]["null_resource"] == {"a": {}, "b": {}}


def test_data_source():
    config = TerraformConfig().data("aws_ami", "latest", {"most_recent": True})
    val = _parsed(config)
    assert val["data"]["aws_ami"]["latest"]["most_recent"] is True


def test_backend():
    config = TerraformConfig().backend("s3", {"bucket": "my-state"})
    val = _parsed(config)
    assert val["terraform"]["backend"]["s3"]["bucket"] == "my-state"


def test_backend_replaces_previous():
    config = (
        TerraformConfig()
        .backend("s3", {"bucket": "my-state"})
        .backend("local", {"path": "state.tfstate"})
    )
    val = _parsed(config)
    assert val["terraform"]["backend"] == {"local": {"path": "state.tfstate"}}


def test_module_block():
    config = TerraformConfig().module(
        "vpc",
        {
            "source": "terraform-aws-modules/vpc/aws",
            "version": "~> 5.0",
            "cidr": "10.0.0.0/16",
        },
    )
    val = _parsed(config)
    assert val["module"]["vpc"]["source"] == "terraform-aws-modules/vpc/aws"
    assert val["module"]["vpc"]["version"] == "~> 5.0"
    assert val["module"]["vpc"]["cidr"] == "10.0.0.0/16"


def test_multiple_modules():
    config = (
        TerraformConfig()
        .module("vpc", {"source": "terraform-aws-modules/vpc/aws", "version": "~> 5.0"})
        .module("eks", {"source": "terraform-aws-modules/eks/aws", "version": "~> 19.0"})
    )
    val = _parsed(config)
    assert val["module"]["vpc"]["source"] == "terraform-aws-modules/vpc/aws"
    assert val["module"]["eks"]["source"] == "terraform-aws-modules/eks/aws"


def test_write_to_tempdir():
    config = (
        TerraformConfig()
        .required_provider("null", "hashicorp/null", "~> 3.0")
        .resource("null_resource", "test", {})
    )
    with config.write_to_tempdir() as directory:
        path = Path(directory) / "main.tf.json"
        assert path.exists()
        val = json.loads(path.read_text(encoding="utf-8"))
        assert val["resource"]["null_resource"]["test"] == {}
    assert not path.exists()


def test_write_to_creates_parent_directories(tmp_path):
    target = tmp_path / "nested" / "deeper" / "main.tf.json"
    TerraformConfig().local("tag", "test").write_to(target)
    assert json.loads(target.read_text(encoding="utf-8")) == {"locals": {"tag": "test"}}


def test_top_level_block_order():
    config = (
        TerraformConfig()
        .module("m", {})
        .local("l", 1)
        .output("o", {})
        .variable("v", {})
        .data("d", "x", {})
        .resource("r", "x", {})
        .provider("p", {})
        .required_provider("p", "hashicorp/p", "1.0")
    )
    keys = list(json.loads(config.to_json()).keys())
    assert keys == [
        "terraform",
        "provider",
        "resource",
        "data",
        "variable",
        "output",
        "locals",
        "module",
    ]


def test_nested_keys_are_sorted():
    config = TerraformConfig().resource("null_resource", "b", {"z": 1, "a": 2}).resource(
        "null_resource", "a", {}
    )
    assert config.to_json() == '{"resource":{"null_resource":{"a":{},"b":{"a":2,"z":1}}}}'


def test_required_provider_field_order():
    config = TerraformConfig().required_provider("aws", "hashicorp/aws", "~> 5.0")
    assert config.to_json() == (
        '{"terraform":{"required_providers":'
        '{"aws":{"source":"hashicorp/aws","version":"~> 5.0"}}}}'
    )


def test_pretty_json_format():
    config = TerraformConfig().local("tag", "test")
    assert config.to_json_pretty() == '{\n  "locals": {\n    "tag": "test"\n  }\n}'


def test_to_dict_matches_json():
    config = TerraformConfig().provider("null", {}).local("tag", "test")
    assert config.to_dict() == {"provider": {"null": {}}, "locals": {"tag": "test"}}