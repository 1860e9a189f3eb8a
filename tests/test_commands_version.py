import sys
import textwrap

import pytest

from tfwrap.client import Terraform
from tfwrap.commands.version import VersionCommand
from tfwrap.errors import CommandFailedError, JsonParseError


def _fake_terraform(tmp_path, body):
    path = tmp_path / "terraform"
    path.write_text(f"#!{sys.executable}\n" + textwrap.dedent(body))
    path.chmod(0o755)
    return path


ECHO_ARGS = """
import json, sys
print(json.dumps({
    "terraform_version": "1.14.6",
    "platform": " ".join(sys.argv[1:]),
    "provider_selections": {},
    "terraform_outdated": False,
}))
"""


def test_default_args_include_json():
    assert VersionCommand().args() == ["version", "-json"]


def test_no_json_args():
    assert VersionCommand().no_json().args() == ["version"]


@pytest.mark.asyncio
async def test_execute_parses_version(tmp_path):
    tf = Terraform.builder().binary(_fake_terraform(tmp_path, ECHO_ARGS)).build()
    info = await VersionCommand().execute(tf)
    assert info.terraform_version == "1.14.6"
    assert info.platform == "version -json -no-color"
    assert info.provider_selections == {}
    assert info.terraform_outdated is False


@pytest.mark.asyncio
async def test_execute_failure_raises(tmp_path):
    script = _fake_terraform(tmp_path, "import sys\nsys.exit(1)\n")
    tf = Terraform.builder().binary(script).build()
    with pytest.raises(CommandFailedError) as info:
        await VersionCommand().execute(tf)
    assert info.value.command == "version"
    assert info.value.exit_code == 1


@pytest.mark.asyncio
async def test_execute_bad_json_raises(tmp_path):
    script = _fake_terraform(tmp_path, "print('Terraform v1.14.6')\n")
    tf = Terraform.builder().binary(script).build()
    with pytest.raises(JsonParseError):
        await VersionCommand().execute(tf)