import json
import sys
from pathlib import Path

import pytest

from tfwrap.client import Terraform
from tfwrap.commands.workspace import WorkspaceCommand, WorkspaceSubcommand
from tfwrap.errors import CommandFailedError


def test_list_args():
    assert WorkspaceCommand.list().args() == ["workspace", "list"]


def test_show_args():
    assert WorkspaceCommand.show().args() == ["workspace", "show"]


def test_new_args():
    assert WorkspaceCommand.new_workspace("staging").args() == ["workspace", "new", "staging"]


def test_select_args():
    assert WorkspaceCommand.select("production").args() == ["workspace", "select", "production"]


def test_delete_args():
    assert WorkspaceCommand.delete("staging").args() == ["workspace", "delete", "staging"]


def test_delete_force_args():
    cmd = WorkspaceCommand.delete("staging").force()
    assert cmd.args() == ["workspace", "delete", "-force", "staging"]


def test_force_ignored_for_select():
    cmd = WorkspaceCommand.select("production").force()
    assert cmd.args() == ["workspace", "select", "production"]


def test_raw_args_appended():
    cmd = WorkspaceCommand.new_workspace("staging").arg("-lock=false")
    assert cmd.args() == ["workspace", "new", "staging", "-lock=false"]


def test_subcommand_kind():
    assert WorkspaceCommand.delete("x").subcommand is WorkspaceSubcommand.DELETE
    assert WorkspaceCommand.list().subcommand is WorkspaceSubcommand.LIST


def _fake_client(tmp_path, monkeypatch, exit_code=0):
    """A client whose binary runs a script named ``workspace`` that echoes its argv."""
    (tmp_path / "workspace").write_text(
        "import json, sys\n"
        "print(json.dumps(sys.argv[1:]))\n"
        f"sys.exit({exit_code})\n"
    )
    monkeypatch.chdir(tmp_path)
    return Terraform(binary=Path(sys.executable), global_args=["-no-color"])


@pytest.mark.asyncio
async def test_execute_places_global_args_last(tmp_path, monkeypatch):
    tf = _fake_client(tmp_path, monkeypatch)
    output = await WorkspaceCommand.new_workspace("staging").execute(tf)
    assert json.loads(output.stdout) == ["new", "staging", "-no-color"]
    assert output.success is True


@pytest.mark.asyncio
async def test_execute_failure(tmp_path, monkeypatch):
    tf = _fake_client(tmp_path, monkeypatch, exit_code=1)
    with pytest.raises(CommandFailedError) as info:
        await WorkspaceCommand.select("missing").execute(tf)
    assert info.value.command == "workspace"
    assert info.value.exit_code == 1