import sys
from pathlib import Path

import pytest

from tfwrap.client import Terraform
from tfwrap.commands.state import StateCommand, StateSubcommand
from tfwrap.errors import CommandFailedError


def test_list_args():
    assert StateCommand.list().args() == ["state", "list"]


def test_show_args():
    cmd = StateCommand.show("null_resource.example")
    assert cmd.args() == ["state", "show", "null_resource.example"]


def test_mv_args():
    cmd = StateCommand.mv("null_resource.old", "null_resource.new")
    assert cmd.args() == ["state", "mv", "null_resource.old", "null_resource.new"]


def test_mv_dry_run_args():
    cmd = StateCommand.mv("null_resource.old", "null_resource.new").dry_run()
    assert cmd.args() == [
        "state",
        "mv",
        "-dry-run",
        "null_resource.old",
        "null_resource.new",
    ]


def test_mv_lock_args():
    cmd = StateCommand.mv("null_resource.old", "null_resource.new").lock(False).lock_timeout("10s")
    assert cmd.args() == [
        "state",
        "mv",
        "-lock=false",
        "-lock-timeout=10s",
        "null_resource.old",
        "null_resource.new",
    ]


def test_mv_lock_true_args():
    cmd = StateCommand.mv("a.b", "c.d").lock(True)
    assert cmd.args() == ["state", "mv", "-lock=true", "a.b", "c.d"]


def test_rm_args():
    cmd = StateCommand.rm(["null_resource.a", "null_resource.b"])
    assert cmd.args() == ["state", "rm", "null_resource.a", "null_resource.b"]


def test_rm_dry_run_args():
    cmd = StateCommand.rm(["null_resource.a"]).dry_run()
    assert cmd.args() == ["state", "rm", "-dry-run", "null_resource.a"]


def test_pull_args():
    assert StateCommand.pull().args() == ["state", "pull"]


def test_push_args():
    assert StateCommand.push().args() == ["state", "push"]


def test_replace_provider_args():
    cmd = StateCommand.replace_provider(
        "registry.terraform.io/-/aws", "registry.terraform.io/hashicorp/aws"
    )
    assert cmd.args() == [
        "state",
        "replace-provider",
        "registry.terraform.io/-/aws",
        "registry.terraform.io/hashicorp/aws",
    ]


def test_replace_provider_auto_approve_args():
    cmd = (
        StateCommand.replace_provider(
            "registry.terraform.io/-/aws", "registry.terraform.io/hashicorp/aws"
        )
        .auto_approve()
        .lock(False)
    )
    assert cmd.args() == [
        "state",
        "replace-provider",
        "-auto-approve",
        "-lock=false",
        "registry.terraform.io/-/aws",
        "registry.terraform.io/hashicorp/aws",
    ]


def test_replace_provider_lock_timeout_args():
    cmd = StateCommand.replace_provider(
        "registry.terraform.io/-/aws", "registry.terraform.io/hashicorp/aws"
    ).lock_timeout("30s")
    assert cmd.args() == [
        "state",
        "replace-provider",
        "-lock-timeout=30s",
        "registry.terraform.io/-/aws",
        "registry.terraform.io/hashicorp/aws",
    ]


def test_list_ignores_mv_rm_flags():
    cmd = StateCommand.list().dry_run().lock(False).lock_timeout("10s")
    assert cmd.args() == ["state", "list"]


def test_auto_approve_ignored_outside_replace_provider():
    cmd = StateCommand.mv("a.b", "c.d").auto_approve()
    assert cmd.args() == ["state", "mv", "a.b", "c.d"]


def test_raw_args_come_last():
    cmd = StateCommand.show("null_resource.x").arg("-state=other.tfstate")
    assert cmd.args() == ["state", "show", "null_resource.x", "-state=other.tfstate"]


def test_subcommand_recorded():
    assert StateCommand.replace_provider("a", "b").subcommand is StateSubcommand.REPLACE_PROVIDER


@pytest.mark.asyncio
async def test_execute_reports_failure_with_subcommand_name():
    tf = Terraform(binary=Path(sys.executable))
    with pytest.raises(CommandFailedError) as info:
        await StateCommand.list().execute(tf)
    assert info.value.command == "state"
    assert info.value.exit_code != 0