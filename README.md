# tfwrap

An asyncio wrapper around the Terraform command-line tool. It also works with
OpenTofu: point the client at the `tofu` binary.

- Build commands by chaining methods, then `await command.execute(tf)`.
- Terraform's JSON output is parsed into dataclasses: version info, validation
  diagnostics, state, plans and output values.
- Stream NDJSON events from commands run with `-json` while they run.
- Generate `.tf.json` configuration from Python with `TerraformConfig`.

The package has no dependencies outside the standard library.

## Installation

```
pip install tfwrap
```

Terraform itself must be installed. `TerraformBuilder.build()` finds the binary
in this order: an explicit path given to `TerraformBuilder.binary`, the
`TERRAFORM_PATH` environment variable, then `terraform` on `PATH`. If none is
found it raises `TerraformNotFoundError`.

## The client

```python
from tfwrap.client import Terraform

tf = (
    Terraform.builder()
    .working_dir("./infra")
    .env("AWS_REGION", "us-west-2")
    .env_var("instance_type", "t3.medium")   # sets TF_VAR_instance_type
    .timeout_secs(300)
    .build()
)
```

- The working directory is passed as `-chdir=<path>` before the subcommand.
- Environment variables are laid over the inherited environment of each
  subprocess.
- `-no-color` is appended to every command by default; `.color(True)` turns
  that off.
- `.timeout(...)` takes a `timedelta` or a number of seconds;
  `.timeout_secs(n)` takes whole seconds. There is no timeout by default.
- `.input(enable)` is stored on the client as `no_input`, but none of the
  commands in this package add `-input=false` on their own; pass it with
  `arg(...)` where a command needs it.

`tf.with_working_dir("./other")` returns a copy of the client that runs in
another directory. `await tf.version()` runs `terraform version -json` and
returns a `VersionInfo`.

## Running commands

```python
import asyncio

from tfwrap.client import Terraform
from tfwrap.commands.validate import ValidateCommand
from tfwrap.commands.workspace import WorkspaceCommand
from tfwrap.commands.state import StateCommand


async def main() -> None:
    tf = Terraform.builder().working_dir("./infra").build()

    info = await tf.version()
    print(f"Terraform {info.terraform_version} on {info.platform}")

    result = await ValidateCommand().execute(tf)
    for diag in result.diagnostics:
        print(f"[{diag.severity}] {diag.summary}: {diag.detail}")

    await WorkspaceCommand.new_workspace("staging").execute(tf)
    output = await StateCommand.list().execute(tf)
    for address in output.stdout_lines():
        print(address)


asyncio.run(main())
```

Available commands:

| Module | Class | Terraform command | Result |
|--------|-------|-------------------|--------|
| `tfwrap.commands.version` | `VersionCommand` | `terraform version` | `VersionInfo` |
| `tfwrap.commands.validate` | `ValidateCommand` | `terraform validate` | `ValidationResult` |
| `tfwrap.commands.state` | `StateCommand` | `terraform state list/show/mv/rm/pull/push/replace-provider` | `CommandOutput` |
| `tfwrap.commands.workspace` | `WorkspaceCommand` | `terraform workspace list/show/new/select/delete` | `CommandOutput` |
| `tfwrap.commands.tftest` | `TestCommand` | `terraform test` | `CommandOutput` |

Every command has `args()`, which returns the argument list it will pass.
All but `VersionCommand` also have `arg(...)`, which appends an option the
builder does not cover.

Notes on individual commands:

- `VersionCommand` and `ValidateCommand` request `-json` by default; `no_json()`
  drops it, but `execute()` still parses stdout as JSON.
- `ValidateCommand.execute()` accepts exit codes 0 and 1, since an invalid
  configuration still produces a JSON result.
- `StateCommand.dry_run()`, `lock(...)` and `lock_timeout(...)` apply to `mv`,
  `rm` and `replace-provider`; `auto_approve()` applies to `replace-provider`.
  They are ignored for the other subcommands.
- `WorkspaceCommand.force()` applies to `delete` only.

## Errors

Every failure raises a subclass of `tfwrap.errors.TerraformError`:

- `TerraformNotFoundError`: the binary could not be found or started.
- `CommandFailedError`: the exit code was not an accepted one. It carries
  `command`, `exit_code`, `stdout` and `stderr`.
- `CommandTimeoutError`: the timeout was exceeded and the process was killed.
  It carries `timeout_seconds`.
- `TerraformIOError`: starting the process or reading from it failed.
- `JsonParseError`: Terraform's JSON output could not be parsed.

## Lower-level execution

`tfwrap.exec` runs any argument list against a client and returns a
`CommandOutput` (`stdout`, `stderr`, `exit_code`, `success`; `str()` gives the
trimmed stdout):

```python
from tfwrap.exec import (
    run_terraform,
    run_terraform_allow_exit_codes,
    run_terraform_with_timeout,
)

output = await run_terraform(tf, ["fmt", "-check"])
plan = await run_terraform_allow_exit_codes(tf, ["plan", "-detailed-exitcode"], [0, 2])
pulled = await run_terraform_with_timeout(tf, ["state", "pull"], 30)
```

## Streaming events

```python
from tfwrap.streaming import stream_terraform
from tfwrap.commands.tftest import TestCommand


def on_event(line):
    print(f"[{line.log_type}] {line.message}")


await stream_terraform(tf, TestCommand().json(), [0], on_event)
```

The command may be any object with an `args()` method. The handler receives a
`JsonLogLine` for each line of output; lines that are not JSON objects with
`@level` and `@message` are logged and skipped. The client's timeout covers the
whole run. The returned `CommandOutput` has an empty `stdout`, since every line
went to the handler.

## Generating configuration

```python
from tfwrap.config import TerraformConfig

config = (
    TerraformConfig()
    .required_provider("null", "hashicorp/null", "~> 3.0")
    .provider("null", {})
    .variable("name", {"type": "string", "default": "world"})
    .resource("null_resource", "example", {"triggers": {"value": "hello"}})
    .local("tag", "test")
    .output("id", {"value": "${null_resource.example.id}"})
)

print(config.to_json_pretty())
config.write_to("infra/main.tf.json")
```

`backend(...)`, `data(...)` and `module(...)` add the remaining block types.
Empty blocks are left out of the output, and object keys are sorted.
`to_dict()` returns the configuration as a dictionary.

`write_to_tempdir()` writes `main.tf.json` into a new
`tempfile.TemporaryDirectory` and returns it; its `.name` can be passed to
`TerraformBuilder.working_dir`, and it is removed on `cleanup()` or when used
as a context manager and exited.

## Parsing JSON output yourself

The dataclasses in `tfwrap.models` parse documents you already have:

```python
from tfwrap.models.state import StateRepresentation
from tfwrap.models.plan import PlanRepresentation
from tfwrap.models.output import parse_outputs

state = StateRepresentation.from_json(state_text)
for resource in state.values.root_module.resources:
    print(resource.address, resource.resource_type)

plan = PlanRepresentation.from_json(plan_text)
for change in plan.resource_changes:
    print(change.address, change.change.actions)

outputs = parse_outputs(json.loads(output_text))
```

## What is not included

There are no command builders for `init`, `plan`, `apply`, `destroy`, `show`,
`output`, `fmt`, `import` and the other subcommands, and no command-line
program. Run those through `tfwrap.exec`, for example
`await run_terraform(tf, ["show", "-json"])`, and parse the result with the
models above.

## Running the tests

```
pip install -e ".[test]"
pytest
```