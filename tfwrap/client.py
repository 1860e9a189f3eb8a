"""The Terraform client and its builder."""

from __future__ import annotations

import dataclasses
import os
import shutil
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Union

from tfwrap.commands.version import VersionCommand
from tfwrap.errors import TerraformNotFoundError
from tfwrap.models.version import VersionInfo

PathLike = Union[str, "os.PathLike[str]"]


@dataclass
class Terraform:
    """Settings shared by every command: binary, directory, environment, flags, timeout."""

    binary: Path
    working_dir: Path | None = None
    env: dict[str, str] = field(default_factory=dict)
    global_args: list[str] = field(default_factory=list)
    no_input: bool = True
    timeout: timedelta | None = None

    @classmethod
    def builder(cls) -> TerraformBuilder:
        """Start building a client."""
        return TerraformBuilder()

    async def version(self) -> VersionInfo:
        """Check that terraform runs and return its version information."""
        return await VersionCommand().execute(self)

    def with_working_dir(self, path: PathLike) -> Terraform:
        """Return a copy of this client that runs in ``path``."""
        return dataclasses.replace(
            self,
            working_dir=Path(path),
            env=dict(self.env),
            global_args=list(self.global_args),
        )


class TerraformBuilder:
    """Builder for a :class:`Terraform` client.

    Colour output and interactive input are disabled by default.
    """

    def __init__(self) -> None:
        self._binary: Path | None = None
        self._working_dir: Path | None = None
        self._env: dict[str, str] = {}
        self._no_color = True
        self._input = False
        self._timeout: timedelta | None = None

    def binary(self, path: PathLike) -> TerraformBuilder:
        """Set an explicit path to the terraform binary."""
        self._binary = Path(path)
        return self

    def working_dir(self, path: PathLike) -> TerraformBuilder:
        """Set the directory passed as ``-chdir=<path>``."""
        self._working_dir = Path(path)
        return self

    def env(self, key: str, value: str) -> TerraformBuilder:
        """Set an environment variable for every terraform subprocess."""
        self._env[key] = value
        return self

    def env_var(self, name: str, value: str) -> TerraformBuilder:
        """Set a Terraform variable through ``TF_VAR_<name>``."""
        self._env[f"TF_VAR_{name}"] = value
        return self

    def color(self, enable: bool) -> TerraformBuilder:
        """Enable or disable colour output."""
        self._no_color = not enable
        return self

    def input(self, enable: bool) -> TerraformBuilder:
        """Enable or disable interactive input prompts."""
        self._input = enable
        return self

    def timeout(self, duration: timedelta | float) -> TerraformBuilder:
        """Set a default timeout, as a timedelta or a number of seconds."""
        if isinstance(duration, timedelta):
            self._timeout = duration
        else:
            self._timeout = timedelta(seconds=duration)
        return self

    def timeout_secs(self, seconds: int) -> TerraformBuilder:
        """Set a default timeout in whole seconds."""
        self._timeout = timedelta(seconds=seconds)
        return self

    def build(self) -> Terraform:
        """Create the client.

        The binary is the explicit path, else ``TERRAFORM_PATH``, else
        ``terraform`` on ``PATH``; TerraformNotFoundError if none is found.
        """
        if self._binary is not None:
            binary = self._binary
        elif "TERRAFORM_PATH" in os.environ:
            binary = Path(os.environ["TERRAFORM_PATH"])
        else:
            found = shutil.which("terraform")
            if found is None:
                raise TerraformNotFoundError()
            binary = Path(found)

        global_args = ["-no-color"] if self._no_color else []
        return Terraform(
            binary=binary,
            working_dir=self._working_dir,
            env=dict(self._env),
            global_args=global_args,
            no_input=not self._input,
            timeout=self._timeout,
        )