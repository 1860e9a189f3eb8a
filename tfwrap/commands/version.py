"""The ``terraform version`` command."""

from __future__ import annotations

from typing import Any

from tfwrap.exec import run_terraform
from tfwrap.models.version import VersionInfo


class VersionCommand:
    """Retrieve Terraform version information; JSON output is on by default."""

    def __init__(self) -> None:
        self._json = True

    def __repr__(self) -> str:
        return f"VersionCommand(json={self._json})"

    def no_json(self) -> VersionCommand:
        """Disable JSON output."""
        self._json = False
        return self

    def args(self) -> list[str]:
        """The subcommand and its flags."""
        args = ["version"]
        if self._json:
            args.append("-json")
        return args

    async def execute(self, tf: Any) -> VersionInfo:
        """Run the command and decode its JSON output."""
        output = await run_terraform(tf, self.args())
        return VersionInfo.from_json(output.stdout)