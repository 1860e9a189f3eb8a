"""The ``terraform workspace`` family of commands."""

from __future__ import annotations

import enum
from typing import Any

from tfwrap.exec import CommandOutput, run_terraform


class WorkspaceSubcommand(enum.Enum):
    """Which workspace operation to run."""

    LIST = "list"
    SHOW = "show"
    NEW = "new"
    SELECT = "select"
    DELETE = "delete"


class WorkspaceCommand:
    """List, show, create, select or delete workspaces."""

    def __init__(self, subcommand: WorkspaceSubcommand, name: str | None = None) -> None:
        self.subcommand = subcommand
        self.name = name
        self._force = False
        self._raw_args: list[str] = []

    def __repr__(self) -> str:
        return (
            f"WorkspaceCommand({self.subcommand.value!r}, name={self.name!r}, "
            f"force={self._force}, raw_args={self._raw_args!r})"
        )

    @classmethod
    def list(cls) -> WorkspaceCommand:
        """List all workspaces."""
        return cls(WorkspaceSubcommand.LIST)

    @classmethod
    def show(cls) -> WorkspaceCommand:
        """Show the current workspace name."""
        return cls(WorkspaceSubcommand.SHOW)

    @classmethod
    def new_workspace(cls, name: str) -> WorkspaceCommand:
        """Create a new workspace."""
        return cls(WorkspaceSubcommand.NEW, name)

    @classmethod
    def select(cls, name: str) -> WorkspaceCommand:
        """Switch to an existing workspace."""
        return cls(WorkspaceSubcommand.SELECT, name)

    @classmethod
    def delete(cls, name: str) -> WorkspaceCommand:
        """Delete a workspace."""
        return cls(WorkspaceSubcommand.DELETE, name)

    def force(self) -> WorkspaceCommand:
        """Force deletion of a non-empty workspace (``-force``); only used by delete."""
        self._force = True
        return self

    def arg(self, arg: str) -> WorkspaceCommand:
        """Append a raw argument for options not covered here."""
        self._raw_args.append(str(arg))
        return self

    def args(self) -> list[str]:
        """The subcommand and its flags."""
        args = ["workspace", self.subcommand.value]
        if self.subcommand is WorkspaceSubcommand.DELETE and self._force:
            args.append("-force")
        if self.name is not None:
            args.append(self.name)
        args.extend(self._raw_args)
        return args

    async def execute(self, tf: Any) -> CommandOutput:
        """Run the command."""
        return await run_terraform(tf, self.args())