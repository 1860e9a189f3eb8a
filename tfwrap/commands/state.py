"""The ``terraform state`` family of commands."""

from __future__ import annotations

import enum
from typing import Any, Iterable

from tfwrap.exec import CommandOutput, run_terraform


class StateSubcommand(enum.Enum):
    """Which state operation to run."""

    LIST = "list"
    SHOW = "show"
    MV = "mv"
    RM = "rm"
    PULL = "pull"
    PUSH = "push"
    REPLACE_PROVIDER = "replace-provider"


_LOCKING = frozenset(
    {StateSubcommand.MV, StateSubcommand.RM, StateSubcommand.REPLACE_PROVIDER}
)


class StateCommand:
    """List, show, move, remove, pull or push state, or replace a provider in it."""

    def __init__(self, subcommand: StateSubcommand, operands: Iterable[str] = ()) -> None:
        self.subcommand = subcommand
        self.operands = tuple(str(operand) for operand in operands)
        self._auto_approve = False
        self._dry_run = False
        self._lock: bool | None = None
        self._lock_timeout: str | None = None
        self._raw_args: list[str] = []

    def __repr__(self) -> str:
        return (
            f"StateCommand({self.subcommand.value!r}, operands={self.operands!r}, "
            f"auto_approve={self._auto_approve}, dry_run={self._dry_run}, "
            f"lock={self._lock}, lock_timeout={self._lock_timeout!r}, "
            f"raw_args={self._raw_args!r})"
        )

    @classmethod
    def list(cls) -> StateCommand:
        """List resources in the state."""
        return cls(StateSubcommand.LIST)

    @classmethod
    def show(cls, address: str) -> StateCommand:
        """Show a single resource in the state."""
        return cls(StateSubcommand.SHOW, (address,))

    @classmethod
    def mv(cls, source: str, destination: str) -> StateCommand:
        """Move a resource to a different address."""
        return cls(StateSubcommand.MV, (source, destination))

    @classmethod
    def rm(cls, addresses: Iterable[str]) -> StateCommand:
        """Remove resources from the state without destroying them."""
        return cls(StateSubcommand.RM, addresses)

    @classmethod
    def pull(cls) -> StateCommand:
        """Pull remote state and write it to stdout."""
        return cls(StateSubcommand.PULL)

    @classmethod
    def push(cls) -> StateCommand:
        """Push local state to the remote backend."""
        return cls(StateSubcommand.PUSH)

    @classmethod
    def replace_provider(cls, from_provider: str, to_provider: str) -> StateCommand:
        """Migrate resources in the state from one provider to another."""
        return cls(StateSubcommand.REPLACE_PROVIDER, (from_provider, to_provider))

    def auto_approve(self) -> StateCommand:
        """Skip interactive approval (``-auto-approve``); only used by replace-provider."""
        self._auto_approve = True
        return self

    def dry_run(self) -> StateCommand:
        """Preview without changing anything (``-dry-run``)."""
        self._dry_run = True
        return self

    def lock(self, enabled: bool) -> StateCommand:
        """Enable or disable state locking (``-lock``)."""
        self._lock = bool(enabled)
        return self

    def lock_timeout(self, timeout: str) -> StateCommand:
        """How long to wait for the state lock (``-lock-timeout``)."""
        self._lock_timeout = str(timeout)
        return self

    def arg(self, arg: str) -> StateCommand:
        """Append a raw argument for options not covered here."""
        self._raw_args.append(str(arg))
        return self

    def _lock_flags(self) -> list[str]:
        flags = []
        if self._dry_run:
            flags.append("-dry-run")
        if self._lock is not None:
            flags.append(f"-lock={'true' if self._lock else 'false'}")
        if self._lock_timeout is not None:
            flags.append(f"-lock-timeout={self._lock_timeout}")
        return flags

    def args(self) -> list[str]:
        """The subcommand and its flags."""
        args = ["state", self.subcommand.value]
        if self.subcommand is StateSubcommand.REPLACE_PROVIDER and self._auto_approve:
            args.append("-auto-approve")
        if self.subcommand in _LOCKING:
            args.extend(self._lock_flags())
        args.extend(self.operands)
        args.extend(self._raw_args)
        return args

    async def execute(self, tf: Any) -> CommandOutput:
        """Run the command."""
        return await run_terraform(tf, self.args())