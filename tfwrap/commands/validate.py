"""The ``terraform validate`` command."""

from __future__ import annotations

from typing import Any

from tfwrap.exec import run_terraform_allow_exit_codes
from tfwrap.models.validation import ValidationResult


class ValidateCommand:
    """Check that a configuration is syntactically valid and internally consistent.

    JSON output is on by default. No remote services are contacted.
    """

    def __init__(self) -> None:
        self._json = True
        self._raw_args: list[str] = []

    def __repr__(self) -> str:
        return f"ValidateCommand(json={self._json}, raw_args={self._raw_args!r})"

    def no_json(self) -> ValidateCommand:
        """Disable JSON output."""
        self._json = False
        return self

    def arg(self, arg: str) -> ValidateCommand:
        """Append a raw argument for options not covered here."""
        self._raw_args.append(str(arg))
        return self

    def args(self) -> list[str]:
        """The subcommand and its flags."""
        args = ["validate"]
        if self._json:
            args.append("-json")
        args.extend(self._raw_args)
        return args

    async def execute(self, tf: Any) -> ValidationResult:
        """Run the command and decode its JSON result.

        An invalid configuration exits with code 1 but still writes JSON,
        so both 0 and 1 are accepted.
        """
        output = await run_terraform_allow_exit_codes(tf, self.args(), (0, 1))
        return ValidationResult.from_json(output.stdout)