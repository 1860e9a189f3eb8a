"""Exception hierarchy for running the terraform CLI."""

from __future__ import annotations


class TerraformError(Exception):
    """Base class for every error raised by this package."""


class TerraformNotFoundError(TerraformError):
    """The terraform binary could not be located or started."""

    def __init__(self) -> None:
        super().__init__("terraform binary not found")


class CommandFailedError(TerraformError):
    """A terraform command exited with a status that was not accepted."""

    def __init__(self, command: str, exit_code: int, stdout: str = "", stderr: str = "") -> None:
        self.command = command
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"terraform command failed: {command} (exit code {exit_code})")


class TerraformIOError(TerraformError):
    """An I/O failure while running a terraform subprocess."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"io error: {message}")


class CommandTimeoutError(TerraformError):
    """A terraform command ran longer than its timeout."""

    def __init__(self, timeout_seconds: int) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(f"terraform command timed out after {timeout_seconds}s")


class JsonParseError(TerraformError):
    """Terraform's JSON output could not be decoded into the expected shape."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"json parse error: {message}")


def from_os_error(error: OSError, message: str | None = None) -> TerraformError:
    """Map an OS error to the matching package error, keeping it as the cause."""
    if isinstance(error, FileNotFoundError):
        converted: TerraformError = TerraformNotFoundError()
    else:
        converted = TerraformIOError(message if message is not None else str(error))
    converted.__cause__ = error
    return converted