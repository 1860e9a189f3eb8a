"""Running terraform as a subprocess and collecting its output."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Iterable, Sequence, Union

from tfwrap.errors import CommandFailedError, CommandTimeoutError, from_os_error

logger = logging.getLogger(__name__)

Timeout = Union[timedelta, float, int]


@dataclass
class CommandOutput:
    """Captured output of a finished terraform command."""

    stdout: str
    stderr: str
    exit_code: int
    success: bool

    def stdout_lines(self) -> list[str]:
        """Split stdout into lines."""
        return self.stdout.splitlines()

    def __str__(self) -> str:
        return self.stdout.strip()


def _timeout_seconds(timeout: Timeout | None) -> float | None:
    if timeout is None:
        return None
    if isinstance(timeout, timedelta):
        return timeout.total_seconds()
    return float(timeout)


def _build_argv(tf: Any, command_args: Iterable[str]) -> list[str]:
    """Assemble ``binary [-chdir=dir] command_args... global_args...``."""
    argv = [os.fspath(tf.binary)]
    if tf.working_dir is not None:
        argv.append(f"-chdir={os.fspath(tf.working_dir)}")
    argv.extend(command_args)
    argv.extend(tf.global_args)
    return argv


def _subprocess_env(tf: Any) -> dict[str, str]:
    """The inherited environment with the client's variables laid over it."""
    env = dict(os.environ)
    env.update(tf.env)
    return env


def _exit_code(returncode: int | None) -> int:
    # A process killed by a signal has no exit code.
    if returncode is None or returncode < 0:
        return -1
    return returncode


async def run_terraform(tf: Any, command_args: Sequence[str]) -> CommandOutput:
    """Run a command, treating only exit code 0 as success; uses the client's timeout."""
    return await _run(tf, command_args, (0,), tf.timeout)


async def run_terraform_allow_exit_codes(
    tf: Any, command_args: Sequence[str], allowed_codes: Iterable[int]
) -> CommandOutput:
    """Run a command, treating any of ``allowed_codes`` as success."""
    return await _run(tf, command_args, tuple(allowed_codes), tf.timeout)


async def run_terraform_with_timeout(
    tf: Any, command_args: Sequence[str], timeout: Timeout
) -> CommandOutput:
    """Run a command with ``timeout`` overriding the client's default."""
    return await _run(tf, command_args, (0,), timeout)


async def _run(
    tf: Any,
    command_args: Sequence[str],
    allowed_codes: Sequence[int],
    timeout: Timeout | None,
) -> CommandOutput:
    args = list(command_args)
    argv = _build_argv(tf, args)
    seconds = _timeout_seconds(timeout)
    logger.debug("executing terraform command: %s (timeout %s)", argv, seconds)

    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=_subprocess_env(tf),
        )
    except OSError as exc:
        raise from_os_error(exc, f"failed to execute terraform: {exc}") from exc

    try:
        if seconds is None:
            raw_out, raw_err = await process.communicate()
        else:
            raw_out, raw_err = await asyncio.wait_for(process.communicate(), seconds)
    except asyncio.TimeoutError:
        with contextlib.suppress(ProcessLookupError):
            process.kill()
        await process.wait()
        logger.warning("terraform command timed out after %ss", int(seconds or 0))
        raise CommandTimeoutError(int(seconds or 0)) from None

    stdout = raw_out.decode("utf-8", errors="replace")
    stderr = raw_err.decode("utf-8", errors="replace")
    exit_code = _exit_code(process.returncode)
    success = exit_code in allowed_codes

    logger.debug("terraform command completed: exit_code=%s success=%s", exit_code, success)

    if not success:
        raise CommandFailedError(
            command=args[0] if args else "",
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
        )
    return CommandOutput(stdout=stdout, stderr=stderr, exit_code=exit_code, success=success)