"""Streaming NDJSON output from commands run with ``-json``.

Each line Terraform writes is one event, such as ``planned_change``,
``apply_start``, ``apply_progress``, ``apply_complete`` or ``change_summary``.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from tfwrap.errors import (
    CommandFailedError,
    CommandTimeoutError,
    TerraformIOError,
    from_os_error,
)
from tfwrap.exec import (
    CommandOutput,
    _build_argv,
    _exit_code,
    _subprocess_env,
    _timeout_seconds,
)

logger = logging.getLogger(__name__)

_LINE_LIMIT = 16 * 1024 * 1024


@dataclass
class JsonLogLine:
    """One JSON event from Terraform's streaming output."""

    level: str
    message: str
    module: str = ""
    timestamp: str = ""
    log_type: str = ""
    change: Any = None
    hook: Any = None
    changes: Any = None
    outputs: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> JsonLogLine:
        """Build from a decoded JSON object; ``@level`` and ``@message`` are required."""
        return cls(
            level=data["@level"],
            message=data["@message"],
            module=data.get("@module", ""),
            timestamp=data.get("@timestamp", ""),
            log_type=data.get("type", ""),
            change=data.get("change"),
            hook=data.get("hook"),
            changes=data.get("changes"),
            outputs=data.get("outputs"),
        )


def _parse_line(line: str) -> JsonLogLine | None:
    try:
        return JsonLogLine.from_dict(json.loads(line))
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        logger.warning("failed to parse streaming json line, skipping: %r (%s)", line, exc)
        return None


def _command_args(command: Any, tf: Any) -> list[str]:
    prepare = getattr(command, "prepare_args", None)
    if callable(prepare):
        return list(prepare(tf))
    return list(command.args())


async def stream_terraform(
    tf: Any,
    command: Any,
    allowed_exit_codes: Iterable[int],
    handler: Callable[[JsonLogLine], Any],
) -> CommandOutput:
    """Run ``command`` and call ``handler`` with each JSON event as it arrives.

    Lines that are not JSON events are logged and skipped. The client's
    timeout covers the whole run; on expiry the process is killed and
    CommandTimeoutError is raised. The returned output has an empty stdout,
    since every line went to ``handler``.
    """
    args = _command_args(command, tf)
    allowed = tuple(allowed_exit_codes)
    argv = _build_argv(tf, args)
    seconds = _timeout_seconds(tf.timeout)
    logger.debug("streaming terraform command: %s (timeout %s)", argv, seconds)

    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=_subprocess_env(tf),
            limit=_LINE_LIMIT,
        )
    except OSError as exc:
        raise from_os_error(exc, f"failed to spawn terraform: {exc}") from exc

    if process.stdout is None or process.stderr is None:
        raise TerraformIOError("failed to capture stdout")
    stdout_stream = process.stdout
    stderr_stream = process.stderr

    async def stream_and_wait() -> bytes:
        stderr_task = asyncio.ensure_future(stderr_stream.read())
        try:
            while True:
                try:
                    raw = await stdout_stream.readline()
                except (OSError, ValueError) as exc:
                    raise TerraformIOError(f"failed to read stdout line: {exc}") from exc
                if not raw:
                    break
                line = raw.decode("utf-8", errors="replace").rstrip("\r\n")
                event = _parse_line(line)
                if event is not None:
                    handler(event)
            raw_err = await stderr_task
            await process.wait()
            return raw_err
        finally:
            if not stderr_task.done():
                stderr_task.cancel()

    try:
        if seconds is None:
            raw_err = await stream_and_wait()
        else:
            raw_err = await asyncio.wait_for(stream_and_wait(), seconds)
    except asyncio.TimeoutError:
        with contextlib.suppress(ProcessLookupError):
            process.kill()
        await process.wait()
        logger.warning("streaming terraform command timed out after %ss", int(seconds or 0))
        raise CommandTimeoutError(int(seconds or 0)) from None
    except BaseException:
        if process.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
        raise

    stderr = raw_err.decode("utf-8", errors="replace")
    exit_code = _exit_code(process.returncode)
    success = exit_code in allowed
    logger.debug("streaming terraform command completed: exit_code=%s success=%s", exit_code, success)

    if not success:
        raise CommandFailedError(
            command=args[0] if args else "",
            exit_code=exit_code,
            stdout="",
            stderr=stderr,
        )
    return CommandOutput(stdout="", stderr=stderr, exit_code=exit_code, success=success)