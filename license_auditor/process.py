"""Blocking runner for package-manager commands."""

from __future__ import annotations

import subprocess
from pathlib import Path

import structlog

from license_auditor.errors import ExternalToolError

log = structlog.get_logger("license_auditor.process")


def run_tool(cmd: list[str], cwd: Path, timeout: float | None = None) -> str:
    """Run *cmd* in *cwd* and return its stdout.

    Blocks until the command exits; without *timeout* a hung tool blocks
    the caller indefinitely.

    Raises ``ExternalToolError`` on non-zero exit, a missing executable or
    an expired timeout.
    """
    log.debug("process.run", cmd=cmd, cwd=str(cwd))
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        raise ExternalToolError(cmd, None, f"executable not found: {exc.filename or cmd[0]}") from exc
    except subprocess.TimeoutExpired as exc:
        raise ExternalToolError(cmd, None, f"timed out after {timeout}s") from exc

    if proc.returncode != 0:
        raise ExternalToolError(cmd, proc.returncode, proc.stderr or "")
    return proc.stdout
