"""Error taxonomy for the license auditor."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class LicenseAuditError(Exception):
    """Base license auditor exception."""


class ConfigurationError(LicenseAuditError):
    """Invalid or incomplete configuration (unknown ecosystem, missing directory)."""


class ExternalToolError(LicenseAuditError):
    """A package-manager command failed to run or exited non-zero."""

    def __init__(self, command: Sequence[str], exit_code: int | None, stderr: str) -> None:
        self.command = list(command)
        self.exit_code = exit_code
        self.stderr = stderr.strip()
        status = f"exit code {exit_code}" if exit_code is not None else "no exit code"
        message = f"`{' '.join(self.command)}` failed with {status}"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


class ManifestParseError(LicenseAuditError):
    """Package-manager output or manifest file does not have the expected structure."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid {source}: {reason}")


class MissingProjectLicenseError(LicenseAuditError):
    """The project's own license file does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Project license file not found: {path}")


class LicenseDriftError(LicenseAuditError):
    """Generated license files differ from the committed ones."""

    def __init__(self, committed_dir: Path, details: str, remediation: str) -> None:
        self.committed_dir = committed_dir
        self.details = details
        self.remediation = remediation
        message = (
            "[FAILURE] License file validation failed!\n"
            f"Generated license files differ from committed files at {committed_dir}.\n"
        )
        if details:
            message += details + "\n"
        message += remediation
        super().__init__(message)
