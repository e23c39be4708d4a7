"""Explicit run configuration for the license auditor.

Every operation receives an :class:`AuditConfig`; nothing is read from an
implicit working directory.  Defaults mirror the layout of the build plugins
this tool replaces:

    <project-dir>/LICENSE                              project license
    <project-dir>/build/<ecosystem>-licenses           staging directory
    <project-dir>/.dart_tool/package_config.json       Dart package config

Environment overrides:
    LICENSE_AUDITOR_DART_BIN       — Dart executable (default: dart)
    LICENSE_AUDITOR_SWIFT_BIN      — Swift executable (default: swift)
    LICENSE_AUDITOR_TOOL_TIMEOUT   — seconds before a package-manager call is
                                     abandoned (default: unset, wait forever)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from license_auditor.errors import ConfigurationError

_DEFAULT_BINARIES = {
    "dart": "dart",
    "swift": "swift",
}


def default_tool_binary(ecosystem: str) -> str:
    env_name = f"LICENSE_AUDITOR_{ecosystem.upper()}_BIN"
    return os.environ.get(env_name) or _DEFAULT_BINARIES.get(ecosystem, ecosystem)


def default_tool_timeout() -> float | None:
    raw = os.environ.get("LICENSE_AUDITOR_TOOL_TIMEOUT")
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"LICENSE_AUDITOR_TOOL_TIMEOUT must be a number of seconds, got {raw!r}"
        ) from exc
    return timeout if timeout > 0 else None


def default_paths(ecosystem: str, project_dir: Path) -> dict[str, Path | None]:
    """Conventional locations for a project, before any override."""
    return {
        "staging_dir": project_dir / "build" / f"{ecosystem}-licenses",
        "project_license": project_dir / "LICENSE",
        "package_config": (
            project_dir / ".dart_tool" / "package_config.json" if ecosystem == "dart" else None
        ),
    }


@dataclass(frozen=True)
class AuditConfig:
    ecosystem: str
    project_dir: Path
    staging_dir: Path
    project_license: Path
    committed_dir: Path | None = None
    package_config: Path | None = None
    tool_binary: str | None = None
    tool_timeout: float | None = None

    @classmethod
    def build(
        cls,
        ecosystem: str,
        project_dir: Path | str,
        *,
        staging_dir: Path | str | None = None,
        committed_dir: Path | str | None = None,
        project_license: Path | str | None = None,
        package_config: Path | str | None = None,
        tool_binary: str | None = None,
        tool_timeout: float | None = None,
    ) -> AuditConfig:
        """Build a config, filling unset paths with the conventional defaults."""
        from license_auditor.registry import supported_ecosystems

        ecosystem = ecosystem.lower()
        if ecosystem not in supported_ecosystems():
            raise ConfigurationError(
                f"Unknown ecosystem {ecosystem!r} "
                f"(expected one of: {', '.join(supported_ecosystems())})"
            )

        project = Path(project_dir).resolve()
        if not project.is_dir():
            raise ConfigurationError(f"Project directory not found: {project}")

        defaults = default_paths(ecosystem, project)
        return cls(
            ecosystem=ecosystem,
            project_dir=project,
            staging_dir=(
                Path(staging_dir).resolve() if staging_dir is not None else defaults["staging_dir"]
            ),
            project_license=(
                Path(project_license).resolve()
                if project_license is not None
                else defaults["project_license"]
            ),
            committed_dir=Path(committed_dir).resolve() if committed_dir is not None else None,
            package_config=(
                Path(package_config).resolve()
                if package_config is not None
                else defaults["package_config"]
            ),
            tool_binary=tool_binary or default_tool_binary(ecosystem),
            tool_timeout=tool_timeout if tool_timeout is not None else default_tool_timeout(),
        )

    def require_committed_dir(self) -> Path:
        if self.committed_dir is None:
            raise ConfigurationError("A committed license directory is required for this operation")
        return self.committed_dir

    def path_overrides(self) -> list[tuple[str, Path]]:
        """CLI options for every path that differs from its conventional default."""
        defaults = default_paths(self.ecosystem, self.project_dir)
        overrides: list[tuple[str, Path]] = []
        if self.project_license != defaults["project_license"]:
            overrides.append(("--project-license", self.project_license))
        if self.package_config is not None and self.package_config != defaults["package_config"]:
            overrides.append(("--package-config", self.package_config))
        if self.staging_dir != defaults["staging_dir"]:
            overrides.append(("--staging-dir", self.staging_dir))
        return overrides
