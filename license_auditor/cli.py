"""CLI entry point: license-audit.

Subcommands:
    license-audit list     --ecosystem dart --project-dir analyzer [--json]
    license-audit collect  --ecosystem dart --project-dir analyzer --out build/dart-licenses
    license-audit validate --ecosystem swift --project-dir analyzer --committed-dir resources/swift-licenses
    license-audit publish  --ecosystem swift --project-dir analyzer --committed-dir resources/swift-licenses [--prune]

Every option can also be given as a LICENSE_AUDITOR_* environment variable
(e.g. LICENSE_AUDITOR_PROJECT_DIR), including from a .env file in the
current directory.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Callable, TypeVar

import click
from dotenv import find_dotenv, load_dotenv

from license_auditor.core.config import AuditConfig
from license_auditor.core.logging import setup_logging
from license_auditor.errors import LicenseAuditError
from license_auditor.models import CollectionReport
from license_auditor.pipeline import collect_licenses, list_dependencies, publish, validate
from license_auditor.registry import supported_ecosystems

T = TypeVar("T")

_DIR = click.Path(file_okay=False, path_type=Path)
_FILE = click.Path(dir_okay=False, path_type=Path)


def _project_options(func: Callable) -> Callable:
    """Options shared by every subcommand."""
    func = click.option(
        "--package-config",
        type=_FILE,
        default=None,
        envvar="LICENSE_AUDITOR_PACKAGE_CONFIG",
        help="Dart package_config.json (default: <project-dir>/.dart_tool/package_config.json)",
    )(func)
    func = click.option(
        "--project-license",
        type=_FILE,
        default=None,
        envvar="LICENSE_AUDITOR_PROJECT_LICENSE",
        help="The project's own license (default: <project-dir>/LICENSE)",
    )(func)
    func = click.option(
        "--project-dir",
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        required=True,
        envvar="LICENSE_AUDITOR_PROJECT_DIR",
        help="Directory the package manager runs in",
    )(func)
    func = click.option(
        "--ecosystem",
        type=click.Choice(supported_ecosystems(), case_sensitive=False),
        required=True,
        envvar="LICENSE_AUDITOR_ECOSYSTEM",
        help="Package-manager ecosystem",
    )(func)
    return func


def _staging_option(*names: str) -> Callable[[Callable], Callable]:
    return click.option(
        *names,
        "staging_dir",
        type=_DIR,
        default=None,
        envvar="LICENSE_AUDITOR_STAGING_DIR",
        help="Staging directory (default: <project-dir>/build/<ecosystem>-licenses)",
    )


_committed_option = click.option(
    "--committed-dir",
    type=_DIR,
    required=True,
    envvar="LICENSE_AUDITOR_COMMITTED_DIR",
    help="Version-controlled license directory",
)


def _guarded(action: Callable[[], T]) -> T:
    """Run *action*, turning auditor errors into exit code 1."""
    try:
        return action()
    except LicenseAuditError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


def _echo_report(report: CollectionReport) -> None:
    click.echo(
        f"Collected {report.collected_count} license files "
        f"from {report.dependency_count} packages into {report.staging_dir}"
    )
    if report.missing:
        click.echo(f"No license file found for {report.missing_count} package(s):")
        for missing in report.missing:
            click.echo(f"  {missing.identity}  (looked in {missing.searched_path})")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """Collect and validate third-party license files for Dart and Swift projects."""
    load_dotenv(find_dotenv(usecwd=True))
    setup_logging(verbose=verbose)


@main.command("list")
@_project_options
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_cmd(
    ecosystem: str,
    project_dir: Path,
    project_license: Path | None,
    package_config: Path | None,
    as_json: bool,
) -> None:
    """Print the resolved production dependencies."""
    config = _guarded(
        lambda: AuditConfig.build(
            ecosystem,
            project_dir,
            project_license=project_license,
            package_config=package_config,
        )
    )
    deps = _guarded(lambda: list_dependencies(config))

    if as_json:
        rows = [
            {
                "identity": d.identity,
                "name": d.display_name,
                "url": d.source_url,
                "path": str(d.resolved_path),
            }
            for d in deps
        ]
        click.echo(json.dumps(rows, indent=2))
        return

    if not deps:
        click.echo("No production dependencies found.")
        return
    click.echo(f"Found {len(deps)} production dependencies\n")
    for d in deps:
        url = f"  -> {d.source_url}" if d.source_url else ""
        click.echo(f"  {d.identity}  {d.resolved_path}{url}")


@main.command("collect")
@_project_options
@_staging_option("--out", "-o")
def collect_cmd(
    ecosystem: str,
    project_dir: Path,
    project_license: Path | None,
    package_config: Path | None,
    staging_dir: Path | None,
) -> None:
    """Stage license files for every production dependency."""
    config = _guarded(
        lambda: AuditConfig.build(
            ecosystem,
            project_dir,
            staging_dir=staging_dir,
            project_license=project_license,
            package_config=package_config,
        )
    )
    report = _guarded(lambda: collect_licenses(config))
    _echo_report(report)


@main.command("validate")
@_project_options
@_committed_option
@_staging_option("--staging-dir")
def validate_cmd(
    ecosystem: str,
    project_dir: Path,
    project_license: Path | None,
    package_config: Path | None,
    committed_dir: Path,
    staging_dir: Path | None,
) -> None:
    """Fail if freshly collected licenses differ from the committed ones."""
    config = _guarded(
        lambda: AuditConfig.build(
            ecosystem,
            project_dir,
            staging_dir=staging_dir,
            committed_dir=committed_dir,
            project_license=project_license,
            package_config=package_config,
        )
    )
    _guarded(lambda: validate(config))
    click.echo(
        f"{config.ecosystem.capitalize()} license file validation succeeded: "
        "generated files match committed ones."
    )


@main.command("publish")
@_project_options
@_committed_option
@_staging_option("--staging-dir")
@click.option(
    "--prune",
    is_flag=True,
    help="Also delete committed files that were not generated (mirror instead of overlay)",
)
def publish_cmd(
    ecosystem: str,
    project_dir: Path,
    project_license: Path | None,
    package_config: Path | None,
    committed_dir: Path,
    staging_dir: Path | None,
    prune: bool,
) -> None:
    """Collect licenses and copy them into the committed directory."""
    config = _guarded(
        lambda: AuditConfig.build(
            ecosystem,
            project_dir,
            staging_dir=staging_dir,
            committed_dir=committed_dir,
            project_license=project_license,
            package_config=package_config,
        )
    )
    result = _guarded(lambda: publish(config, prune=prune))
    _echo_report(result.report)
    click.echo(f"Copied {len(result.copied)} files to {result.committed_dir}")
    if result.stale:
        verb = "Removed" if result.pruned else "Kept"
        click.echo(f"{verb} {len(result.stale)} committed file(s) with no generated counterpart:")
        for rel in result.stale:
            click.echo(f"  {rel}")


if __name__ == "__main__":
    main()
