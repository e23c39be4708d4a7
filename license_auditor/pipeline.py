"""Terminal operations: collect, validate and publish license snapshots."""

from __future__ import annotations

import shlex
import shutil

import structlog

from license_auditor.collector import collect
from license_auditor.comparator import diff_directories, license_files, log_diff
from license_auditor.core.config import AuditConfig
from license_auditor.errors import LicenseDriftError
from license_auditor.models import CollectionReport, Dependency, PublishResult
from license_auditor.registry import create_reader

log = structlog.get_logger("license_auditor.pipeline")


def list_dependencies(config: AuditConfig) -> list[Dependency]:
    """Resolve the production dependencies of the configured project."""
    reader = create_reader(config)
    deps = reader.list_production_dependencies()
    return sorted(deps, key=lambda d: d.identity)


def collect_licenses(config: AuditConfig) -> CollectionReport:
    """Resolve dependencies and stage their license files."""
    deps = list_dependencies(config)
    log.info(
        "pipeline.collecting",
        ecosystem=config.ecosystem,
        packages=len(deps),
        staging_dir=str(config.staging_dir),
    )
    return collect(deps, config.project_license, config.staging_dir)


def publish_command(config: AuditConfig) -> str:
    """The shell command that regenerates the committed snapshot for *config*."""
    args = [
        "license-audit",
        "publish",
        "--ecosystem",
        config.ecosystem,
        "--project-dir",
        str(config.project_dir),
        "--committed-dir",
        str(config.require_committed_dir()),
    ]
    for option, path in config.path_overrides():
        args.extend([option, str(path)])
    return shlex.join(args)


def remediation_hint(config: AuditConfig) -> str:
    return (
        "To update the committed license files, run:\n"
        f"  {publish_command(config)}\n"
        "and commit the changes."
    )


def validate(config: AuditConfig) -> CollectionReport:
    """Stage licenses and fail with :class:`LicenseDriftError` if they differ from the committed ones.

    The committed directory is never written.
    """
    committed = config.require_committed_dir()
    report = collect_licenses(config)

    diff = diff_directories(config.staging_dir, committed)
    if not diff.is_empty:
        log_diff(diff, config.staging_dir, committed)
        raise LicenseDriftError(committed, diff.describe(), remediation_hint(config))

    log.info(
        "pipeline.validate_succeeded",
        ecosystem=config.ecosystem,
        committed_dir=str(committed),
    )
    return report


def publish(config: AuditConfig, *, prune: bool = False) -> PublishResult:
    """Stage licenses and copy them over the committed directory.

    Overlay semantics by default: committed files with no staged counterpart
    are kept and reported as stale.  With ``prune=True`` they are deleted,
    making the committed directory an exact mirror of staging.
    """
    committed = config.require_committed_dir()
    report = collect_licenses(config)
    committed.mkdir(parents=True, exist_ok=True)

    result = PublishResult(report=report, committed_dir=committed, pruned=prune)
    staging = config.staging_dir
    for rel in license_files(staging):
        target = committed / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(staging / rel, target)
        result.copied.append(rel)

    # After the overlay only committed-side extras can remain.
    result.stale = sorted(set(license_files(committed)) - set(result.copied))
    for rel in result.stale:
        if prune:
            (committed / rel).unlink()
            log.info("pipeline.pruned_stale_file", path=rel)
        else:
            log.warning("pipeline.stale_committed_file", path=rel, committed_dir=str(committed))

    log.info(
        "pipeline.publish_finished",
        ecosystem=config.ecosystem,
        copied=len(result.copied),
        stale=len(result.stale),
        pruned=prune,
        committed_dir=str(committed),
    )
    return result
