"""Collect third-party license files into a staging directory."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Iterable

import structlog

from license_auditor.errors import MissingProjectLicenseError
from license_auditor.locator import find_license_file
from license_auditor.models import (
    LICENSES_DIRNAME,
    PROJECT_LICENSE_NAME,
    CollectionReport,
    Dependency,
    MissingLicense,
)

log = structlog.get_logger("license_auditor.collector")


def collect(
    dependencies: Iterable[Dependency],
    project_license: Path,
    staging_dir: Path,
) -> CollectionReport:
    """Populate *staging_dir* with one license per dependency plus the project license.

    Layout produced::

        <staging_dir>/LICENSE
        <staging_dir>/THIRD_PARTY_LICENSES/<identity>-LICENSE.txt

    ``THIRD_PARTY_LICENSES`` is wiped before being filled, so repeated runs
    with unchanged inputs produce identical contents.  A dependency without a
    license file is recorded in the report and skipped; a missing project
    license raises :class:`MissingProjectLicenseError`.
    """
    if not project_license.is_file():
        raise MissingProjectLicenseError(project_license)

    deps = sorted(dependencies, key=lambda d: d.identity)
    output_dir = staging_dir / LICENSES_DIRNAME
    if output_dir.exists():
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True)

    report = CollectionReport(staging_dir=staging_dir, dependency_count=len(deps))
    log.info("collector.started", packages=len(deps), staging_dir=str(staging_dir))

    for dep in deps:
        license_file = find_license_file(dep.resolved_path)
        if license_file is None:
            log.warning(
                "collector.license_missing",
                identity=dep.identity,
                searched_path=str(dep.resolved_path),
            )
            report.missing.append(MissingLicense(dep.identity, dep.resolved_path))
            continue
        shutil.copyfile(license_file, output_dir / dep.license_filename)
        report.collected.append(dep.identity)

    shutil.copyfile(project_license, staging_dir / PROJECT_LICENSE_NAME)

    log.info(
        "collector.finished",
        collected=report.collected_count,
        missing=report.missing_count,
        packages=report.dependency_count,
    )
    return report
