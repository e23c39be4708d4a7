"""Byte-for-byte comparison of two license directories."""

from __future__ import annotations

from pathlib import Path

import structlog

from license_auditor.models import LICENSES_DIRNAME, PROJECT_LICENSE_NAME, DirectoryDiff

log = structlog.get_logger("license_auditor.comparator")


def license_files(root: Path) -> list[str]:
    """List the generated layout under *root* as relative POSIX paths.

    Only ``LICENSE`` and the regular files directly inside
    ``THIRD_PARTY_LICENSES/`` count; anything else in *root* is ignored.
    A directory that does not exist yields an empty list.
    """
    files: list[str] = []
    if (root / PROJECT_LICENSE_NAME).is_file():
        files.append(PROJECT_LICENSE_NAME)
    licenses_dir = root / LICENSES_DIRNAME
    if licenses_dir.is_dir():
        files.extend(
            f"{LICENSES_DIRNAME}/{p.name}" for p in licenses_dir.iterdir() if p.is_file()
        )
    return sorted(files)


def diff_directories(first: Path, second: Path) -> DirectoryDiff:
    """Compare the license layout under *first* and *second*."""
    first_files = set(license_files(first))
    second_files = set(license_files(second))
    common = first_files & second_files
    return DirectoryDiff(
        only_in_first=sorted(first_files - second_files),
        only_in_second=sorted(second_files - first_files),
        differing=sorted(
            rel for rel in common if (first / rel).read_bytes() != (second / rel).read_bytes()
        ),
    )


def log_diff(diff: DirectoryDiff, first: Path, second: Path) -> None:
    for rel in diff.only_in_first:
        log.warning("comparator.missing_file", path=rel, present_in=str(first), absent_from=str(second))
    for rel in diff.only_in_second:
        log.warning("comparator.missing_file", path=rel, present_in=str(second), absent_from=str(first))
    for rel in diff.differing:
        log.warning("comparator.content_differs", path=rel)


def are_directories_equal(first: Path, second: Path) -> bool:
    """Return True when both directories hold the same license files with the same bytes.

    Mismatches are logged, never raised.
    """
    diff = diff_directories(first, second)
    log_diff(diff, first, second)
    return diff.is_empty
