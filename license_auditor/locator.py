"""Locate a package's license file by conventional file names."""

from __future__ import annotations

from pathlib import Path

# Checked in order, first existing file wins. Matching is case-sensitive.
LICENSE_CANDIDATES = (
    "LICENSE",
    "LICENSE.md",
    "LICENSE.txt",
    "LICENCE",
    "LICENCE.md",
    "LICENCE.txt",
)


def find_license_file(directory: Path) -> Path | None:
    """Return the best-matching license file in *directory*, or None."""
    if not directory.is_dir():
        return None
    # Compare against real entry names so case-insensitive filesystems
    # do not turn "license" into a match for "LICENSE".
    try:
        entries = {entry.name for entry in directory.iterdir()}
    except OSError:
        return None
    for candidate in LICENSE_CANDIDATES:
        if candidate in entries and (directory / candidate).is_file():
            return directory / candidate
    return None
