"""Data models for the license auditor."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

LICENSES_DIRNAME = "THIRD_PARTY_LICENSES"
PROJECT_LICENSE_NAME = "LICENSE"


@dataclass(frozen=True)
class Dependency:
    """A production dependency resolved by an ecosystem's package manager."""

    identity: str
    display_name: str
    resolved_path: Path
    source_url: str = ""

    @property
    def license_filename(self) -> str:
        return f"{self.identity}-LICENSE.txt"


@dataclass(frozen=True)
class MissingLicense:
    identity: str
    searched_path: Path


@dataclass
class CollectionReport:
    """Result of one collection run into a staging directory."""

    staging_dir: Path
    dependency_count: int = 0
    collected: list[str] = field(default_factory=list)
    missing: list[MissingLicense] = field(default_factory=list)

    @property
    def collected_count(self) -> int:
        return len(self.collected)

    @property
    def missing_count(self) -> int:
        return len(self.missing)

    @property
    def missing_identities(self) -> list[str]:
        return [m.identity for m in self.missing]


@dataclass
class DirectoryDiff:
    """Differences between two directories, as relative POSIX paths."""

    only_in_first: list[str] = field(default_factory=list)
    only_in_second: list[str] = field(default_factory=list)
    differing: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.only_in_first or self.only_in_second or self.differing)

    def describe(self, first_label: str = "generated", second_label: str = "committed") -> str:
        lines: list[str] = []
        for rel in self.only_in_first:
            lines.append(f"  only in {first_label}: {rel}")
        for rel in self.only_in_second:
            lines.append(f"  only in {second_label}: {rel}")
        for rel in self.differing:
            lines.append(f"  content differs: {rel}")
        return "\n".join(lines)


@dataclass
class PublishResult:
    """Outcome of copying a staging directory over the committed one."""

    report: CollectionReport
    committed_dir: Path
    copied: list[str] = field(default_factory=list)
    stale: list[str] = field(default_factory=list)
    pruned: bool = False
