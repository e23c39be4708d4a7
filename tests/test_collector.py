"""Tests for staging license collection."""

from __future__ import annotations

from pathlib import Path

import pytest

from license_auditor.collector import collect
from license_auditor.errors import MissingProjectLicenseError
from license_auditor.models import Dependency


def _dep(identity: str, path: Path) -> Dependency:
    return Dependency(identity=identity, display_name=identity, resolved_path=path)


def _snapshot(root: Path) -> dict[str, bytes]:
    return {p.relative_to(root).as_posix(): p.read_bytes() for p in root.rglob("*") if p.is_file()}


class TestCollect:
    def test_copies_license_bytes_verbatim(self, tmp_path, project, make_package):
        pkg = make_package(tmp_path / "pkgs", "x", "LICENSE.md", text="Copyright (c) X\r\n© 2024\n")
        staging = tmp_path / "staging"

        report = collect([_dep("x", pkg)], project / "LICENSE", staging)

        out = staging / "THIRD_PARTY_LICENSES" / "x-LICENSE.txt"
        assert out.read_bytes() == (pkg / "LICENSE.md").read_bytes()
        assert report.collected == ["x"]
        assert report.missing == []

    def test_project_license_at_staging_root(self, tmp_path, project):
        staging = tmp_path / "staging"
        collect([], project / "LICENSE", staging)
        assert (staging / "LICENSE").read_text() == "Project license\n"
        assert list((staging / "THIRD_PARTY_LICENSES").iterdir()) == []

    def test_one_file_per_located_license(self, tmp_path, project, make_package):
        pkgs = tmp_path / "pkgs"
        deps = [
            _dep("b", make_package(pkgs, "b", "LICENSE")),
            _dep("a", make_package(pkgs, "a", "LICENCE.txt")),
            _dep("c", make_package(pkgs, "c", None)),
        ]
        staging = tmp_path / "staging"

        report = collect(deps, project / "LICENSE", staging)

        names = sorted(p.name for p in (staging / "THIRD_PARTY_LICENSES").iterdir())
        assert names == ["a-LICENSE.txt", "b-LICENSE.txt"]
        assert report.dependency_count == 3
        assert report.collected_count == 2
        assert report.missing_count == 1

    def test_collected_in_identity_order(self, tmp_path, project, make_package):
        pkgs = tmp_path / "pkgs"
        deps = [_dep(name, make_package(pkgs, name)) for name in ("zeta", "alpha", "mid")]
        report = collect(deps, project / "LICENSE", tmp_path / "staging")
        assert report.collected == ["alpha", "mid", "zeta"]

    def test_missing_license_reported_not_fatal(self, tmp_path, project, make_package):
        pkg = make_package(tmp_path / "pkgs", "nolicense", None)
        staging = tmp_path / "staging"

        report = collect([_dep("nolicense", pkg)], project / "LICENSE", staging)

        assert report.missing_identities == ["nolicense"]
        assert report.missing[0].searched_path == pkg
        assert not (staging / "THIRD_PARTY_LICENSES" / "nolicense-LICENSE.txt").exists()

    def test_unresolvable_directory_reported_missing(self, tmp_path, project):
        report = collect([_dep("gone", tmp_path / "gone")], project / "LICENSE", tmp_path / "staging")
        assert report.missing_identities == ["gone"]

    def test_stale_staged_files_removed(self, tmp_path, project, make_package):
        staging = tmp_path / "staging"
        stale = staging / "THIRD_PARTY_LICENSES" / "old-LICENSE.txt"
        stale.parent.mkdir(parents=True)
        stale.write_text("old")

        collect([_dep("x", make_package(tmp_path / "pkgs", "x"))], project / "LICENSE", staging)

        assert not stale.exists()

    def test_idempotent(self, tmp_path, project, make_package):
        pkgs = tmp_path / "pkgs"
        deps = [_dep(n, make_package(pkgs, n)) for n in ("a", "b")]
        deps.append(_dep("c", make_package(pkgs, "c", None)))
        staging = tmp_path / "staging"

        collect(deps, project / "LICENSE", staging)
        first = _snapshot(staging)
        collect(deps, project / "LICENSE", staging)

        assert _snapshot(staging) == first

    def test_missing_project_license_is_fatal(self, tmp_path, make_package):
        staging = tmp_path / "staging"
        with pytest.raises(MissingProjectLicenseError) as exc_info:
            collect(
                [_dep("x", make_package(tmp_path / "pkgs", "x"))],
                tmp_path / "LICENSE",
                staging,
            )
        assert exc_info.value.path == tmp_path / "LICENSE"
        assert not staging.exists()

    def test_missing_license_logged(self, tmp_path, project, make_package, caplog):
        pkg = make_package(tmp_path / "pkgs", "quiet", None)
        collect([_dep("quiet", pkg)], project / "LICENSE", tmp_path / "staging")
        assert "collector.license_missing" in caplog.text
        assert "quiet" in caplog.text
