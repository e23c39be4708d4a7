"""Tests for license file lookup."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from license_auditor.locator import LICENSE_CANDIDATES, find_license_file


class TestFindLicenseFile:
    def test_plain_license(self, tmp_path):
        (tmp_path / "LICENSE").write_text("MIT")
        assert find_license_file(tmp_path) == tmp_path / "LICENSE"

    def test_priority_order(self, tmp_path):
        for name in ("LICENCE.txt", "LICENSE.txt", "LICENSE.md"):
            (tmp_path / name).write_text(name)
        assert find_license_file(tmp_path) == tmp_path / "LICENSE.md"

    def test_british_spelling(self, tmp_path):
        (tmp_path / "LICENCE").write_text("BSD")
        assert find_license_file(tmp_path) == tmp_path / "LICENCE"

    def test_every_candidate_recognised(self, tmp_path):
        for name in LICENSE_CANDIDATES:
            d = tmp_path / name.replace(".", "_")
            d.mkdir()
            (d / name).write_text(name)
            assert find_license_file(d) == d / name

    def test_case_sensitive(self, tmp_path):
        (tmp_path / "license").write_text("lowercase")
        (tmp_path / "License.md").write_text("mixed")
        assert find_license_file(tmp_path) is None

    def test_other_names_ignored(self, tmp_path):
        (tmp_path / "COPYING").write_text("GPL")
        (tmp_path / "LICENSE-MIT").write_text("MIT")
        assert find_license_file(tmp_path) is None

    def test_directory_named_license_skipped(self, tmp_path):
        (tmp_path / "LICENSE").mkdir()
        (tmp_path / "LICENSE.txt").write_text("Apache")
        assert find_license_file(tmp_path) == tmp_path / "LICENSE.txt"

    def test_missing_directory(self, tmp_path):
        assert find_license_file(tmp_path / "absent") is None

    def test_file_instead_of_directory(self, tmp_path):
        f = tmp_path / "LICENSE"
        f.write_text("MIT")
        assert find_license_file(f) is None

    def test_unreadable_directory(self, tmp_path):
        (tmp_path / "LICENSE").write_text("MIT")
        with patch.object(Path, "iterdir", side_effect=PermissionError(13, "Permission denied")):
            assert find_license_file(tmp_path) is None
