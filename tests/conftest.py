"""Shared fixtures for license auditor tests.

No Dart or Swift toolchain is needed: package-manager output is faked by
patching ``run_tool`` in the reader modules.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import structlog


def write_package(
    root: Path, name: str, license_name: str | None = "LICENSE", text: str | None = None
) -> Path:
    """Create a package directory, optionally with a license file."""
    pkg = root / name
    pkg.mkdir(parents=True, exist_ok=True)
    if license_name is not None:
        (pkg / license_name).write_text(text if text is not None else f"{name} license text\n")
    return pkg


@pytest.fixture
def project(tmp_path) -> Path:
    """A project directory with its own LICENSE."""
    proj = tmp_path / "analyzer"
    proj.mkdir()
    (proj / "LICENSE").write_text("Project license\n")
    return proj


@pytest.fixture
def pub_cache(tmp_path) -> Path:
    cache = tmp_path / "pub-cache"
    cache.mkdir()
    return cache


@pytest.fixture
def dart_project(project, pub_cache):
    """A Dart project with a package_config.json and two hosted packages.

    Returns ``(project_dir, compact_deps_output)``.
    """
    path_pkg = write_package(pub_cache, "path-1.9.0", "LICENSE")
    meta_pkg = write_package(pub_cache, "meta-1.15.0", "LICENSE.md")
    test_pkg = write_package(pub_cache, "test-1.25.0", "LICENSE")

    config = {
        "configVersion": 2,
        "packages": [
            {"name": "path", "rootUri": path_pkg.as_uri(), "packageUri": "lib/"},
            {"name": "meta", "rootUri": meta_pkg.as_uri(), "packageUri": "lib/"},
            {"name": "test", "rootUri": test_pkg.as_uri(), "packageUri": "lib/"},
            {"name": "analyzer_app", "rootUri": "../", "packageUri": "lib/"},
        ],
    }
    tool_dir = project / ".dart_tool"
    tool_dir.mkdir()
    (tool_dir / "package_config.json").write_text(json.dumps(config))

    output = (
        "Dart SDK 3.5.0\n"
        "analyzer_app 1.0.0\n"
        "\n"
        "dependencies:\n"
        "- path 1.9.0\n"
        "\n"
        "transitive dependencies:\n"
        "- meta 1.15.0\n"
    )
    return project, output


@pytest.fixture
def make_package():
    return write_package


@pytest.fixture(autouse=True, scope="session")
def _structlog_to_stdlib():
    """Route structlog through stdlib logging so ``caplog`` sees events."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()
