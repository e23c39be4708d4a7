"""Reader for Dart pub projects.

Production package names come from ``dart pub deps --no-dev --style=compact``;
their root directories come from ``.dart_tool/package_config.json``.  Only
packages present in both are returned.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import urlparse
from urllib.request import url2pathname

import structlog

from license_auditor.errors import ManifestParseError
from license_auditor.models import Dependency
from license_auditor.process import run_tool
from license_auditor.registry import register_reader

if TYPE_CHECKING:
    from license_auditor.core.config import AuditConfig

log = structlog.get_logger("license_auditor.readers.dart")

# Compact style: "- package_name 1.0.0 [dep1 dep2]"
_PACKAGE_LINE_RE = re.compile(r"^- (\S+) .+$")


def parse_compact_deps(output: str) -> set[str]:
    """Extract package names from ``dart pub deps --style=compact`` output."""
    names: set[str] = set()
    for line in output.splitlines():
        m = _PACKAGE_LINE_RE.match(line)
        if m:
            names.add(m.group(1))
    return names


def _resolve_root_uri(root_uri: str, base_dir: Path) -> Path | None:
    if root_uri.startswith("file://"):
        parsed = urlparse(root_uri)
        if not parsed.path:
            return None
        return Path(url2pathname(parsed.path))
    if "://" in root_uri:
        # Non-file scheme, nothing on disk to read.
        return None
    return (base_dir / root_uri).resolve()


def parse_package_roots(package_config: Path) -> dict[str, Path]:
    """Map package name to root directory from a ``package_config.json`` file.

    ``file://`` URIs are absolute; anything else is relative to the config
    file's own directory.  Entries without a usable name or root are skipped.
    """
    source = str(package_config)
    try:
        data = json.loads(package_config.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ManifestParseError(
            source, "file not found (run `dart pub get` first)"
        ) from exc
    except json.JSONDecodeError as exc:
        raise ManifestParseError(source, f"not valid JSON ({exc})") from exc

    if not isinstance(data, dict):
        raise ManifestParseError(source, "expected a JSON object")
    packages = data.get("packages")
    if not isinstance(packages, list):
        raise ManifestParseError(source, "missing 'packages' array")

    roots: dict[str, Path] = {}
    base_dir = package_config.parent
    for entry in packages:
        if not isinstance(entry, dict):
            continue
        name = entry.get("name")
        root_uri = entry.get("rootUri")
        if not isinstance(name, str) or not isinstance(root_uri, str):
            continue
        root = _resolve_root_uri(root_uri, base_dir)
        if root is None:
            log.debug("dart.unresolvable_root", package=name, root_uri=root_uri)
            continue
        roots[name] = root
    return roots


class DartPubReader:
    ecosystem = "dart"

    def __init__(
        self,
        project_dir: Path,
        package_config: Path,
        binary: str = "dart",
        timeout: float | None = None,
    ) -> None:
        self.project_dir = project_dir
        self.package_config = package_config
        self.binary = binary
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: AuditConfig) -> DartPubReader:
        return cls(
            project_dir=config.project_dir,
            package_config=(
                config.package_config
                or config.project_dir / ".dart_tool" / "package_config.json"
            ),
            binary=config.tool_binary or "dart",
            timeout=config.tool_timeout,
        )

    def list_production_dependencies(self) -> list[Dependency]:
        output = run_tool(
            [self.binary, "pub", "deps", "--no-dev", "--style=compact"],
            cwd=self.project_dir,
            timeout=self.timeout,
        )
        names = parse_compact_deps(output)
        roots = parse_package_roots(self.package_config)

        dropped = sorted(names - roots.keys())
        if dropped:
            log.debug("dart.packages_without_root", packages=dropped)

        return [
            Dependency(identity=name, display_name=name, resolved_path=roots[name])
            for name in sorted(names & roots.keys())
        ]


register_reader(DartPubReader)
