"""Reader for Swift Package Manager projects.

``swift package show-dependencies --format json`` prints the resolved
dependency tree; it is flattened here with de-duplication by identity.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from license_auditor.errors import ManifestParseError
from license_auditor.models import Dependency
from license_auditor.process import run_tool
from license_auditor.registry import register_reader

if TYPE_CHECKING:
    from license_auditor.core.config import AuditConfig

log = structlog.get_logger("license_auditor.readers.swift")

_SOURCE = "output of `swift package show-dependencies`"


def flatten_dependencies(root: dict[str, Any]) -> list[Dependency]:
    """Flatten a dependency tree, first occurrence of an identity wins.

    Depth-first pre-order using an explicit stack.  Entries without an
    ``identity`` or ``path`` are skipped together with their subtree.
    """
    result: dict[str, Dependency] = {}
    stack: list[Any] = list(reversed(_children(root)))

    while stack:
        node = stack.pop()
        if not isinstance(node, dict):
            continue
        identity = node.get("identity")
        path = node.get("path")
        if not isinstance(identity, str) or not identity:
            continue
        if not isinstance(path, str) or not path:
            log.debug("swift.dependency_without_path", identity=identity)
            continue
        if identity in result:
            continue

        name = node.get("name")
        url = node.get("url")
        result[identity] = Dependency(
            identity=identity,
            display_name=name if isinstance(name, str) and name else identity,
            resolved_path=Path(path),
            source_url=url if isinstance(url, str) else "",
        )
        stack.extend(reversed(_children(node)))

    return list(result.values())


def _children(node: dict[str, Any]) -> list[Any]:
    deps = node.get("dependencies")
    return deps if isinstance(deps, list) else []


def parse_show_dependencies(output: str) -> list[Dependency]:
    try:
        data = json.loads(output)
    except json.JSONDecodeError as exc:
        raise ManifestParseError(_SOURCE, f"not valid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise ManifestParseError(_SOURCE, "expected a JSON object")
    if not isinstance(data.get("dependencies"), list):
        raise ManifestParseError(_SOURCE, "missing top-level 'dependencies' array")
    return flatten_dependencies(data)


class SwiftPackageReader:
    ecosystem = "swift"

    def __init__(self, project_dir: Path, binary: str = "swift", timeout: float | None = None) -> None:
        self.project_dir = project_dir
        self.binary = binary
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: AuditConfig) -> SwiftPackageReader:
        return cls(
            project_dir=config.project_dir,
            binary=config.tool_binary or "swift",
            timeout=config.tool_timeout,
        )

    def list_production_dependencies(self) -> list[Dependency]:
        # Every resolved SwiftPM package is used by a production target.
        output = run_tool(
            [self.binary, "package", "show-dependencies", "--format", "json"],
            cwd=self.project_dir,
            timeout=self.timeout,
        )
        return parse_show_dependencies(output)


register_reader(SwiftPackageReader)
