"""License auditor — collect and validate third-party license files."""

from license_auditor.collector import collect
from license_auditor.comparator import are_directories_equal, diff_directories
from license_auditor.models import CollectionReport, Dependency, DirectoryDiff
from license_auditor.pipeline import publish, validate

__all__ = [
    "CollectionReport",
    "Dependency",
    "DirectoryDiff",
    "are_directories_equal",
    "collect",
    "diff_directories",
    "publish",
    "validate",
]
