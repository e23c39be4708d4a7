"""Ecosystem readers — auto-registered on import."""

from license_auditor.readers import (
    dart_pub,  # noqa: F401
    swift_package,  # noqa: F401
)
