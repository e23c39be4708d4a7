"""Reader registry — map ecosystem names to manifest readers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from license_auditor.errors import ConfigurationError
from license_auditor.models import Dependency

if TYPE_CHECKING:
    from license_auditor.core.config import AuditConfig


@runtime_checkable
class ManifestReader(Protocol):
    """Interface that every ecosystem reader must satisfy."""

    ecosystem: str

    def list_production_dependencies(self) -> list[Dependency]: ...


class ReaderFactory(Protocol):
    ecosystem: str

    def from_config(self, config: AuditConfig) -> ManifestReader: ...


READER_REGISTRY: dict[str, ReaderFactory] = {}


def register_reader(reader_cls: ReaderFactory) -> None:
    """Register a reader class by its ecosystem name."""
    READER_REGISTRY[reader_cls.ecosystem] = reader_cls


def supported_ecosystems() -> list[str]:
    # Ensure readers are registered before the registry is consulted.
    import license_auditor.readers  # noqa: F401

    return sorted(READER_REGISTRY)


def create_reader(config: AuditConfig) -> ManifestReader:
    """Instantiate the reader for ``config.ecosystem``."""
    import license_auditor.readers  # noqa: F401

    reader_cls = READER_REGISTRY.get(config.ecosystem)
    if reader_cls is None:
        raise ConfigurationError(f"No reader registered for ecosystem {config.ecosystem!r}")
    return reader_cls.from_config(config)
