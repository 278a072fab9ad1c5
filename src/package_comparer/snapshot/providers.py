"""Snapshot providers keyed by package identity.

Callers register an explicit factory per package id (plus an optional
default) instead of having providers discovered and constructed at runtime.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Protocol

from package_comparer.exceptions import ProviderNotFoundError, SnapshotLoadError
from package_comparer.snapshot.models import PackageSnapshot
from package_comparer.snapshot.persistence import load_snapshot
from package_comparer.utils.logging import get_logger

logger = get_logger(__name__)

SNAPSHOT_SUFFIXES = (".json", ".yaml", ".yml")


def is_path_segment(name: str) -> bool:
    """Check that a package id or version names one entry under the snapshot root."""
    return name not in ("", ".", "..") and not any(sep in name for sep in "/\\")


class SnapshotProvider(Protocol):
    """Anything that can produce a snapshot for a package version."""

    def get_snapshot(self, package_id: str, version: str) -> PackageSnapshot: ...


ProviderFactory = Callable[[], SnapshotProvider]


class FileSnapshotProvider:
    """Read snapshots from ``<root>/<packageId>/<version>.<json|yaml|yml>``."""

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def snapshot_path(self, package_id: str, version: str) -> Path | None:
        """Find the snapshot file for a package version, if one exists."""
        if not is_path_segment(package_id) or not is_path_segment(version):
            raise SnapshotLoadError(f"Invalid package reference {package_id} {version}")
        package_dir = self.root / package_id
        for suffix in SNAPSHOT_SUFFIXES:
            candidate = package_dir / f"{version}{suffix}"
            if candidate.is_file():
                return candidate
        return None

    def get_snapshot(self, package_id: str, version: str) -> PackageSnapshot:
        path = self.snapshot_path(package_id, version)
        if path is None:
            raise SnapshotLoadError(
                f"No snapshot for {package_id} {version} under {self.root / package_id}"
            )

        snapshot = load_snapshot(path)
        if snapshot.package_id != package_id or snapshot.version != version:
            logger.warning(
                "snapshot_identity_mismatch",
                file=str(path),
                requested=f"{package_id} {version}",
                found=snapshot.display_name,
            )
        return snapshot


class SnapshotProviderRegistry:
    """Factory table mapping package ids to snapshot providers.

    Providers are built lazily on first use and cached per package id.
    """

    def __init__(self, default_factory: ProviderFactory | None = None):
        """Initialize the registry.

        Args:
            default_factory: Factory used for package ids with no explicit entry
        """
        self._factories: dict[str, ProviderFactory] = {}
        self._providers: dict[str, SnapshotProvider] = {}
        self._default_factory = default_factory

    def register(self, package_id: str, factory: ProviderFactory) -> None:
        """Register the provider factory for a package id, replacing any earlier one."""
        self._factories[package_id] = factory
        self._providers.pop(package_id, None)
        logger.debug("snapshot_provider_registered", package_id=package_id)

    def is_registered(self, package_id: str) -> bool:
        return package_id in self._factories or self._default_factory is not None

    def provider_for(self, package_id: str) -> SnapshotProvider:
        """Get the provider for a package id.

        Raises:
            ProviderNotFoundError: If neither an explicit nor a default factory exists
        """
        provider = self._providers.get(package_id)
        if provider is not None:
            return provider

        factory = self._factories.get(package_id, self._default_factory)
        if factory is None:
            raise ProviderNotFoundError(package_id)

        provider = factory()
        self._providers[package_id] = provider
        return provider

    def resolve(self, package_id: str, version: str) -> PackageSnapshot:
        """Produce the snapshot for a package version."""
        return self.provider_for(package_id).get_snapshot(package_id, version)


def parse_package_reference(reference: str) -> tuple[str, str]:
    """Split an ``Id/Version`` reference, e.g. ``"Acme.Core/2.1.0"``.

    Raises:
        ValueError: If the reference is not of the form ``Id/Version``, or either
            part would escape the snapshot directory
    """
    package_id, sep, version = reference.strip().rpartition("/")
    if not sep or not is_path_segment(package_id) or not is_path_segment(version):
        raise ValueError(
            f"Invalid package reference '{reference}'; expected 'PackageId/Version'"
        )
    return package_id, version
