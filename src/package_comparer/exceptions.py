"""Custom exceptions for Package Comparer.

This module defines exception classes for the error conditions that can
occur while loading snapshots, resolving providers and comparing packages.
"""


class PackageComparerError(Exception):
    """Base exception for all package comparer errors."""

    pass


class SnapshotValidationError(PackageComparerError):
    """Raised when a snapshot violates a comparison precondition.

    Examples are a missing snapshot, a type without a full name or a member
    without a signature. Comparison never starts when this is raised.
    """

    def __init__(self, message: str, package_id: str | None = None, path: str | None = None):
        """Initialize snapshot validation error.

        Args:
            message: Error message
            package_id: Package the invalid snapshot belongs to
            path: Location of the offending record inside the snapshot
        """
        self.message = message
        self.package_id = package_id
        self.path = path
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with package id and record path."""
        msg = self.message
        if self.path:
            msg = f"{self.path}: {msg}"
        if self.package_id:
            msg = f"[{self.package_id}] {msg}"
        return msg


class SnapshotLoadError(PackageComparerError):
    """Raised when a snapshot file is missing, unreadable or malformed."""

    pass


class ProviderNotFoundError(PackageComparerError):
    """Raised when no snapshot provider is registered for a package id."""

    def __init__(self, package_id: str):
        """Initialize provider not found error.

        Args:
            package_id: Package id that could not be resolved
        """
        self.package_id = package_id
        super().__init__(f"No snapshot provider registered for package '{package_id}'")


class ConfigurationError(PackageComparerError):
    """Raised when configuration is invalid or missing."""

    pass
