"""Shared utilities for Package Comparer."""

from package_comparer.utils.logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
