"""Comparison engine for package snapshots.

This module matches types and members across two snapshots, reports
fine-grained differences and recognizes types that moved namespace.
"""

from package_comparer.comparison.comparator import PackageComparator, compare_packages
from package_comparer.comparison.models import (
    ComparisonResult,
    ComparisonStatus,
    DifferenceKind,
    MemberDifference,
    TypeComparison,
)

__all__ = [
    "PackageComparator",
    "compare_packages",
    "ComparisonResult",
    "ComparisonStatus",
    "DifferenceKind",
    "MemberDifference",
    "TypeComparison",
]
