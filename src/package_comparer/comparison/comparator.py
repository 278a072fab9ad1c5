"""Package comparison: orchestrates matching, diffing and relocation."""

from functools import partial

import structlog

from package_comparer.comparison.matcher import match_types
from package_comparer.comparison.members import diff_types
from package_comparer.comparison.models import ComparisonResult
from package_comparer.comparison.relocation import RelocationDetector
from package_comparer.comparison.validation import validate_snapshot
from package_comparer.config import ComparerConfig
from package_comparer.snapshot.models import PackageSnapshot
from package_comparer.utils.logging import get_logger

logger = get_logger(__name__)


class PackageComparator:
    """Compare the public surface of two package snapshots.

    The comparator holds only its configuration; every map built during a
    comparison is local to that call, so one instance can serve independent
    comparisons concurrently.
    """

    def __init__(self, config: ComparerConfig | None = None):
        """Initialize the comparator.

        Args:
            config: Comparer configuration (defaults apply when omitted)
        """
        self.config = config or ComparerConfig()
        self.relocation_detector = RelocationDetector(self.config.relocation)

    def compare(self, snapshot1: PackageSnapshot, snapshot2: PackageSnapshot) -> ComparisonResult:
        """Compare two package snapshots.

        Phases run strictly in sequence: exact-name matching with member and
        attribute diffing, then relocation detection over the leftovers.

        Args:
            snapshot1: Older package snapshot
            snapshot2: Newer package snapshot

        Returns:
            ComparisonResult with one entry per type full name, sorted by name

        Raises:
            SnapshotValidationError: If either snapshot is malformed
        """
        validate_snapshot(snapshot1, "snapshot1")
        validate_snapshot(snapshot2, "snapshot2")

        # Events logged while matching and relocating carry both package names
        with structlog.contextvars.bound_contextvars(
            package1=snapshot1.display_name,
            package2=snapshot2.display_name,
        ):
            return self._compare(snapshot1, snapshot2)

    def _compare(self, snapshot1: PackageSnapshot, snapshot2: PackageSnapshot) -> ComparisonResult:
        differ = partial(
            diff_types,
            compare_type_attributes=self.config.comparison.compare_type_attributes,
        )

        match = match_types(snapshot1, snapshot2, differ)

        relocated = 0
        if self.config.relocation.enabled:
            relocated = self.relocation_detector.detect(match, differ)

        result = ComparisonResult(
            package1_name=snapshot1.display_name,
            package2_name=snapshot2.display_name,
            package1_types=list(snapshot1.types),
            package2_types=list(snapshot2.types),
            type_comparisons=match.comparisons,
        )

        summary = result.summary()
        logger.info(
            "package_comparison_complete",
            total_types=summary["totalTypes"],
            identical=summary["identical"],
            modified=summary["modified"],
            namespace_changed=relocated,
            only_in_package1=summary["onlyInPackage1"],
            only_in_package2=summary["onlyInPackage2"],
            has_breaking_changes=result.has_breaking_changes,
        )

        return result


def compare_packages(
    snapshot1: PackageSnapshot,
    snapshot2: PackageSnapshot,
    config: ComparerConfig | None = None,
) -> ComparisonResult:
    """Compare two snapshots with a one-off comparator."""
    return PackageComparator(config).compare(snapshot1, snapshot2)
