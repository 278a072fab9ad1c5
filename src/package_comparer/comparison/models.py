"""Data models for package comparison results."""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from package_comparer.snapshot.models import TypeRecord


class ComparisonStatus(str, Enum):
    """Classification of a type across the two snapshots."""

    IDENTICAL = "Identical"
    MODIFIED = "Modified"
    ONLY_IN_PACKAGE1 = "OnlyInPackage1"
    ONLY_IN_PACKAGE2 = "OnlyInPackage2"
    NAMESPACE_CHANGED = "NamespaceChanged"


class DifferenceKind(str, Enum):
    """Kinds of member-level differences."""

    ADDED = "Added"
    REMOVED = "Removed"
    SIGNATURE_CHANGED = "SignatureChanged"
    ACCESSIBILITY_CHANGED = "AccessibilityChanged"
    ATTRIBUTE_ADDED = "AttributeAdded"
    ATTRIBUTE_REMOVED = "AttributeRemoved"
    ATTRIBUTE_CHANGED = "AttributeChanged"


BREAKING_STATUSES = (ComparisonStatus.MODIFIED, ComparisonStatus.ONLY_IN_PACKAGE1)


@dataclass
class MemberDifference:
    """Single difference between two matched types."""

    member_name: str
    kind: DifferenceKind
    detail: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "memberName": self.member_name,
            "kind": self.kind.value,
            "detail": self.detail,
        }


@dataclass
class TypeComparison:
    """Comparison entry for one type full name.

    Entries start out Identical, Modified or tentatively OnlyInPackage1/2.
    The relocation pass may move a tentative entry to NamespaceChanged; after
    the comparison returns, entries are not touched again.
    """

    type_name: str
    status: ComparisonStatus
    type1: TypeRecord | None = None
    type2: TypeRecord | None = None
    differences: list[MemberDifference] = field(default_factory=list)
    old_namespace: str | None = None
    new_namespace: str | None = None

    @property
    def is_namespace_change(self) -> bool:
        """Check if this entry is one side of a relocated pair."""
        return self.status == ComparisonStatus.NAMESPACE_CHANGED

    @property
    def is_breaking(self) -> bool:
        """Check if this entry counts as a breaking change."""
        return self.status in BREAKING_STATUSES

    @property
    def kind(self) -> str:
        """Kind of the type from whichever side is present."""
        record = self.type1 or self.type2
        return record.kind.value if record else "Unknown"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "typeName": self.type_name,
            "status": self.status.value,
            "type1": self.type1.to_dict() if self.type1 else None,
            "type2": self.type2.to_dict() if self.type2 else None,
            "differences": [diff.to_dict() for diff in self.differences],
            "oldNamespace": self.old_namespace,
            "newNamespace": self.new_namespace,
        }


@dataclass
class ComparisonResult:
    """Result of comparing two package snapshots."""

    package1_name: str
    package2_name: str
    package1_types: list[TypeRecord] = field(default_factory=list)
    package2_types: list[TypeRecord] = field(default_factory=list)
    type_comparisons: list[TypeComparison] = field(default_factory=list)

    def by_status(self, status: ComparisonStatus) -> list[TypeComparison]:
        """Get all entries with the given status."""
        return [tc for tc in self.type_comparisons if tc.status == status]

    def get(self, type_name: str) -> TypeComparison | None:
        """Get the entry for a type full name."""
        for comparison in self.type_comparisons:
            if comparison.type_name == type_name:
                return comparison
        return None

    def namespace_changes(self) -> list[TypeComparison]:
        """Get one entry per relocated pair.

        Each relocation produces two entries (old and new full name); only the
        first one seen for each package 1 type is kept.
        """
        seen: set[str] = set()
        changes = []
        for comparison in self.by_status(ComparisonStatus.NAMESPACE_CHANGED):
            key = comparison.type1.full_name if comparison.type1 else comparison.type_name
            if key in seen:
                continue
            seen.add(key)
            changes.append(comparison)
        return changes

    @property
    def has_changes(self) -> bool:
        """Check if any type differs between the packages."""
        return any(tc.status != ComparisonStatus.IDENTICAL for tc in self.type_comparisons)

    @property
    def has_breaking_changes(self) -> bool:
        """Check if any type was modified or removed."""
        return any(tc.is_breaking for tc in self.type_comparisons)

    def summary(self) -> dict[str, int]:
        """Get counts of entries per status."""
        counts = Counter(tc.status for tc in self.type_comparisons)
        return {
            "totalTypes": len(self.type_comparisons),
            "identical": counts[ComparisonStatus.IDENTICAL],
            "modified": counts[ComparisonStatus.MODIFIED],
            "namespaceChanged": len(self.namespace_changes()),
            "onlyInPackage1": counts[ComparisonStatus.ONLY_IN_PACKAGE1],
            "onlyInPackage2": counts[ComparisonStatus.ONLY_IN_PACKAGE2],
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary.

        Returns:
            Dict following the camelCase reporter contract
        """
        return {
            "package1Name": self.package1_name,
            "package2Name": self.package2_name,
            "summary": self.summary(),
            "hasBreakingChanges": self.has_breaking_changes,
            "package1Types": [t.to_dict() for t in self.package1_types],
            "package2Types": [t.to_dict() for t in self.package2_types],
            "typeComparisons": [tc.to_dict() for tc in self.type_comparisons],
        }
