"""
Tests for comparison.comparator

Test Coverage:
- Self-comparison, symmetry and overload preservation
- Enum and class relocation scenarios
- Configuration: disabled relocation, type attribute toggle
- Result model: summary, breaking changes, serialization
- Log context: package names bound during a comparison
"""

import pytest
import structlog

from package_comparer.comparison import PackageComparator, compare_packages
from package_comparer.comparison.matcher import match_types
from package_comparer.comparison.models import ComparisonStatus, DifferenceKind
from package_comparer.config import ComparerConfig, ComparisonOptions, RelocationConfig
from package_comparer.exceptions import SnapshotValidationError
from package_comparer.snapshot.models import AttributeRecord, TypeKind

SWAPPED_STATUS = {
    ComparisonStatus.ONLY_IN_PACKAGE1: ComparisonStatus.ONLY_IN_PACKAGE2,
    ComparisonStatus.ONLY_IN_PACKAGE2: ComparisonStatus.ONLY_IN_PACKAGE1,
}

SWAPPED_KIND = {
    DifferenceKind.ADDED: DifferenceKind.REMOVED,
    DifferenceKind.REMOVED: DifferenceKind.ADDED,
    DifferenceKind.ATTRIBUTE_ADDED: DifferenceKind.ATTRIBUTE_REMOVED,
    DifferenceKind.ATTRIBUTE_REMOVED: DifferenceKind.ATTRIBUTE_ADDED,
}


@pytest.fixture
def mixed_snapshots(make_snapshot, make_type, make_member, make_prop, make_enum_values):
    """Two versions with every kind of change."""
    old = make_snapshot(
        make_type("Acme.Same", make_member("Run")),
        make_type(
            "Acme.Store",
            make_member("Save", "void Save(int id)"),
            make_member("Save", "void Save(string key)"),
            make_member("Flush"),
        ),
        make_type("Acme.Legacy", make_member("Old")),
        make_type("Acme.Models.Color", *make_enum_values("Red", "Green"), kind=TypeKind.ENUM),
        version="1.0.0",
    )
    new = make_snapshot(
        make_type("Acme.Same", make_member("Run")),
        make_type(
            "Acme.Store",
            make_member("Save", "void Save(int id)"),
            make_member("Flush"),
            make_member("Clear"),
        ),
        make_type("Acme.Fresh", make_prop("Name")),
        make_type("Acme.Shared.Color", *make_enum_values("Red", "Green"), kind=TypeKind.ENUM),
        version="2.0.0",
    )
    return old, new


class TestSelfComparison:
    """Comparing a snapshot with itself."""

    def test_compare_when_same_snapshot_then_all_identical(self, mixed_snapshots):
        old, _ = mixed_snapshots

        result = compare_packages(old, old)

        assert result.type_comparisons
        for comparison in result.type_comparisons:
            assert comparison.status == ComparisonStatus.IDENTICAL
            assert comparison.differences == []
        assert not result.has_changes


class TestSymmetry:
    """Comparing (A, B) against (B, A)."""

    def test_compare_when_swapped_then_statuses_and_kinds_mirror(self, mixed_snapshots):
        old, new = mixed_snapshots

        forward = compare_packages(old, new)
        backward = compare_packages(new, old)

        assert {tc.type_name for tc in forward.type_comparisons} == {
            tc.type_name for tc in backward.type_comparisons
        }

        for tc in forward.type_comparisons:
            mirrored = backward.get(tc.type_name)
            assert mirrored.status == SWAPPED_STATUS.get(tc.status, tc.status)
            assert sorted(SWAPPED_KIND.get(d.kind, d.kind).value for d in tc.differences) == sorted(
                d.kind.value for d in mirrored.differences
            )


class TestOverloads:
    """Overloaded members are independent."""

    def test_compare_when_one_overload_removed_then_only_that_overload_reported(
        self, mixed_snapshots
    ):
        old, new = mixed_snapshots

        result = compare_packages(old, new)

        store = result.get("Acme.Store")
        assert store.status == ComparisonStatus.MODIFIED
        removed = [d for d in store.differences if d.kind == DifferenceKind.REMOVED]
        assert [d.detail for d in removed] == ["void Save(string key)"]


class TestScenarios:
    """End-to-end comparison scenarios."""

    def test_compare_when_user_gains_email_then_modified_with_one_added(self, user_snapshots):
        old, new = user_snapshots

        result = compare_packages(old, new)

        user = result.get("Foo.User")
        assert user.status == ComparisonStatus.MODIFIED
        assert [(d.kind, d.member_name) for d in user.differences] == [
            (DifferenceKind.ADDED, "Email")
        ]
        assert result.has_breaking_changes

    def test_compare_when_widget_moves_namespace_then_namespace_changed(self, widget_snapshots):
        old, new = widget_snapshots

        result = compare_packages(old, new)

        widget = result.get("A.Widget")
        assert widget.status == ComparisonStatus.NAMESPACE_CHANGED
        assert widget.is_namespace_change
        assert widget.old_namespace == "A"
        assert widget.new_namespace == "B"
        assert widget.differences == []
        assert result.get("B.Widget").status == ComparisonStatus.NAMESPACE_CHANGED
        assert result.summary()["namespaceChanged"] == 1
        assert not result.has_breaking_changes

    def test_compare_when_enum_moves_with_one_value_swapped_then_relocated(self, color_snapshots):
        old, new = color_snapshots

        result = compare_packages(old, new)

        color = result.get("NS1.Color")
        assert color.status == ComparisonStatus.NAMESPACE_CHANGED
        assert color.old_namespace == "NS1"
        assert color.new_namespace == "NS2"
        assert sorted((d.kind.value, d.member_name) for d in color.differences) == [
            ("Added", "Purple"),
            ("Removed", "Black"),
        ]

    def test_compare_when_no_similar_counterpart_then_only_in_package1(
        self, make_snapshot, make_type, make_member
    ):
        old = make_snapshot(make_type("A.Svc", make_member("A"), make_member("B"), make_member("C")))
        new = make_snapshot(make_type("B.Svc", make_member("X"), make_member("Y"), make_member("Z")))

        result = compare_packages(old, new)

        assert result.get("A.Svc").status == ComparisonStatus.ONLY_IN_PACKAGE1
        assert result.get("B.Svc").status == ComparisonStatus.ONLY_IN_PACKAGE2
        assert result.has_breaking_changes


class TestConfiguration:
    """Comparator configuration options."""

    def test_compare_when_relocation_disabled_then_leftovers_stay_tentative(
        self, widget_snapshots
    ):
        old, new = widget_snapshots
        config = ComparerConfig(relocation=RelocationConfig(enabled=False))

        result = PackageComparator(config).compare(old, new)

        assert result.get("A.Widget").status == ComparisonStatus.ONLY_IN_PACKAGE1
        assert result.get("B.Widget").status == ComparisonStatus.ONLY_IN_PACKAGE2

    def test_compare_when_type_attributes_disabled_then_identical(
        self, make_snapshot, make_type
    ):
        old = make_snapshot(make_type("Acme.Dto"))
        new = make_snapshot(make_type("Acme.Dto", attributes=(AttributeRecord("Serializable"),)))
        config = ComparerConfig(comparison=ComparisonOptions(compare_type_attributes=False))

        assert compare_packages(old, new).get("Acme.Dto").status == ComparisonStatus.MODIFIED
        assert compare_packages(old, new, config).get("Acme.Dto").status == ComparisonStatus.IDENTICAL

    def test_compare_when_comparator_reused_then_results_independent(
        self, user_snapshots, widget_snapshots
    ):
        comparator = PackageComparator()

        first = comparator.compare(*user_snapshots)
        second = comparator.compare(*widget_snapshots)

        assert [tc.type_name for tc in first.type_comparisons] == ["Foo.User"]
        assert [tc.type_name for tc in second.type_comparisons] == ["A.Widget", "B.Widget"]


class TestValidation:
    """Malformed input fails before any result is produced."""

    def test_compare_when_snapshot_missing_then_raises(self, user_snapshots):
        old, _ = user_snapshots

        with pytest.raises(SnapshotValidationError, match="snapshot2 is required"):
            compare_packages(old, None)


class TestLogContext:
    """Package names are bound to log events for the duration of a comparison."""

    def test_compare_when_matching_then_package_names_bound(self, monkeypatch, user_snapshots):
        seen = []

        def recording_match_types(*args):
            seen.append(structlog.contextvars.get_contextvars())
            return match_types(*args)

        monkeypatch.setattr(
            "package_comparer.comparison.comparator.match_types", recording_match_types
        )

        compare_packages(*user_snapshots)

        assert seen == [{"package1": "Acme.Core 1.0.0", "package2": "Acme.Core 2.0.0"}]
        assert "package1" not in structlog.contextvars.get_contextvars()


class TestResultModel:
    """ComparisonResult summary and serialization."""

    def test_summary_when_mixed_changes_then_counts_each_status(self, mixed_snapshots):
        old, new = mixed_snapshots

        result = compare_packages(old, new)

        assert result.summary() == {
            "totalTypes": 6,
            "identical": 1,
            "modified": 1,
            "namespaceChanged": 1,
            "onlyInPackage1": 1,
            "onlyInPackage2": 1,
        }
        assert result.package1_name == "Acme.Core 1.0.0"
        assert result.package2_name == "Acme.Core 2.0.0"

    def test_to_dict_when_serialized_then_camel_case_contract(self, widget_snapshots):
        old, new = widget_snapshots

        data = compare_packages(old, new).to_dict()

        assert data["package1Name"] == "Acme.Core 1.0.0"
        assert data["hasBreakingChanges"] is False
        entry = data["typeComparisons"][0]
        assert entry["typeName"] == "A.Widget"
        assert entry["status"] == "NamespaceChanged"
        assert entry["oldNamespace"] == "A"
        assert entry["newNamespace"] == "B"
        assert entry["type1"]["fullName"] == "A.Widget"
        assert entry["type2"]["kind"] == "Class"
