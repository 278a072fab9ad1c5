"""
Tests for comparison.members

Test Coverage:
- index_members(): exact signature identity, first wins
- diff_members(): added, removed, signature and accessibility changes, overloads
- diff_types(): type-level attributes ahead of member differences
"""

from package_comparer.comparison.members import (
    diff_members,
    diff_types,
    index_members,
)
from package_comparer.comparison.models import DifferenceKind
from package_comparer.snapshot.models import AttributeRecord, MemberKind


class TestIndexMembers:
    """Tests for member indexing."""

    def test_index_when_duplicate_signature_then_first_wins(self, make_member):
        first = make_member("Save", "void Save()")
        second = make_member("Save", "void Save()", is_public=False)

        indexed = index_members("Acme.Store", [first, second])

        assert list(indexed.values()) == [first]

    def test_index_when_signatures_differ_in_whitespace_then_kept_apart(self, make_member):
        first = make_member("Save", "void Save(int x)")
        second = make_member("Save", "void Save(int  x)")

        indexed = index_members("Acme.Store", [first, second])

        assert list(indexed.values()) == [first, second]


class TestDiffMembers:
    """Tests for member differences between matched types."""

    def test_diff_when_members_equal_then_no_differences(self, make_type, make_prop):
        t1 = make_type("Foo.User", make_prop("Id", "int"))
        t2 = make_type("Foo.User", make_prop("Id", "int"))

        assert diff_members(t1, t2) == []

    def test_diff_when_member_added_then_added_with_signature_detail(self, make_type, make_prop):
        t1 = make_type("Foo.User", make_prop("Id", "int"))
        t2 = make_type("Foo.User", make_prop("Id", "int"), make_prop("Email"))

        differences = diff_members(t1, t2)

        assert len(differences) == 1
        assert differences[0].kind == DifferenceKind.ADDED
        assert differences[0].member_name == "Email"
        assert differences[0].detail == "public string Email { get; set; }"

    def test_diff_when_member_removed_then_removed(self, make_type, make_member):
        t1 = make_type("Acme.Store", make_member("Save"), make_member("Load"))
        t2 = make_type("Acme.Store", make_member("Save"))

        differences = diff_members(t1, t2)

        assert [(d.kind, d.member_name) for d in differences] == [
            (DifferenceKind.REMOVED, "Load")
        ]

    def test_diff_when_overload_removed_then_other_overload_untouched(self, make_type, make_member):
        """Overloads are tracked independently by signature."""
        t1 = make_type(
            "Acme.Store",
            make_member("Save", "void Save(int id)"),
            make_member("Save", "void Save(string key)"),
        )
        t2 = make_type("Acme.Store", make_member("Save", "void Save(int id)"))

        differences = diff_members(t1, t2)

        assert len(differences) == 1
        assert differences[0].kind == DifferenceKind.REMOVED
        assert differences[0].detail == "void Save(string key)"

    def test_diff_when_only_whitespace_differs_then_removed_and_added(self, make_type, make_member):
        t1 = make_type("Acme.Store", make_member("Foo", "int Foo(int  x)"))
        t2 = make_type("Acme.Store", make_member("Foo", "int Foo(int x)"))

        differences = diff_members(t1, t2)

        assert [(d.kind, d.detail) for d in differences] == [
            (DifferenceKind.REMOVED, "int Foo(int  x)"),
            (DifferenceKind.ADDED, "int Foo(int x)"),
        ]

    def test_diff_when_visibility_changes_then_accessibility_changed(self, make_type, make_member):
        t1 = make_type("Acme.Store", make_member("Flush", is_public=True))
        t2 = make_type("Acme.Store", make_member("Flush", is_public=False))

        differences = diff_members(t1, t2)

        assert len(differences) == 1
        assert differences[0].kind == DifferenceKind.ACCESSIBILITY_CHANGED
        assert differences[0].detail == "Accessibility changed from public to non-public"

    def test_diff_when_member_attribute_changes_then_attribute_difference_follows(
        self, make_type, make_member
    ):
        t1 = make_type(
            "Acme.Store",
            make_member("Flush", attributes=(AttributeRecord("Obsolete"),), is_public=True),
        )
        t2 = make_type("Acme.Store", make_member("Flush", is_public=False))

        differences = diff_members(t1, t2)

        assert [d.kind for d in differences] == [
            DifferenceKind.ACCESSIBILITY_CHANGED,
            DifferenceKind.ATTRIBUTE_REMOVED,
        ]

    def test_diff_when_several_changes_then_ordered_by_signature(self, make_type, make_member):
        t1 = make_type("Acme.Store", make_member("B", "void B()"))
        t2 = make_type("Acme.Store", make_member("A", "void A()"), make_member("C", "void C()"))

        differences = diff_members(t1, t2)

        assert [d.member_name for d in differences] == ["A", "B", "C"]


class TestDiffTypes:
    """Tests for whole-type differences."""

    def test_diff_types_when_type_attribute_added_then_reported_first(self, make_type, make_member):
        t1 = make_type("Acme.Store", make_member("Zap"))
        t2 = make_type(
            "Acme.Store",
            attributes=(AttributeRecord("Serializable"),),
        )

        differences = diff_types(t1, t2)

        assert differences[0].kind == DifferenceKind.ATTRIBUTE_ADDED
        assert differences[0].member_name == "Store"
        assert differences[1].kind == DifferenceKind.REMOVED

    def test_diff_types_when_type_attributes_disabled_then_ignored(self, make_type):
        t1 = make_type("Acme.Store")
        t2 = make_type("Acme.Store", attributes=(AttributeRecord("Serializable"),))

        assert diff_types(t1, t2, compare_type_attributes=False) == []

    def test_diff_types_when_property_kind_then_member_kind_irrelevant(self, make_type, make_member):
        """Members are keyed by signature only."""
        t1 = make_type("Acme.Store", make_member("Count", "int Count", MemberKind.PROPERTY))
        t2 = make_type("Acme.Store", make_member("Count", "int Count", MemberKind.FIELD))

        assert diff_types(t1, t2) == []
