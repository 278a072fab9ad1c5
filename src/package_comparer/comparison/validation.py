"""Precondition checks for snapshots entering a comparison.

Malformed input is rejected before any matching starts, so a comparison
either completes or raises without producing a partial result.
"""

from collections.abc import Iterable

from package_comparer.exceptions import SnapshotValidationError
from package_comparer.snapshot.models import (
    AttributeRecord,
    MemberKind,
    MemberRecord,
    PackageSnapshot,
    TypeKind,
    TypeRecord,
)


def _require_sequence(value: object, what: str, package_id: str, path: str) -> None:
    if not isinstance(value, (tuple, list)):
        raise SnapshotValidationError(
            f"{what} must be a list, got {type(value).__name__}", package_id, path
        )


def _validate_attributes(
    attributes: Iterable[AttributeRecord], package_id: str, path: str
) -> None:
    _require_sequence(attributes, "attributes", package_id, path)
    for index, attribute in enumerate(attributes):
        attr_path = f"{path}.attributes[{index}]"
        if not isinstance(attribute, AttributeRecord):
            raise SnapshotValidationError(
                f"expected AttributeRecord, got {type(attribute).__name__}", package_id, attr_path
            )
        if not isinstance(attribute.name, str) or not attribute.name:
            raise SnapshotValidationError("attribute name is missing", package_id, attr_path)
        _require_sequence(attribute.arguments, "attribute arguments", package_id, attr_path)
        if any(not isinstance(arg, str) for arg in attribute.arguments):
            raise SnapshotValidationError(
                "attribute arguments must be strings", package_id, attr_path
            )


def _validate_member(member: MemberRecord, package_id: str, path: str) -> None:
    if not isinstance(member, MemberRecord):
        raise SnapshotValidationError(
            f"expected MemberRecord, got {type(member).__name__}", package_id, path
        )
    if not isinstance(member.name, str) or not member.name:
        raise SnapshotValidationError("member name is missing", package_id, path)
    if not isinstance(member.signature, str):
        raise SnapshotValidationError("member signature is missing", package_id, path)
    if not isinstance(member.kind, MemberKind):
        raise SnapshotValidationError(f"invalid member kind {member.kind!r}", package_id, path)
    _validate_attributes(member.attributes, package_id, path)


def _validate_type(type_record: TypeRecord, package_id: str, path: str) -> None:
    if not isinstance(type_record, TypeRecord):
        raise SnapshotValidationError(
            f"expected TypeRecord, got {type(type_record).__name__}", package_id, path
        )
    if not isinstance(type_record.full_name, str) or not type_record.full_name:
        raise SnapshotValidationError("type full name is missing", package_id, path)
    if not isinstance(type_record.simple_name, str) or not type_record.simple_name:
        raise SnapshotValidationError("type simple name is missing", package_id, path)
    if not isinstance(type_record.kind, TypeKind):
        raise SnapshotValidationError(f"invalid type kind {type_record.kind!r}", package_id, path)

    _require_sequence(type_record.members, "members", package_id, type_record.full_name)

    for index, member in enumerate(type_record.members):
        _validate_member(member, package_id, f"{type_record.full_name}.members[{index}]")

    _validate_attributes(type_record.attributes, package_id, type_record.full_name)


def validate_snapshot(snapshot: PackageSnapshot | None, label: str = "snapshot") -> None:
    """Validate a snapshot before comparison.

    Args:
        snapshot: Snapshot to check
        label: Name used in the error message when the snapshot itself is missing

    Raises:
        SnapshotValidationError: On the first violation found
    """
    if snapshot is None:
        raise SnapshotValidationError(f"{label} is required")
    if not isinstance(snapshot, PackageSnapshot):
        raise SnapshotValidationError(
            f"{label} must be a PackageSnapshot, got {type(snapshot).__name__}"
        )
    if not isinstance(snapshot.package_id, str) or not snapshot.package_id:
        raise SnapshotValidationError(f"{label} has no package id")
    if not isinstance(snapshot.version, str):
        raise SnapshotValidationError("version must be a string", snapshot.package_id)
    _require_sequence(snapshot.types, "types", snapshot.package_id, "types")

    for index, type_record in enumerate(snapshot.types):
        _validate_type(type_record, snapshot.package_id, f"types[{index}]")
