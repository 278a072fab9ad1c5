"""Package snapshot records.

Loading and provider helpers live in ``snapshot.persistence`` and
``snapshot.providers``.
"""

from package_comparer.snapshot.models import (
    AttributeRecord,
    MemberKind,
    MemberRecord,
    PackageSnapshot,
    TypeKind,
    TypeRecord,
    split_full_name,
)

__all__ = [
    "AttributeRecord",
    "MemberKind",
    "MemberRecord",
    "PackageSnapshot",
    "TypeKind",
    "TypeRecord",
    "split_full_name",
]
