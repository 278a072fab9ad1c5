"""Member differ for matched types."""

from collections.abc import Iterable

from package_comparer.comparison.attributes import diff_attributes
from package_comparer.comparison.models import DifferenceKind, MemberDifference
from package_comparer.snapshot.models import MemberRecord, TypeRecord
from package_comparer.utils.logging import get_logger

logger = get_logger(__name__)


def index_members(type_name: str, members: Iterable[MemberRecord]) -> dict[str, MemberRecord]:
    """Index members by signature. The first member with a given signature wins.

    Distinct overloads have distinct signatures, so each overload keeps its
    own entry.
    """
    indexed: dict[str, MemberRecord] = {}
    for member in members:
        if member.signature in indexed:
            logger.debug(
                "duplicate_member_signature",
                type_name=type_name,
                signature=member.signature,
            )
            continue
        indexed[member.signature] = member
    return indexed


def _accessibility(is_public: bool) -> str:
    return "public" if is_public else "non-public"


def diff_members(type1: TypeRecord, type2: TypeRecord) -> list[MemberDifference]:
    """Compare the member sets of two matched types.

    Args:
        type1: Type from package 1
        type2: Type from package 2 (same full name, or a relocation match)

    Returns:
        Member differences ordered by signature
    """
    members1 = index_members(type1.full_name, type1.members)
    members2 = index_members(type2.full_name, type2.members)

    differences: list[MemberDifference] = []

    for signature in sorted(members1.keys() | members2.keys()):
        member1 = members1.get(signature)
        member2 = members2.get(signature)

        if member1 is not None and member2 is not None:
            if member1.signature != member2.signature:
                differences.append(
                    MemberDifference(
                        member_name=member1.name,
                        kind=DifferenceKind.SIGNATURE_CHANGED,
                        detail=f"Was: {member1.signature}\nNow: {member2.signature}",
                    )
                )
            elif member1.is_public != member2.is_public:
                differences.append(
                    MemberDifference(
                        member_name=member1.name,
                        kind=DifferenceKind.ACCESSIBILITY_CHANGED,
                        detail=(
                            f"Accessibility changed from {_accessibility(member1.is_public)} "
                            f"to {_accessibility(member2.is_public)}"
                        ),
                    )
                )

            differences.extend(
                diff_attributes(member1.name, member1.attributes, member2.name, member2.attributes)
            )
        elif member1 is not None:
            differences.append(
                MemberDifference(
                    member_name=member1.name,
                    kind=DifferenceKind.REMOVED,
                    detail=member1.signature,
                )
            )
        else:
            differences.append(
                MemberDifference(
                    member_name=member2.name,
                    kind=DifferenceKind.ADDED,
                    detail=member2.signature,
                )
            )

    return differences


def diff_types(
    type1: TypeRecord, type2: TypeRecord, compare_type_attributes: bool = True
) -> list[MemberDifference]:
    """Compare two matched types: type-level attributes first, then members."""
    differences: list[MemberDifference] = []
    if compare_type_attributes:
        differences.extend(
            diff_attributes(type1.simple_name, type1.attributes, type2.simple_name, type2.attributes)
        )
    differences.extend(diff_members(type1, type2))
    return differences
