"""Attribute differ for matched members and types."""

from collections.abc import Iterable

from package_comparer.comparison.models import DifferenceKind, MemberDifference
from package_comparer.snapshot.models import AttributeRecord


def index_attributes(attributes: Iterable[AttributeRecord]) -> dict[str, AttributeRecord]:
    """Index attributes by name. The first attribute with a given name wins."""
    indexed: dict[str, AttributeRecord] = {}
    for attribute in attributes:
        indexed.setdefault(attribute.name, attribute)
    return indexed


def normalize_arguments(attribute: AttributeRecord) -> str:
    """Render an attribute's arguments sorted, so reordering is not a change."""
    return ", ".join(sorted(attribute.arguments))


def diff_attributes(
    left_name: str,
    left_attributes: Iterable[AttributeRecord],
    right_name: str,
    right_attributes: Iterable[AttributeRecord],
) -> list[MemberDifference]:
    """Compare the attributes declared on two matched members or types.

    Args:
        left_name: Member (or type) name on the package 1 side
        left_attributes: Attributes on the package 1 side
        right_name: Member (or type) name on the package 2 side
        right_attributes: Attributes on the package 2 side

    Returns:
        Attribute differences ordered by attribute name
    """
    left = index_attributes(left_attributes)
    right = index_attributes(right_attributes)

    differences: list[MemberDifference] = []

    for attr_name in sorted(left.keys() | right.keys()):
        left_attr = left.get(attr_name)
        right_attr = right.get(attr_name)

        if left_attr is not None and right_attr is not None:
            left_args = normalize_arguments(left_attr)
            right_args = normalize_arguments(right_attr)
            if left_args != right_args:
                differences.append(
                    MemberDifference(
                        member_name=left_name,
                        kind=DifferenceKind.ATTRIBUTE_CHANGED,
                        detail=(
                            f"Attribute [{attr_name}] changed:\n"
                            f"Was: [{attr_name}({left_args})]\n"
                            f"Now: [{attr_name}({right_args})]"
                        ),
                    )
                )
        elif left_attr is not None:
            differences.append(
                MemberDifference(
                    member_name=left_name,
                    kind=DifferenceKind.ATTRIBUTE_REMOVED,
                    detail=f"Attribute removed: {left_attr}",
                )
            )
        else:
            differences.append(
                MemberDifference(
                    member_name=right_name,
                    kind=DifferenceKind.ATTRIBUTE_ADDED,
                    detail=f"Attribute added: {right_attr}",
                )
            )

    return differences
