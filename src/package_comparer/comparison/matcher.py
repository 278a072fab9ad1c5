"""Type matcher: pairs types across two snapshots by full name."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from package_comparer.comparison.models import ComparisonStatus, MemberDifference, TypeComparison
from package_comparer.snapshot.models import PackageSnapshot, TypeRecord
from package_comparer.utils.logging import get_logger

logger = get_logger(__name__)

TypeDiffer = Callable[[TypeRecord, TypeRecord], list[MemberDifference]]


@dataclass
class MatchResult:
    """Outcome of the exact-name matching pass.

    Attributes:
        comparisons: One entry per full name in the key union, sorted by name
        types1: Deduplicated full name -> type map for package 1 (discovery order)
        types2: Deduplicated full name -> type map for package 2 (discovery order)
        unmatched1: Package 1 types with no same-named counterpart, discovery order
        unmatched2: Package 2 types with no same-named counterpart, discovery order
    """

    comparisons: list[TypeComparison] = field(default_factory=list)
    types1: dict[str, TypeRecord] = field(default_factory=dict)
    types2: dict[str, TypeRecord] = field(default_factory=dict)
    unmatched1: list[TypeRecord] = field(default_factory=list)
    unmatched2: list[TypeRecord] = field(default_factory=list)


def index_types(package_id: str, types: Iterable[TypeRecord]) -> dict[str, TypeRecord]:
    """Index types by full name, keeping the first record seen for each name.

    Later duplicates are dropped and logged; they are not an error, but the
    warning lets callers spot duplication in the extractor output.
    """
    indexed: dict[str, TypeRecord] = {}
    for type_record in types:
        if type_record.full_name in indexed:
            logger.warning(
                "duplicate_type_full_name",
                package_id=package_id,
                type_name=type_record.full_name,
            )
            continue
        indexed[type_record.full_name] = type_record
    return indexed


def match_types(
    snapshot1: PackageSnapshot,
    snapshot2: PackageSnapshot,
    differ: TypeDiffer,
) -> MatchResult:
    """Match types by full name and classify each key of the union.

    Args:
        snapshot1: Older package snapshot
        snapshot2: Newer package snapshot
        differ: Computes differences for a pair of same-named types

    Returns:
        MatchResult with Identical/Modified entries for shared names and
        tentative OnlyInPackage1/OnlyInPackage2 entries for the rest
    """
    types1 = index_types(snapshot1.package_id, snapshot1.types)
    types2 = index_types(snapshot2.package_id, snapshot2.types)

    result = MatchResult(types1=types1, types2=types2)

    for type_name in sorted(types1.keys() | types2.keys()):
        type1 = types1.get(type_name)
        type2 = types2.get(type_name)

        if type1 is not None and type2 is not None:
            differences = differ(type1, type2)
            status = ComparisonStatus.MODIFIED if differences else ComparisonStatus.IDENTICAL
        elif type1 is not None:
            differences = []
            status = ComparisonStatus.ONLY_IN_PACKAGE1
        else:
            differences = []
            status = ComparisonStatus.ONLY_IN_PACKAGE2

        result.comparisons.append(
            TypeComparison(
                type_name=type_name,
                status=status,
                type1=type1,
                type2=type2,
                differences=differences,
            )
        )

    result.unmatched1 = [t for name, t in types1.items() if name not in types2]
    result.unmatched2 = [t for name, t in types2.items() if name not in types1]

    logger.debug(
        "types_matched",
        matched=len(types1.keys() & types2.keys()),
        only_in_package1=len(result.unmatched1),
        only_in_package2=len(result.unmatched2),
    )

    return result
