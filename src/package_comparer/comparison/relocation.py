"""Relocation detection for types moved to a different namespace.

Types left unmatched by the exact-name pass are paired when they share a
simple name and kind and their member sets overlap enough. The default
strategy is greedy and order-dependent: leftovers from package 1 are visited
in discovery order and take the first acceptable package 2 candidate. When
two leftovers both clear the threshold against the same candidate, the first
one visited wins even if the second is the better match; the ``best_score``
strategy picks the strongest candidate per leftover instead.
"""

from package_comparer.comparison.matcher import MatchResult, TypeDiffer
from package_comparer.comparison.models import ComparisonStatus, TypeComparison
from package_comparer.config import RelocationConfig, RelocationStrategy
from package_comparer.snapshot.models import TypeKind, TypeRecord
from package_comparer.utils.logging import get_logger

logger = get_logger(__name__)


def overlap_ratio(left: set[str], right: set[str]) -> float:
    """Shared elements divided by the size of the larger set.

    Two sets of five that share four score 0.8. Empty input scores 0.0.
    """
    largest = max(len(left), len(right))
    if largest == 0:
        return 0.0
    return len(left & right) / largest


def member_similarity(type1: TypeRecord, type2: TypeRecord) -> float | None:
    """Score how alike two types' member sets are.

    Enums are compared by member names, since enum value signatures embed
    the enum's own type name. Other kinds are compared by signatures.

    Returns:
        Score between 0.0 and 1.0. Two memberless non-enum types score 1.0;
        two memberless enums cannot be scored and give None.
    """
    if type1.kind == TypeKind.ENUM and type2.kind == TypeKind.ENUM:
        names1 = {m.name for m in type1.members}
        names2 = {m.name for m in type2.members}
        if not names1 and not names2:
            return None
        return overlap_ratio(names1, names2)

    if not type1.members and not type2.members:
        return 1.0

    signatures1 = {m.signature for m in type1.members}
    signatures2 = {m.signature for m in type2.members}
    return overlap_ratio(signatures1, signatures2)


def are_members_similar(type1: TypeRecord, type2: TypeRecord, threshold: float = 0.8) -> bool:
    """Check whether two types are structurally similar enough to be one type."""
    score = member_similarity(type1, type2)
    return score is not None and score >= threshold


class RelocationDetector:
    """Reclassify leftover type pairs as namespace changes."""

    def __init__(self, config: RelocationConfig | None = None):
        """Initialize the relocation detector.

        Args:
            config: Relocation settings (threshold and strategy)
        """
        self.config = config or RelocationConfig()

    def _is_candidate(self, type1: TypeRecord, type2: TypeRecord) -> bool:
        return type1.simple_name == type2.simple_name and type1.kind == type2.kind

    def _first_match(self, type1: TypeRecord, candidates: list[TypeRecord]) -> TypeRecord | None:
        for type2 in candidates:
            if self._is_candidate(type1, type2) and are_members_similar(
                type1, type2, self.config.similarity_threshold
            ):
                return type2
        return None

    def _best_match(self, type1: TypeRecord, candidates: list[TypeRecord]) -> TypeRecord | None:
        best: TypeRecord | None = None
        best_score = -1.0

        for type2 in candidates:
            if not self._is_candidate(type1, type2):
                continue
            score = member_similarity(type1, type2)
            if score is None or score < self.config.similarity_threshold:
                continue
            if score > best_score:
                best = type2
                best_score = score

        return best

    def find_match(self, type1: TypeRecord, candidates: list[TypeRecord]) -> TypeRecord | None:
        """Find the package 2 candidate a leftover package 1 type moved to."""
        if self.config.strategy == RelocationStrategy.BEST_SCORE:
            return self._best_match(type1, candidates)
        return self._first_match(type1, candidates)

    def detect(self, match: MatchResult, differ: TypeDiffer) -> int:
        """Reclassify relocated pairs inside ``match.comparisons``.

        Args:
            match: Result of the exact-name pass; its entries are updated in place
            differ: Computes the additional changes for each relocated pair

        Returns:
            Number of relocated pairs found
        """
        by_name: dict[str, TypeComparison] = {tc.type_name: tc for tc in match.comparisons}
        candidates = list(match.unmatched2)
        relocated = 0

        for type1 in match.unmatched1:
            if not candidates:
                break

            type2 = self.find_match(type1, candidates)
            if type2 is None:
                continue

            differences = differ(type1, type2)

            for comparison in (by_name[type1.full_name], by_name[type2.full_name]):
                comparison.status = ComparisonStatus.NAMESPACE_CHANGED
                comparison.type1 = type1
                comparison.type2 = type2
                comparison.old_namespace = type1.namespace
                comparison.new_namespace = type2.namespace
                comparison.differences = list(differences)

            candidates.remove(type2)
            relocated += 1

            logger.info(
                "type_relocated",
                type_name=type1.simple_name,
                old_namespace=type1.namespace,
                new_namespace=type2.namespace,
                additional_changes=len(differences),
            )

        return relocated
