"""Discovery rules for automatic (implicit) user mapping resolution."""

from collections.abc import Iterable

from mapresolve.resolution.candidates import MappingCandidate


def is_eligible(candidate: MappingCandidate, auto_user_mappings: bool) -> bool:
    """Check whether a candidate takes part in implicit resolution.

    Rules, in order:

    1. Ignored candidates are never eligible. They stay reachable by explicit
       reference but are never picked automatically.
    2. With ``auto_user_mappings`` enabled, every other candidate is eligible.
    3. With it disabled, only candidates carrying the explicit marker are
       eligible. Methods of used mappers must additionally have the shape of a
       mapping method for their scope.

    Args:
        candidate: The candidate to classify.
        auto_user_mappings: Whether unmarked methods are discovered automatically.

    Returns:
        True if the candidate may be selected implicitly.
    """
    if candidate.ignore:
        return False

    if auto_user_mappings:
        return True

    if not candidate.has_explicit_marker:
        return False

    return not candidate.owner_scope.is_external or candidate.is_mapping_signature


def partition_eligible(
    candidates: Iterable[MappingCandidate], auto_user_mappings: bool
) -> tuple[list[MappingCandidate], list[MappingCandidate]]:
    """Split candidates into ``(eligible, excluded)``, preserving their order."""
    eligible: list[MappingCandidate] = []
    excluded: list[MappingCandidate] = []
    for candidate in candidates:
        (eligible if is_eligible(candidate, auto_user_mappings) else excluded).append(candidate)
    return eligible, excluded
