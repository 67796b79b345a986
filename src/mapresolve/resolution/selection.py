"""Default selection among the eligible user mappings of one type pair.

Given every eligible candidate for a type pair, exactly one of four outcomes
applies:

    - :class:`Resolved`: a single candidate to use, either the only eligible
      one or the single explicit default.
    - :class:`AmbiguousDefault`: more than one explicit default. No method is
      chosen for the pair.
    - :class:`AmbiguousImplicit`: several eligible candidates and no explicit
      default. The earliest declared one is used as a fallback.
    - :class:`Unresolved`: nothing eligible; the registry simply has no entry.

There is no scoring beyond exact type pair equality. Pairs that differ only by
nullability or variance are distinct pairs.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from operator import attrgetter

from typing_extensions import TypeIs

from mapresolve.resolution.candidates import MappingCandidate
from mapresolve.resolution.pairs import TypePair

_by_declaration_order = attrgetter("declaration_order")


@dataclass(frozen=True, slots=True)
class Resolved:
    pair: TypePair
    candidate: MappingCandidate

    @property
    def method(self) -> MappingCandidate:
        return self.candidate

    @property
    def is_conflict(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class AmbiguousDefault:
    """More than one candidate is marked as the default for the pair.

    Fatal for this pair only: no implicit call may be generated for it.
    """

    pair: TypePair
    candidates: tuple[MappingCandidate, ...]

    @property
    def method(self) -> None:
        return None

    @property
    def is_conflict(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class AmbiguousImplicit:
    """Several eligible candidates, none of them an explicit default.

    ``chosen`` is the candidate with the lowest declaration order and is still
    used; the conflict is reported alongside.
    """

    pair: TypePair
    candidates: tuple[MappingCandidate, ...]
    chosen: MappingCandidate

    @property
    def method(self) -> MappingCandidate:
        return self.chosen

    @property
    def is_conflict(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Unresolved:
    pair: TypePair

    @property
    def method(self) -> None:
        return None

    @property
    def is_conflict(self) -> bool:
        return False


ResolutionOutcome = Resolved | AmbiguousDefault | AmbiguousImplicit


def is_conflict(
    outcome: ResolutionOutcome | Unresolved,
) -> TypeIs[AmbiguousDefault | AmbiguousImplicit]:
    return outcome.is_conflict


def resolve(pair: TypePair, eligible_candidates: Iterable[MappingCandidate]) -> ResolutionOutcome:
    """Pick the user mapping to use for a type pair.

    Args:
        pair: The type pair being resolved.
        eligible_candidates: Every candidate for ``pair`` that passed discovery.
            They need not be sorted.

    Returns:
        The outcome for the pair.

    Raises:
        ValueError: If there are no candidates; absent pairs are not resolved.
    """
    ordered = sorted(eligible_candidates, key=_by_declaration_order)
    if not ordered:
        raise ValueError(f"No eligible user mappings to resolve for {pair}")

    explicit_defaults = tuple(it for it in ordered if it.is_default)
    others = tuple(it for it in ordered if not it.is_default)

    match explicit_defaults, others:
        case (_, _, *_), _:
            return AmbiguousDefault(pair, explicit_defaults)
        case (default,), _:
            return Resolved(pair, default)
        case (), (only,):
            return Resolved(pair, only)
        case _:
            return AmbiguousImplicit(pair, others, chosen=others[0])
