from itertools import permutations

import pytest

from mapresolve.resolution.pairs import TypePair
from mapresolve.resolution.selection import (
    AmbiguousDefault,
    AmbiguousImplicit,
    Resolved,
    Unresolved,
    is_conflict,
    resolve,
)
from tests.resolution.conftest import DATES, Car, CarDto, candidate

PAIR = TypePair(Car, CarDto)


def test_single_candidate_is_resolved_regardless_of_flags() -> None:
    only = candidate("to_dto", 0)
    assert resolve(PAIR, [only]) == Resolved(PAIR, only)


def test_single_default_is_resolved() -> None:
    only = candidate("to_dto", 0, is_default=True)
    assert resolve(PAIR, [only]) == Resolved(PAIR, only)


def test_multiple_defaults_are_ambiguous() -> None:
    a = candidate("a", 0, is_default=True)
    b = candidate("b", 1, is_default=True)
    other = candidate("other", 2)

    outcome = resolve(PAIR, [b, other, a])

    assert outcome == AmbiguousDefault(PAIR, (a, b))
    assert outcome.method is None
    assert is_conflict(outcome)


@pytest.mark.parametrize("others", [0, 1, 3])
def test_single_default_wins_over_any_number_of_others(others: int) -> None:
    default = candidate("default", 10, is_default=True)
    rest = [candidate(f"other_{i}", i) for i in range(others)]

    outcome = resolve(PAIR, [*rest, default])

    assert outcome == Resolved(PAIR, default)
    assert not is_conflict(outcome)


def test_default_from_used_mapper_wins_over_own_candidates() -> None:
    own = candidate("own", 0)
    default = candidate("dates", 0, scope=DATES, is_default=True)
    assert resolve(PAIR, [own, default]) == Resolved(PAIR, default)


def test_multiple_candidates_without_default_pick_the_earliest() -> None:
    at_5 = candidate("at_5", 5)
    at_2 = candidate("at_2", 2)
    at_9 = candidate("at_9", 9)

    outcome = resolve(PAIR, [at_5, at_2, at_9])

    assert isinstance(outcome, AmbiguousImplicit)
    assert outcome.chosen == at_2
    assert outcome.method == at_2
    assert outcome.candidates == (at_2, at_5, at_9)


def test_implicit_choice_is_stable_under_reordering() -> None:
    candidates = [
        candidate("own_late", 7),
        candidate("dates_early", 0, scope=DATES),
        candidate("own_early", 3),
    ]
    chosen = {resolve(PAIR, ordering).method for ordering in permutations(candidates)}
    assert chosen == {candidates[2]}


def test_resolve_requires_candidates() -> None:
    with pytest.raises(ValueError):
        resolve(PAIR, [])


def test_unresolved_has_no_method() -> None:
    outcome = Unresolved(PAIR)
    assert outcome.method is None
    assert not is_conflict(outcome)
