import pytest

from mapresolve.resolution.discovery import is_eligible, partition_eligible
from tests.resolution.conftest import DATES, UNITS, candidate


@pytest.mark.parametrize("auto_user_mappings", [True, False])
def test_ignored_candidates_are_never_eligible(auto_user_mappings: bool) -> None:
    ignored = candidate("to_dto", 0, has_explicit_marker=True, ignore=True, is_default=True)
    assert not is_eligible(ignored, auto_user_mappings)


@pytest.mark.parametrize("has_explicit_marker", [True, False])
def test_auto_user_mappings_includes_every_non_ignored_candidate(
    has_explicit_marker: bool,
) -> None:
    assert is_eligible(candidate("to_dto", 0, has_explicit_marker=has_explicit_marker), True)


def test_without_auto_user_mappings_unmarked_candidates_are_excluded() -> None:
    assert not is_eligible(candidate("to_dto", 0), False)
    assert not is_eligible(candidate("to_dto", 0, is_default=True), False)


def test_without_auto_user_mappings_marked_candidates_are_eligible() -> None:
    assert is_eligible(candidate("to_dto", 0, has_explicit_marker=True), False)


def test_own_scope_ignores_mapping_signature_shape() -> None:
    marked = candidate("to_dto", 0, has_explicit_marker=True, is_mapping_signature=False)
    assert is_eligible(marked, False)


@pytest.mark.parametrize("scope", [DATES, UNITS])
def test_used_mappers_require_mapping_signature_shape_when_marker_is_required(scope) -> None:
    helper = candidate(
        "helper", 0, scope=scope, has_explicit_marker=True, is_mapping_signature=False
    )
    mapping = candidate("to_dto", 1, scope=scope, has_explicit_marker=True)

    assert not is_eligible(helper, False)
    assert is_eligible(mapping, False)


def test_used_mappers_skip_shape_check_with_auto_user_mappings() -> None:
    helper = candidate("helper", 0, scope=DATES, is_mapping_signature=False)
    assert is_eligible(helper, True)


def test_partition_eligible_preserves_order() -> None:
    candidates = [
        candidate("a", 0, has_explicit_marker=True),
        candidate("b", 1),
        candidate("c", 2, has_explicit_marker=True, ignore=True),
        candidate("d", 3, has_explicit_marker=True),
    ]

    eligible, excluded = partition_eligible(candidates, auto_user_mappings=False)

    assert [it.name for it in eligible] == ["a", "d"]
    assert [it.name for it in excluded] == ["b", "c"]
