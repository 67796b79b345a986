import pytest
from pydantic import ValidationError

from mapresolve.resolution.candidates import (
    DeclarationOrder,
    MapperScope,
    MappingFlags,
    MethodDescriptor,
    ScopeKind,
)
from mapresolve.resolution.pairs import TypePair
from tests.resolution.conftest import Car, CarDto


def test_flags_default_to_unmarked_ordinary_mapping() -> None:
    flags = MappingFlags()
    assert flags == MappingFlags(has_explicit_marker=False, ignore=False, is_default=None)


def test_flags_treat_false_default_as_unset() -> None:
    assert MappingFlags(is_default=False).is_default is None


def test_descriptor_folds_flat_flags() -> None:
    descriptor = MethodDescriptor(
        name="to_dto",
        source_type=Car,
        target_type=CarDto,
        has_explicit_marker=True,
        is_default=True,
    )
    assert descriptor.flags == MappingFlags(has_explicit_marker=True, is_default=True)


def test_descriptor_rejects_flags_given_twice() -> None:
    with pytest.raises(ValidationError):
        MethodDescriptor(
            name="to_dto",
            source_type=Car,
            target_type=CarDto,
            flags=MappingFlags(ignore=True),
            ignore=True,
        )


def test_descriptor_rejects_unhashable_type_identity() -> None:
    with pytest.raises(ValidationError):
        MethodDescriptor(name="to_dto", source_type=["Car"], target_type=CarDto)


@pytest.mark.parametrize("identity", [("Car", ["wheels"]), ("Car", ("nested", {}))])
def test_descriptor_rejects_tuples_holding_unhashable_values(identity: tuple) -> None:
    with pytest.raises(ValidationError):
        MethodDescriptor(name="to_dto", source_type=identity, target_type=CarDto)


def test_descriptor_accepts_nested_hashable_identities() -> None:
    descriptor = MethodDescriptor(
        name="to_dto", source_type=("Car", frozenset({"wheels"})), target_type=list[CarDto]
    )
    assert descriptor.type_pair == (("Car", frozenset({"wheels"})), list[CarDto])


def test_descriptor_rejects_negative_position() -> None:
    with pytest.raises(ValidationError):
        MethodDescriptor(name="to_dto", source_type=Car, target_type=CarDto, source_position=-1)


def test_descriptor_is_immutable() -> None:
    descriptor = MethodDescriptor(name="to_dto", source_type=Car, target_type=CarDto)
    with pytest.raises(ValidationError):
        descriptor.name = "other"  # type: ignore[misc]


def test_descriptor_type_pair_is_directional() -> None:
    descriptor = MethodDescriptor(name="to_dto", source_type=Car, target_type=CarDto)
    assert descriptor.type_pair == TypePair(Car, CarDto)
    assert descriptor.type_pair != TypePair(CarDto, Car)
    assert descriptor.type_pair == (Car, CarDto)


def test_own_scope_has_rank_zero() -> None:
    scope = MapperScope.own("CarMapper")
    assert scope.rank == 0
    assert scope.kind is ScopeKind.OWN
    assert not scope.is_external


@pytest.mark.parametrize(
    "static, kind", [(False, ScopeKind.USED_INSTANCE), (True, ScopeKind.USED_STATIC)]
)
def test_used_scope_kinds(static: bool, kind: ScopeKind) -> None:
    scope = MapperScope.used("DateMapper", 3, static=static)
    assert scope.kind is kind
    assert scope.rank == 3
    assert scope.is_external


@pytest.mark.parametrize(
    "kind, rank",
    [(ScopeKind.OWN, 1), (ScopeKind.USED_INSTANCE, 0), (ScopeKind.USED_STATIC, -1)],
)
def test_scope_rank_must_match_kind(kind: ScopeKind, rank: int) -> None:
    with pytest.raises(ValueError):
        MapperScope("Mapper", kind, rank)


def test_declaration_order_is_lexicographic() -> None:
    assert DeclarationOrder(0, 99) < DeclarationOrder(1, 0)
    assert DeclarationOrder(1, 2) < DeclarationOrder(1, 3)
    assert str(DeclarationOrder(2, 5)) == "2:5"
