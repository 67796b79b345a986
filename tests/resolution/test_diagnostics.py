from mapresolve.resolution.diagnostics import (
    AMBIGUOUS_DEFAULT,
    AMBIGUOUS_IMPLICIT,
    Diagnostic,
    Severity,
)
from mapresolve.resolution.pairs import TypePair
from tests.resolution.conftest import DATES, Car, CarDto, candidate

PAIR = TypePair(Car, CarDto)


def test_ambiguous_default_message_lists_methods() -> None:
    a = candidate("a", 0, is_default=True)
    b = candidate("b", 0, scope=DATES, is_default=True)

    diagnostic = Diagnostic.create(AMBIGUOUS_DEFAULT, PAIR, [a, b])

    assert diagnostic.id == "MR001"
    assert diagnostic.severity is Severity.ERROR
    assert "CarMapper.a, DateMapper.b" in diagnostic.message
    assert "tests.resolution.conftest.Car -> tests.resolution.conftest.CarDto" in diagnostic.message


def test_non_configurable_severity_ignores_requested_severity() -> None:
    a = candidate("a", 0, is_default=True)
    diagnostic = Diagnostic.create(AMBIGUOUS_DEFAULT, PAIR, [a], severity=Severity.INFO)
    assert diagnostic.severity is Severity.ERROR


def test_ambiguous_implicit_names_the_chosen_method() -> None:
    a = candidate("a", 0)
    b = candidate("b", 1)

    diagnostic = Diagnostic.create(
        AMBIGUOUS_IMPLICIT, PAIR, [a, b], severity=Severity.WARNING, chosen=a
    )

    assert diagnostic.severity is Severity.WARNING
    assert "using CarMapper.a" in diagnostic.message
    assert str(diagnostic).startswith("warning MR002: ")


def test_string_type_identities_render_verbatim() -> None:
    a = candidate("a", 0, source_type="global::A", target_type="global::B")
    diagnostic = Diagnostic.create(AMBIGUOUS_DEFAULT, TypePair("global::A", "global::B"), [a])
    assert "global::A -> global::B" in diagnostic.message
