from dataclasses import dataclass
from typing import Any

import pytest

from mapresolve.resolution.candidates import (
    MapperScope,
    MappingCandidate,
    MethodDescriptor,
)
from mapresolve.resolution.catalog import CandidateCatalog


@dataclass(frozen=True)
class Car:
    name: str


@dataclass(frozen=True)
class CarDto:
    name: str


@dataclass(frozen=True)
class Engine:
    power: int


@dataclass(frozen=True)
class EngineDto:
    power: int


OWN = MapperScope.own("CarMapper")
DATES = MapperScope.used("DateMapper", 1)
UNITS = MapperScope.used("UnitMapper", 2, static=True)


def method(
    name: str,
    source_type: Any = Car,
    target_type: Any = CarDto,
    **kwargs: Any,
) -> MethodDescriptor:
    """Shorthand for a method descriptor converting Car to CarDto by default."""
    return MethodDescriptor(name=name, source_type=source_type, target_type=target_type, **kwargs)


def candidate(
    name: str,
    position: int,
    scope: MapperScope = OWN,
    **kwargs: Any,
) -> MappingCandidate:
    """A single candidate, catalogued on its own."""
    catalog = CandidateCatalog()
    candidate_id = catalog.add(method(name, **kwargs), scope, position)
    return catalog.get(candidate_id)


@pytest.fixture
def catalog() -> CandidateCatalog:
    return CandidateCatalog()
