"""Candidate user mappings and the records describing where they come from.

The symbol-analysis side of a mapper generator hands the resolver one
:class:`MethodDescriptor` per hand-written conversion method, grouped by the
:class:`MapperScope` that declares it. The catalog turns those into immutable
:class:`MappingCandidate` instances carrying an engine-assigned
:class:`DeclarationOrder`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, NamedTuple, NewType

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mapresolve.resolution.pairs import TypeIdentity, TypePair

#: Stable identity of a candidate within one catalog.
CandidateId = NewType("CandidateId", int)


class MappingFlags(BaseModel):
    """Attribute-driven behaviour of a user mapping.

    This mirrors what a developer can put on a conversion method: the explicit
    "this is a user mapping" marker and its ``ignore`` and ``default`` options.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    has_explicit_marker: bool = False
    """Whether the method carries the explicit user mapping marker."""

    ignore: bool = False
    """Excluded from automatic discovery; still reachable by explicit reference."""

    is_default: Literal[True] | None = None
    """Requested as the default for its type pair. Unset means ordinary."""

    @field_validator("is_default", mode="before")
    @classmethod
    def _unset_false_default(cls, value: Any) -> Any:
        # "explicitly not the default" is not a distinct state
        return None if value is False else value


class MethodDescriptor(BaseModel):
    """A conversion method as reported by the symbol-analysis collaborator.

    Flags may be given either as a :class:`MappingFlags` instance or flattened
    into the descriptor itself::

        MethodDescriptor(name="to_dto", source_type=Car, target_type=CarDto, is_default=True)
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    name: str = Field(min_length=1)
    source_type: Any
    target_type: Any
    flags: MappingFlags = MappingFlags()
    source_position: int | None = Field(default=None, ge=0)
    is_mapping_signature: bool = True
    """Whether the method has the shape of a mapping method for its scope.

    Only consulted for methods of used mappers when automatic user mapping
    discovery is disabled.
    """
    declaration_key: Any = None
    """Identity of the underlying declaration. Re-adding the same key is a no-op."""

    @model_validator(mode="before")
    @classmethod
    def _fold_flags(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        flag_names = MappingFlags.model_fields.keys() & data.keys()
        if not flag_names:
            return data
        if "flags" in data:
            raise ValueError("flags must be given either as 'flags' or as keyword arguments")
        data = dict(data)
        data["flags"] = {name: data.pop(name) for name in flag_names}
        return data

    @field_validator("source_type", "target_type", "declaration_key")
    @classmethod
    def _require_hashable(cls, value: Any) -> Any:
        try:
            hash(value)
        except TypeError as e:
            raise ValueError(f"must be hashable: {e}") from e
        return value

    @property
    def type_pair(self) -> TypePair:
        return TypePair(self.source_type, self.target_type)


class ScopeKind(str, Enum):
    """How a declaring scope relates to the mapper being generated."""

    OWN = "own"
    USED_INSTANCE = "used_instance"
    USED_STATIC = "used_static"


@dataclass(frozen=True, slots=True)
class MapperScope:
    """A declaring scope: the mapper itself or one of the mappers it uses.

    Attributes:
        name: Name of the declaring mapper.
        kind: Own scope or used mapper (instance or static).
        rank: 0 for the own scope; 1, 2, ... for used mappers in the order the
            owning mapper registers them. Instance and static used mappers share
            the same ranking space.
    """

    name: str
    kind: ScopeKind = ScopeKind.OWN
    rank: int = 0

    def __post_init__(self) -> None:
        if self.kind is ScopeKind.OWN and self.rank != 0:
            raise ValueError(f"Own scope {self.name!r} must have rank 0, got {self.rank}")
        if self.kind is not ScopeKind.OWN and self.rank < 1:
            raise ValueError(f"Used mapper {self.name!r} must have a rank >= 1, got {self.rank}")

    @property
    def is_external(self) -> bool:
        return self.kind is not ScopeKind.OWN

    @classmethod
    def own(cls, name: str) -> MapperScope:
        return cls(name, ScopeKind.OWN, 0)

    @classmethod
    def used(cls, name: str, rank: int, *, static: bool = False) -> MapperScope:
        kind = ScopeKind.USED_STATIC if static else ScopeKind.USED_INSTANCE
        return cls(name, kind, rank)


class DeclarationOrder(NamedTuple):
    """Engine-assigned position of a candidate, compared lexicographically."""

    scope_rank: int
    source_position: int

    def __str__(self) -> str:
        return f"{self.scope_rank}:{self.source_position}"


@dataclass(frozen=True, slots=True)
class MappingCandidate:
    """One user-written conversion method, as stored in the catalog.

    Attributes:
        id: Stable identity within the catalog that created it.
        name: Method name.
        owner_scope: The declaring scope.
        source_type: Type the method converts from.
        target_type: Type the method converts to.
        flags: Marker, ignore and default options.
        is_mapping_signature: Structural shape check for used mapper methods.
        declaration_order: Unique order derived from scope rank and position.
    """

    id: CandidateId
    name: str
    owner_scope: MapperScope
    source_type: TypeIdentity
    target_type: TypeIdentity
    flags: MappingFlags
    is_mapping_signature: bool
    declaration_order: DeclarationOrder

    @property
    def type_pair(self) -> TypePair:
        return TypePair(self.source_type, self.target_type)

    @property
    def has_explicit_marker(self) -> bool:
        return self.flags.has_explicit_marker

    @property
    def ignore(self) -> bool:
        return self.flags.ignore

    @property
    def is_default(self) -> Literal[True] | None:
        return self.flags.is_default

    @property
    def qualified_name(self) -> str:
        return f"{self.owner_scope.name}.{self.name}"
