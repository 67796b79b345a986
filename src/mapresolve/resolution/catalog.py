"""Catalog of candidate user mappings.

The catalog collects every user-written conversion method a mapper can see,
from its own declarations and from each mapper it uses, and assigns each one a
:class:`~mapresolve.resolution.candidates.DeclarationOrder`.

The declaration order is derived from ``(scope_rank, source_position)`` only,
never from the sequence in which candidates are added, so collaborators may
enumerate scopes and methods in whatever order is convenient for them.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from logging import getLogger
from typing import Any

from mapresolve.resolution.candidates import (
    CandidateId,
    DeclarationOrder,
    MapperScope,
    MappingCandidate,
    MethodDescriptor,
    ScopeKind,
)
from mapresolve.resolution.exceptions import (
    DuplicateDeclarationOrderError,
    ScopeRankConflictError,
    UnknownCandidateError,
)

logger = getLogger(__name__)

#: A used mapper as registered by the owning mapper: its name, its kind and
#: the conversion methods it declares.
UsedMapper = tuple[str, ScopeKind, Iterable[MethodDescriptor]]


class CandidateCatalog:
    """Ordered store of candidate user mappings.

    Attributes:
        _by_id: Candidates keyed by their id, in insertion order.
        _by_key: Candidate ids keyed by declaration identity.
        _by_order: Candidate ids keyed by declaration order.
        _scopes: Registered scopes keyed by rank.
    """

    def __init__(self) -> None:
        self._by_id: dict[CandidateId, MappingCandidate] = {}
        self._by_key: dict[Any, CandidateId] = {}
        self._by_order: dict[DeclarationOrder, CandidateId] = {}
        self._scopes: dict[int, MapperScope] = {}

    @classmethod
    def for_mapper(
        cls,
        own: tuple[str, Iterable[MethodDescriptor]],
        used: Iterable[UsedMapper] = (),
    ) -> CandidateCatalog:
        """Build the catalog for one mapper.

        Args:
            own: Name of the mapper and the methods it declares itself.
            used: The mappers it uses, in the order it registers them.

        Returns:
            A catalog where the own scope has rank 0 and used mappers rank 1, 2, ...
        """
        catalog = cls()
        own_name, own_methods = own
        catalog.add_scope(MapperScope.own(own_name), own_methods)
        for rank, (name, kind, methods) in enumerate(used, start=1):
            catalog.add_scope(MapperScope(name, kind, rank), methods)
        return catalog

    def add(
        self,
        descriptor: MethodDescriptor,
        scope: MapperScope,
        source_position: int | None = None,
    ) -> CandidateId:
        """Add a candidate and assign its declaration order.

        Args:
            descriptor: The method as reported by symbol analysis.
            scope: The declaring scope; its rank is the scope rank.
            source_position: Position of the declaration within its scope.
                Defaults to ``descriptor.source_position``.

        Returns:
            The id of the candidate. Adding the same declaration again returns
            the id it already has.

        Raises:
            ValueError: If no source position is known.
            ScopeRankConflictError: If another scope already uses this rank.
            DuplicateDeclarationOrderError: If another declaration already holds
                this scope rank and source position.
        """
        if source_position is None:
            source_position = descriptor.source_position
        if source_position is None:
            raise ValueError(f"No source position given for {scope.name}.{descriptor.name}")

        key = self._declaration_key(descriptor, scope, source_position)
        if (existing_id := self._by_key.get(key)) is not None:
            logger.debug("Declaration %r already catalogued as candidate %s", key, existing_id)
            return existing_id

        registered = self._scopes.get(scope.rank, scope)
        if registered != scope:
            raise ScopeRankConflictError(scope.rank, registered.name, scope.name)

        order = DeclarationOrder(scope.rank, source_position)
        if (holder := self._by_order.get(order)) is not None:
            raise DuplicateDeclarationOrderError(
                scope.rank,
                source_position,
                existing=self._by_id[holder].qualified_name,
                duplicate=key,
            )

        self._scopes[scope.rank] = scope

        candidate_id = CandidateId(len(self._by_id))
        self._by_id[candidate_id] = MappingCandidate(
            id=candidate_id,
            name=descriptor.name,
            owner_scope=scope,
            source_type=descriptor.source_type,
            target_type=descriptor.target_type,
            flags=descriptor.flags,
            is_mapping_signature=descriptor.is_mapping_signature,
            declaration_order=order,
        )
        self._by_key[key] = candidate_id
        self._by_order[order] = candidate_id
        return candidate_id

    def add_scope(
        self, scope: MapperScope, descriptors: Iterable[MethodDescriptor]
    ) -> list[CandidateId]:
        """Add every method of one scope.

        Descriptors without a source position are positioned by their index in
        ``descriptors``.
        """
        return [
            self.add(descriptor, scope, index if descriptor.source_position is None else None)
            for index, descriptor in enumerate(descriptors)
        ]

    def candidates(self) -> Sequence[MappingCandidate]:
        """All candidates, ordered by declaration order."""
        return tuple(self._by_id[self._by_order[order]] for order in sorted(self._by_order))

    def get(self, candidate_id: CandidateId) -> MappingCandidate:
        try:
            return self._by_id[candidate_id]
        except KeyError:
            raise UnknownCandidateError(candidate_id) from None

    def find(self, name: str) -> list[MappingCandidate]:
        """All candidates with the given method name, including ignored ones."""
        return [it for it in self.candidates() if it.name == name]

    @property
    def scopes(self) -> Sequence[MapperScope]:
        return tuple(self._scopes[rank] for rank in sorted(self._scopes))

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[MappingCandidate]:
        return iter(self.candidates())

    def __contains__(self, candidate_id: object) -> bool:
        return candidate_id in self._by_id

    @staticmethod
    def _declaration_key(
        descriptor: MethodDescriptor, scope: MapperScope, source_position: int
    ) -> Any:
        if descriptor.declaration_key is not None:
            return descriptor.declaration_key
        return (scope.name, descriptor.name, source_position)
