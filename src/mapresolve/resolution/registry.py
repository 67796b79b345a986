"""Registry of resolved user mappings.

The registry is the aggregate result of one resolution pass over a
:class:`~mapresolve.resolution.catalog.CandidateCatalog`:

    1. Every candidate is classified by the discovery rules.
    2. Eligible candidates are grouped by type pair.
    3. Each group is resolved independently by the default selector.

Pairs without any eligible candidate are absent. Once built, a registry never
changes; a new pass builds a new registry.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from concurrent.futures import Executor
from logging import getLogger
from types import MappingProxyType

from mapresolve.config import ResolutionSettings
from mapresolve.resolution.candidates import MappingCandidate
from mapresolve.resolution.catalog import CandidateCatalog
from mapresolve.resolution.diagnostics import (
    AMBIGUOUS_DEFAULT,
    AMBIGUOUS_IMPLICIT,
    Diagnostic,
    Severity,
)
from mapresolve.resolution.discovery import partition_eligible
from mapresolve.resolution.exceptions import (
    AmbiguousMappingReferenceError,
    UnknownMappingReferenceError,
)
from mapresolve.resolution.pairs import TypeIdentity, TypePair, as_type_pair
from mapresolve.resolution.selection import (
    AmbiguousDefault,
    AmbiguousImplicit,
    ResolutionOutcome,
    Unresolved,
    is_conflict,
    resolve,
)
from mapresolve.utils.collections import group_by

logger = getLogger(__name__)

PairLike = TypePair | tuple[TypeIdentity, TypeIdentity]


def _resolve_group(group: tuple[TypePair, list[MappingCandidate]]) -> ResolutionOutcome:
    pair, candidates = group
    return resolve(pair, candidates)


def _diagnostic_for(outcome: ResolutionOutcome, settings: ResolutionSettings) -> Diagnostic | None:
    match outcome:
        case AmbiguousDefault(pair=pair, candidates=candidates):
            return Diagnostic.create(AMBIGUOUS_DEFAULT, pair, candidates)
        case AmbiguousImplicit(pair=pair, candidates=candidates, chosen=chosen):
            return Diagnostic.create(
                AMBIGUOUS_IMPLICIT,
                pair,
                candidates,
                severity=settings.ambiguous_implicit_severity,
                chosen=chosen,
            )
        case _:
            return None


class ResolutionRegistry:
    """Read-only view of the user mapping chosen for every type pair.

    Attributes:
        _outcomes: Outcome per type pair, in order of first declaration.
        _catalog: The catalog the registry was built from, for explicit references.
        _diagnostics: One diagnostic per conflicting pair.
        _settings: The settings used for the pass.
    """

    def __init__(
        self,
        outcomes: Mapping[TypePair, ResolutionOutcome],
        catalog: CandidateCatalog,
        diagnostics: Sequence[Diagnostic],
        settings: ResolutionSettings,
    ) -> None:
        self._outcomes = MappingProxyType(dict(outcomes))
        self._catalog = catalog
        self._diagnostics = tuple(diagnostics)
        self._settings = settings

    @classmethod
    def build(
        cls,
        catalog: CandidateCatalog,
        auto_user_mappings: bool | None = None,
        *,
        settings: ResolutionSettings | None = None,
        executor: Executor | None = None,
    ) -> ResolutionRegistry:
        """Resolve every type pair of a catalog.

        Args:
            catalog: All candidates of the mapper, fully collected.
            auto_user_mappings: Overrides ``settings.auto_user_mappings`` if given.
            settings: Settings for this pass; defaults to ``ResolutionSettings()``.
            executor: If given, independent type pairs are resolved through it.
                The result is the same as for a sequential build.

        Returns:
            The registry for this pass.
        """
        settings = settings or ResolutionSettings()
        if auto_user_mappings is not None:
            settings = settings.model_copy(update={"auto_user_mappings": auto_user_mappings})

        eligible, excluded = partition_eligible(catalog.candidates(), settings.auto_user_mappings)
        groups = list(group_by(eligible, key=lambda it: it.type_pair).items())

        if executor is None:
            resolved = [_resolve_group(group) for group in groups]
        else:
            resolved = list(executor.map(_resolve_group, groups))

        outcomes = {outcome.pair: outcome for outcome in resolved}
        conflicts = sorted(
            (outcome for outcome in resolved if is_conflict(outcome)),
            key=lambda it: min(candidate.declaration_order for candidate in it.candidates),
        )
        diagnostics = [
            diagnostic
            for outcome in conflicts
            if (diagnostic := _diagnostic_for(outcome, settings)) is not None
        ]
        for diagnostic in diagnostics:
            logger.debug("%s", diagnostic)

        logger.debug(
            "Resolved %s type pairs from %s candidates (%s excluded from discovery, %s conflicts)",
            len(outcomes),
            len(catalog),
            len(excluded),
            len(diagnostics),
        )
        return cls(outcomes, catalog, diagnostics, settings)

    def lookup(self, pair: PairLike) -> ResolutionOutcome | None:
        """Get the outcome for a type pair, or None if nothing is eligible for it."""
        return self._outcomes.get(as_type_pair(pair))

    def outcome(self, pair: PairLike) -> ResolutionOutcome | Unresolved:
        """Like :meth:`lookup`, but reports absent pairs as :class:`Unresolved`."""
        pair = as_type_pair(pair)
        return self._outcomes.get(pair) or Unresolved(pair)

    def method_for(self, pair: PairLike) -> MappingCandidate | None:
        """The method an implicit call site for ``pair`` should use, if any."""
        outcome = self.lookup(pair)
        return outcome.method if outcome is not None else None

    def reference(self, name: str) -> MappingCandidate:
        """Resolve an explicit reference to a user mapping by name.

        Explicit references bypass discovery: ignored and unmarked methods can
        be referenced too. ``name`` may be qualified with the declaring mapper,
        as in ``"CarMapper.to_dto"``.

        Raises:
            UnknownMappingReferenceError: If no method has that name.
            AmbiguousMappingReferenceError: If several methods have that name.
        """
        scope_name, _, method_name = name.rpartition(".")
        matches = [
            it
            for it in self._catalog.find(method_name)
            if not scope_name or it.owner_scope.name == scope_name
        ]
        match matches:
            case []:
                raise UnknownMappingReferenceError(name)
            case [candidate]:
                return candidate
            case _:
                raise AmbiguousMappingReferenceError(name, [it.qualified_name for it in matches])

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return self._diagnostics

    @property
    def has_errors(self) -> bool:
        return any(it.severity is Severity.ERROR for it in self._diagnostics)

    @property
    def settings(self) -> ResolutionSettings:
        return self._settings

    def pairs(self) -> list[TypePair]:
        return list(self._outcomes)

    def __len__(self) -> int:
        return len(self._outcomes)

    def __iter__(self) -> Iterator[ResolutionOutcome]:
        return iter(self._outcomes.values())

    def __contains__(self, pair: object) -> bool:
        return isinstance(pair, tuple) and len(pair) == 2 and as_type_pair(pair) in self._outcomes
