"""JSON manifests describing a mapper's user mappings, and resolution reports.

A manifest is what a symbol-analysis front end hands over for one mapper::

    {
        "name": "CarMapper",
        "settings": {"auto_user_mappings": false},
        "methods": [
            {"name": "to_dto", "source_type": "Car", "target_type": "CarDto",
             "has_explicit_marker": true}
        ],
        "used_mappers": [
            {"name": "DateMapper", "static": true, "methods": [...]}
        ]
    }

Type identities are plain strings. Methods without a ``source_position`` are
positioned by their index in their scope's ``methods`` list.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import assert_never

from mapresolve.config import ResolutionSettings
from mapresolve.resolution.candidates import MethodDescriptor, ScopeKind
from mapresolve.resolution.catalog import CandidateCatalog
from mapresolve.resolution.diagnostics import Severity
from mapresolve.resolution.registry import ResolutionRegistry
from mapresolve.resolution.selection import (
    AmbiguousDefault,
    AmbiguousImplicit,
    Resolved,
    ResolutionOutcome,
)


class MethodManifest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    source_type: str
    target_type: str
    has_explicit_marker: bool = False
    ignore: bool = False
    is_default: bool | None = None
    source_position: int | None = Field(default=None, ge=0)
    is_mapping_signature: bool = True

    def to_descriptor(self) -> MethodDescriptor:
        return MethodDescriptor.model_validate(self.model_dump())


class ScopeManifest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    static: bool = False
    methods: list[MethodManifest] = []

    @property
    def kind(self) -> ScopeKind:
        return ScopeKind.USED_STATIC if self.static else ScopeKind.USED_INSTANCE


class MapperManifest(BaseModel):
    """A mapper, the methods it declares and the mappers it uses, in registration order."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    settings: ResolutionSettings = ResolutionSettings()
    methods: list[MethodManifest] = []
    used_mappers: list[ScopeManifest] = []

    def to_catalog(self) -> CandidateCatalog:
        return CandidateCatalog.for_mapper(
            own=(self.name, [it.to_descriptor() for it in self.methods]),
            used=[
                (scope.name, scope.kind, [it.to_descriptor() for it in scope.methods])
                for scope in self.used_mappers
            ],
        )


class PairReport(BaseModel):
    source_type: str
    target_type: str
    outcome: str
    method: str | None
    candidates: list[str]


class DiagnosticReport(BaseModel):
    id: str
    severity: Severity
    source_type: str
    target_type: str
    methods: list[str]
    message: str


class ResolutionReport(BaseModel):
    mapper: str
    auto_user_mappings: bool
    pairs: list[PairReport]
    diagnostics: list[DiagnosticReport]

    @property
    def has_errors(self) -> bool:
        return any(it.severity is Severity.ERROR for it in self.diagnostics)


def load_manifest(path: str | Path) -> MapperManifest:
    """Read and validate a manifest file.

    Raises:
        OSError: If the file cannot be read.
        pydantic.ValidationError: If the content is not a valid manifest.
    """
    return MapperManifest.model_validate_json(Path(path).read_text())


def _pair_report(outcome: ResolutionOutcome) -> PairReport:
    match outcome:
        case Resolved(candidate=candidate):
            kind, candidates = "resolved", (candidate,)
        case AmbiguousDefault(candidates=candidates):
            kind = "ambiguous_default"
        case AmbiguousImplicit(candidates=candidates):
            kind = "ambiguous_implicit"
        case _:
            assert_never(outcome)
    return PairReport(
        source_type=str(outcome.pair.source),
        target_type=str(outcome.pair.target),
        outcome=kind,
        method=outcome.method.qualified_name if outcome.method is not None else None,
        candidates=[it.qualified_name for it in candidates],
    )


def build_report(
    manifest: MapperManifest, settings: ResolutionSettings | None = None
) -> ResolutionReport:
    """Resolve a manifest and summarise the result.

    Args:
        manifest: The mapper to resolve.
        settings: Overrides the settings embedded in the manifest.

    Returns:
        One entry per resolved type pair and one per diagnostic.
    """
    settings = settings or manifest.settings
    catalog = manifest.to_catalog()
    registry = ResolutionRegistry.build(catalog, settings=settings)
    return ResolutionReport(
        mapper=manifest.name,
        auto_user_mappings=settings.auto_user_mappings,
        pairs=[_pair_report(outcome) for outcome in registry],
        diagnostics=[
            DiagnosticReport(
                id=diagnostic.id,
                severity=diagnostic.severity,
                source_type=str(diagnostic.pair.source),
                target_type=str(diagnostic.pair.target),
                methods=[catalog.get(it).qualified_name for it in diagnostic.candidates],
                message=diagnostic.message,
            )
            for diagnostic in registry.diagnostics
        ],
    )
