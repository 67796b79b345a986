from mapresolve.config import ResolutionSettings
from mapresolve.resolution.candidates import (
    CandidateId,
    DeclarationOrder,
    MapperScope,
    MappingCandidate,
    MappingFlags,
    MethodDescriptor,
    ScopeKind,
)
from mapresolve.resolution.catalog import CandidateCatalog
from mapresolve.resolution.diagnostics import Diagnostic, Severity
from mapresolve.resolution.discovery import is_eligible
from mapresolve.resolution.pairs import TypePair
from mapresolve.resolution.registry import ResolutionRegistry
from mapresolve.resolution.selection import (
    AmbiguousDefault,
    AmbiguousImplicit,
    Resolved,
    ResolutionOutcome,
    Unresolved,
    resolve,
)
from mapresolve._version import __version__

__all__ = [
    "ResolutionSettings",
    "CandidateId",
    "DeclarationOrder",
    "MapperScope",
    "MappingCandidate",
    "MappingFlags",
    "MethodDescriptor",
    "ScopeKind",
    "CandidateCatalog",
    "Diagnostic",
    "Severity",
    "is_eligible",
    "TypePair",
    "ResolutionRegistry",
    "AmbiguousDefault",
    "AmbiguousImplicit",
    "Resolved",
    "ResolutionOutcome",
    "Unresolved",
    "resolve",
    "__version__",
]
