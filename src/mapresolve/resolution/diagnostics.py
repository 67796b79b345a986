"""Diagnostics produced while resolving user mappings.

Diagnostics are returned as data. The resolver never raises for a conflict;
whoever drives it decides how to surface them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from mapresolve.resolution.candidates import CandidateId, MappingCandidate
from mapresolve.resolution.pairs import TypePair


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class DiagnosticDescriptor:
    """Static description of a kind of diagnostic.

    Attributes:
        id: Stable diagnostic code.
        title: Short summary.
        message_format: ``str.format`` template, filled with ``pair`` and ``methods``.
        default_severity: Severity used unless configured otherwise.
        configurable: Whether callers may change the severity.
    """

    id: str
    title: str
    message_format: str
    default_severity: Severity
    configurable: bool


AMBIGUOUS_DEFAULT = DiagnosticDescriptor(
    id="MR001",
    title="Multiple default user mappings",
    message_format=(
        "Multiple user mappings are marked as default for {pair}: {methods}; "
        "at most one default is allowed per type pair"
    ),
    default_severity=Severity.ERROR,
    configurable=False,
)

AMBIGUOUS_IMPLICIT = DiagnosticDescriptor(
    id="MR002",
    title="Multiple user mappings without a default",
    message_format=(
        "Multiple user mappings found for {pair}: {methods}; using {chosen}, "
        "mark one of them as default to silence this"
    ),
    default_severity=Severity.INFO,
    configurable=True,
)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A diagnostic for one conflicting type pair.

    Attributes:
        descriptor: What kind of conflict this is.
        severity: Effective severity.
        pair: The conflicting type pair.
        candidates: Ids of every candidate involved, in declaration order.
        message: Rendered message.
    """

    descriptor: DiagnosticDescriptor
    severity: Severity
    pair: TypePair
    candidates: tuple[CandidateId, ...]
    message: str

    @property
    def id(self) -> str:
        return self.descriptor.id

    @classmethod
    def create(
        cls,
        descriptor: DiagnosticDescriptor,
        pair: TypePair,
        candidates: Sequence[MappingCandidate],
        *,
        severity: Severity | None = None,
        chosen: MappingCandidate | None = None,
    ) -> Diagnostic:
        if severity is None or not descriptor.configurable:
            severity = descriptor.default_severity
        message = descriptor.message_format.format(
            pair=pair,
            methods=", ".join(it.qualified_name for it in candidates),
            chosen=chosen.qualified_name if chosen is not None else None,
        )
        return cls(
            descriptor=descriptor,
            severity=severity,
            pair=pair,
            candidates=tuple(it.id for it in candidates),
            message=message,
        )

    def __str__(self) -> str:
        return f"{self.severity.value} {self.descriptor.id}: {self.message}"
