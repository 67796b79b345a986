"""Exceptions for the user mapping resolver.

Conflicting user mappings are never reported through exceptions: they are
resolution outcomes and diagnostics. The exceptions defined here signal misuse
of the resolver API, such as feeding the catalog inconsistent declaration
positions or referencing a method that does not exist.
"""

from typing import Any


class ResolutionError(Exception):
    """Base exception for user mapping resolution failures.

    Attributes:
        message: Human-readable description of the failure.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class CatalogError(ResolutionError):
    """Raised when a candidate cannot be added to or found in a catalog."""


class DuplicateDeclarationOrderError(CatalogError):
    """Raised when two different declarations claim the same declaration order.

    The declaration order is the only tie-break between ambiguous candidates,
    so it must be unique across the whole catalog.

    Attributes:
        scope_rank: The rank of the scope both declarations were added under.
        source_position: The position both declarations claim.
        existing: Key of the declaration already holding that position.
        duplicate: Key of the declaration that was rejected.
    """

    def __init__(
        self,
        scope_rank: int,
        source_position: int,
        existing: Any,
        duplicate: Any,
        message: str | None = None,
    ) -> None:
        self.scope_rank = scope_rank
        self.source_position = source_position
        self.existing = existing
        self.duplicate = duplicate
        if message is None:
            message = (
                f"Declaration {duplicate!r} cannot take position {source_position} "
                f"in scope rank {scope_rank}: already held by {existing!r}"
            )
        super().__init__(message)


class ScopeRankConflictError(CatalogError):
    """Raised when two different scopes are registered under the same rank."""

    def __init__(self, rank: int, existing: Any, duplicate: Any) -> None:
        self.rank = rank
        self.existing = existing
        self.duplicate = duplicate
        super().__init__(
            f"Scope {duplicate!r} cannot use rank {rank}: already used by {existing!r}"
        )


class UnknownCandidateError(CatalogError, KeyError):
    """Raised when a candidate id is not part of the catalog."""

    def __init__(self, candidate_id: int) -> None:
        self.candidate_id = candidate_id
        super().__init__(f"No candidate with id {candidate_id}")

    def __str__(self) -> str:
        return self.message


class MappingReferenceError(ResolutionError):
    """Base exception for explicit by-name references to user mappings.

    Attributes:
        reference: The name that was looked up.
    """

    def __init__(self, reference: str, message: str) -> None:
        self.reference = reference
        super().__init__(message)


class UnknownMappingReferenceError(MappingReferenceError):
    """Raised when no user mapping has the referenced name."""

    def __init__(self, reference: str) -> None:
        super().__init__(reference, f"No user mapping named {reference!r}")


class AmbiguousMappingReferenceError(MappingReferenceError):
    """Raised when a referenced name matches more than one user mapping.

    Attributes:
        matches: Qualified names of every matching method.
    """

    def __init__(self, reference: str, matches: list[str]) -> None:
        self.matches = matches
        super().__init__(
            reference,
            f"Reference {reference!r} is ambiguous, it matches: {', '.join(matches)}; "
            "qualify it with the declaring mapper name",
        )
