"""Per-mapper settings for user mapping resolution."""

from pydantic import BaseModel, ConfigDict

from mapresolve.resolution.diagnostics import Severity


class ResolutionSettings(BaseModel):
    """Settings for one resolution pass.

    Settings are always passed explicitly, so independent passes (for example
    one per mapper in the same run) cannot interfere with each other.

    Example::

        settings = ResolutionSettings(
            auto_user_mappings=False, ambiguous_implicit_severity="warning"
        )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    auto_user_mappings: bool = True
    """Discover unmarked methods as user mappings automatically."""

    ambiguous_implicit_severity: Severity = Severity.INFO
    """Severity of the diagnostic for several candidates without a default."""
