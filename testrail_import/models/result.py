"""Models for result submission."""

from dataclasses import dataclass
from typing import Any

from pydantic import Field

from testrail_import.models.base import Model


class ResultPayload(Model):
    """Body of a TestRail ``add_result_for_case`` request."""

    status_id: int = Field(..., description="TestRail status ID")
    elapsed: str = Field(..., description="Elapsed time, e.g. '2s'")
    comment: str | None = Field(default=None, description="Result comment")

    def to_body(self) -> dict[str, Any]:
        """Serialize for the API, leaving out an absent comment."""
        return self.model_dump(exclude_none=True)


@dataclass(frozen=True, kw_only=True)
class SubmissionOutcome:
    """Recoverable outcome of submitting a single entry.

    ``error`` holds the API error message when the submission was
    rejected, and is None on success.
    """

    name: str
    case_id: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Whether the result was accepted."""
        return self.error is None
