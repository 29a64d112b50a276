"""Validator result models."""

from typing import List

from pydantic import Field

from .base import DomainModel, IssueSeverity


class ValidationIssue(DomainModel):
    """A non-fatal finding: ``path`` locates the offending entity."""

    path: str
    message: str
    severity: IssueSeverity = IssueSeverity.warning


class ValidationResult(DomainModel):
    """Outcome of a validation pass.

    ``valid`` is True iff ``errors`` is empty; warnings never affect it.
    """

    valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)
