"""Engine configuration.

The engine has very few knobs: the window of record schema versions it will
process and the floor applied to degenerate round prices during SAFE
conversion. They are grouped in one configuration object so callers (and
tests) can pass an alternative explicitly instead of patching module state.
"""

from typing import List

from pydantic import ConfigDict, Field, model_validator

from .schemas.base import DomainModel


class EngineCFG(DomainModel):
    """Configuration shared by the calculation functions.

    Every public engine function accepts an optional ``cfg``; when omitted,
    ``DEFAULT_ENGINE_CFG`` is used.

    Example:
        cfg = EngineCFG(max_supported_version=2, current_schema_version=2)
        result = validate_extended(record, cfg=cfg)
    """

    model_config = ConfigDict(frozen=True)

    current_schema_version: int = Field(
        default=1,
        ge=1,
        description="Schema version written by the current release"
    )

    min_supported_version: int = Field(
        default=1,
        ge=1,
        description="Oldest record version the engine will process"
    )

    max_supported_version: int = Field(
        default=1,
        ge=1,
        description="Newest record version the engine will process"
    )

    min_conversion_price: float = Field(
        default=1e-6,
        gt=0,
        description="Floor applied to a round price <= 0 before SAFE price comparison"
    )

    @model_validator(mode='after')
    def validate_version_window(self):
        """Current version must sit inside [min, max]."""
        if not (
            self.min_supported_version
            <= self.current_schema_version
            <= self.max_supported_version
        ):
            raise ValueError(
                "current_schema_version must be between min_supported_version "
                "and max_supported_version"
            )
        return self


DEFAULT_ENGINE_CFG = EngineCFG()


class SchemaVersion(DomainModel):
    """One entry in the record schema history."""

    version: int
    release_date: str
    breaking: bool
    changes: List[str]


SCHEMA_VERSIONS: List[SchemaVersion] = [
    SchemaVersion(
        version=1,
        release_date="2024-01-01",
        breaking=False,
        changes=[
            "Initial schema version",
            "Support for stakeholders, securities, issuances, options, and SAFEs",
            "Basic validation rules",
        ],
    ),
]
