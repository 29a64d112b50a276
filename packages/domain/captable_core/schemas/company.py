"""Company and stakeholder models.

A stakeholder never owns equity records directly; issuances, grants and
SAFEs point back to it through ``stakeholder_id``.
"""

from typing import Optional

from pydantic import Field

from .base import (
    CurrencyCode,
    DomainModel,
    EmailAddress,
    EntityId,
    EntityType,
    ISODate,
    StakeholderKind,
)


class Company(DomainModel):
    """The company whose capitalization the record describes.

    Immutable after creation except for administrative edits (name,
    jurisdiction). ``formation_date`` anchors the chronology warnings raised
    by the validator.
    """

    id: EntityId
    name: str = Field(min_length=1, description="Legal name")
    formation_date: Optional[ISODate] = None
    entity_type: Optional[EntityType] = None
    jurisdiction: Optional[str] = None
    currency: Optional[CurrencyCode] = Field(
        default=None,
        description="ISO 4217 reporting currency (format-checked only)"
    )


class Stakeholder(DomainModel):
    """A person or entity that can hold equity."""

    id: EntityId
    name: str = Field(min_length=1, description="Display name")
    email: Optional[EmailAddress] = None
    kind: StakeholderKind = Field(
        default=StakeholderKind.person,
        alias="type",
    )
