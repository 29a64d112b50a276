"""Base classes and type system for cap table records.

This module provides the foundational types, validators, and base classes
used throughout the record schema:

- ``DomainModel``: shared pydantic configuration (camelCase aliases so the
  record round-trips the persisted JSON key names)
- Closed tag enums (security kinds, entity types, conversion reasons, ...)
- Constrained scalar aliases (ids, dates, quantities, money, percentages)
"""

import re
from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# =============================================================================
# Base Model
# =============================================================================

class DomainModel(BaseModel):
    """Base class for all record and result models.

    Provides common configuration for all pydantic models in the engine:
    - Validation on assignment, so a CRUD layer editing a record in place
      cannot slip in an invalid value
    - camelCase aliases (``security_class_id`` <-> ``securityClassId``)
    - Population by either the field name or its alias
    """

    model_config = ConfigDict(
        validate_assignment=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


# =============================================================================
# Closed Tag Sets
# =============================================================================

class SecurityKind(str, Enum):
    """Kind of security class."""

    COMMON = "COMMON"
    PREF = "PREF"
    OPTION_POOL = "OPTION_POOL"


class EntityType(str, Enum):
    """Legal form of the company."""

    C_CORP = "C_CORP"
    S_CORP = "S_CORP"
    LLC = "LLC"


class StakeholderKind(str, Enum):
    person = "person"
    entity = "entity"


class SAFEType(str, Enum):
    """Whether a SAFE's valuation cap is pre-money or post-money."""

    pre = "pre"
    post = "post"


class ConversionReason(str, Enum):
    """Which candidate price a SAFE converted at."""

    price = "price"
    cap = "cap"
    discount = "discount"


class IssueSeverity(str, Enum):
    warning = "warning"
    info = "info"


# =============================================================================
# Format Validators
# =============================================================================

# Patterns are applied with fullmatch, so no anchors.

# prefix_identifier: lowercase prefix, single underscores between segments
_PREFIXED_ID_RE = re.compile(r"[a-z]+_[A-Za-z0-9-]+(?:_[A-Za-z0-9-]+)*")

_CURRENCY_RE = re.compile(r"[A-Z]{3}")

_EMAIL_RE = re.compile(
    r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?\.)+[A-Za-z]{2,}"
)


def _check_prefixed_id(value: str) -> str:
    if not _PREFIXED_ID_RE.fullmatch(value):
        raise ValueError(f"ID must be in format: prefix_identifier, got: {value!r}")
    return value


def _check_iso_date(value: str) -> str:
    # Imported lazily: calculations depends on the schemas package
    from ..calculations.dates import parse_date

    parse_date(value)
    return value


def _check_currency(value: str) -> str:
    if not _CURRENCY_RE.fullmatch(value):
        raise ValueError(f"Currency must be 3-letter uppercase ISO 4217 code, got: {value}")
    return value


def _check_email(value: str) -> str:
    if not _EMAIL_RE.fullmatch(value):
        raise ValueError(f"Invalid email address: {value}")
    return value


# =============================================================================
# Type Aliases - Identifiers and Dates
# =============================================================================

EntityId = Annotated[
    str,
    AfterValidator(_check_prefixed_id),
    Field(description="Prefixed identifier (e.g., 'sh_alice', 'sc_common', 'og_42')"),
]

ISODate = Annotated[
    str,
    AfterValidator(_check_iso_date),
    Field(description="Calendar date as YYYY-MM-DD (a trailing time component is ignored)"),
]

CurrencyCode = Annotated[str, AfterValidator(_check_currency)]

EmailAddress = Annotated[str, AfterValidator(_check_email)]


# =============================================================================
# Type Aliases - Numeric
# =============================================================================

ShareQuantity = Annotated[
    int,
    Field(gt=0, description="Number of shares or options (positive integer)")
]

MoneyAmount = Annotated[
    float,
    Field(ge=0, description="Currency amount (non-negative)")
]

Percentage = Annotated[
    float,
    Field(ge=0, le=1, description="Fraction between 0.0 and 1.0")
]


# =============================================================================
# ID Conventions
# =============================================================================
#
#   sh_     Stakeholder         "sh_alice", "sh_550e8400-e29b-41d4-..."
#   sc_     Security class      "sc_common", "sc_pool"
#   is_     Issuance            "is_001"
#   og_     Option grant        "og_test-123"
#   safe_   SAFE                "safe_ABC123"
#   val_    Valuation           "val_2024"
#
# The prefix is a convention only; references are resolved by exact id.
# =============================================================================
