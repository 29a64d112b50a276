"""Cap table record schemas.

This package contains all pydantic models for the engine:
- Base types and conventions
- Company, stakeholders and security classes
- Issuances, option grants and vesting schedules
- SAFEs and valuations
- The record root aggregate
- Derived results (cap table, SAFE conversions, validation)

Usage:
    from captable_core.schemas import (
        CapTableRecord, Stakeholder, SecurityClass, Issuance,
        OptionGrant, Vesting, SAFE, CapTableResult
    )
"""

# Base types
from .base import (
    DomainModel,
    SecurityKind,
    EntityType,
    StakeholderKind,
    SAFEType,
    ConversionReason,
    IssueSeverity,
    EntityId,
    ISODate,
    CurrencyCode,
    EmailAddress,
    ShareQuantity,
    MoneyAmount,
    Percentage,
)

# Entities
from .company import Company, Stakeholder
from .security_classes import SecurityClass
from .equity import Issuance, Vesting, OptionGrant
from .instruments import SAFE, Valuation
from .audit import AuditEntry

# Root aggregate
from .record import CapTableRecord

# Derived results
from .cap_table import (
    CapTableRow,
    CapTableTotals,
    FullyDilutedBreakdown,
    CapTableResult,
)
from .conversion import RoundTerms, SAFEConversion, PoolCapacity
from .validation import ValidationIssue, ValidationResult

__all__ = [
    # Base types
    "DomainModel",
    "SecurityKind",
    "EntityType",
    "StakeholderKind",
    "SAFEType",
    "ConversionReason",
    "IssueSeverity",
    "EntityId",
    "ISODate",
    "CurrencyCode",
    "EmailAddress",
    "ShareQuantity",
    "MoneyAmount",
    "Percentage",
    # Entities
    "Company",
    "Stakeholder",
    "SecurityClass",
    "Issuance",
    "Vesting",
    "OptionGrant",
    "SAFE",
    "Valuation",
    "AuditEntry",
    # Root aggregate
    "CapTableRecord",
    # Results
    "CapTableRow",
    "CapTableTotals",
    "FullyDilutedBreakdown",
    "CapTableResult",
    "RoundTerms",
    "SAFEConversion",
    "PoolCapacity",
    "ValidationIssue",
    "ValidationResult",
]
