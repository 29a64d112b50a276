"""Audit trail entries.

The record's audit list is append-only; entries are written by the audit
collaborator after successful mutations and are never read by the engine.
"""

from typing import Any

from pydantic import Field

from .base import DomainModel


class AuditEntry(DomainModel):
    timestamp: str = Field(alias="ts", description="ISO 8601 timestamp")
    actor: str = Field(alias="by")
    action: str
    data: Any = None
