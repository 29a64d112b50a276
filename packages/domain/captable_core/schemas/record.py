"""The cap table record - root aggregate of all capitalization data.

The record is what the persistence collaborator loads and saves as JSON.
The engine only ever reads it: CRUD handlers append entities, then call the
aggregator or validator before persisting.

Loading and dumping uses the persisted (camelCase) key names:

    record = CapTableRecord.model_validate(json.loads(text))
    text = record.model_dump_json(by_alias=True, exclude_none=True)
"""

from typing import Dict, List, Optional

from pydantic import Field

from .audit import AuditEntry
from .base import DomainModel, SecurityKind
from .company import Company, Stakeholder
from .equity import Issuance, OptionGrant
from .instruments import SAFE, Valuation
from .security_classes import SecurityClass


class CapTableRecord(DomainModel):
    """All capitalization data for one company.

    Cross-entity rules (references resolve, capacity is respected, ids are
    unique) are NOT enforced on construction - a record can be loaded in an
    inconsistent state and inspected. Run ``validate_extended`` to find
    problems.

    Example:
        record = CapTableRecord(
            version=1,
            company=Company(id="comp_acme", name="Acme Inc."),
            stakeholders=[Stakeholder(id="sh_alice", name="Alice")],
            security_classes=[SecurityClass(
                id="sc_common", kind="COMMON", label="Common", authorized=10_000_000
            )],
            issuances=[Issuance(
                id="is_1", stakeholder_id="sh_alice", security_class_id="sc_common",
                quantity=7_000_000, date="2024-01-01"
            )],
        )
    """

    version: int = Field(description="Record schema version")
    company: Company
    stakeholders: List[Stakeholder] = Field(default_factory=list)
    security_classes: List[SecurityClass] = Field(default_factory=list)
    issuances: List[Issuance] = Field(default_factory=list)
    option_grants: List[OptionGrant] = Field(default_factory=list)
    safes: List[SAFE] = Field(default_factory=list)
    valuations: List[Valuation] = Field(default_factory=list)
    audit: List[AuditEntry] = Field(default_factory=list)

    def stakeholders_by_id(self) -> Dict[str, Stakeholder]:
        """Index stakeholders by id (last one wins on duplicates)."""
        return {s.id: s for s in self.stakeholders}

    def security_classes_by_id(self) -> Dict[str, SecurityClass]:
        """Index security classes by id (last one wins on duplicates)."""
        return {sc.id: sc for sc in self.security_classes}

    def get_stakeholder(self, stakeholder_id: str) -> Optional[Stakeholder]:
        return next((s for s in self.stakeholders if s.id == stakeholder_id), None)

    def get_security_class(self, security_class_id: str) -> Optional[SecurityClass]:
        return next(
            (sc for sc in self.security_classes if sc.id == security_class_id), None
        )

    def option_pools(self) -> List[SecurityClass]:
        return [sc for sc in self.security_classes if sc.kind == SecurityKind.OPTION_POOL]

    def classes_of_kind(self, kind: SecurityKind) -> List[SecurityClass]:
        return [sc for sc in self.security_classes if sc.kind == kind]
