"""Cap table result models.

A ``CapTableResult`` is the point-in-time ownership snapshot produced by the
aggregator. It is derived, never persisted, and recomputed from the record
on every call.
"""

from typing import List

from pydantic import Field

from .base import DomainModel


class CapTableRow(DomainModel):
    """One stakeholder's position as of the snapshot date.

    Key distinction:
        - outstanding: issued shares + vested options
        - fully_diluted: issued shares + every granted option, vested or not
    """

    stakeholder_id: str
    name: str
    issued: int = 0
    vested_options: int = 0
    unvested_options: int = 0
    outstanding: int = 0
    pct_outstanding: float = 0.0
    fully_diluted: int = 0
    pct_fully_diluted: float = 0.0


class FullyDilutedBreakdown(DomainModel):
    """Composition of the fully diluted share count.

    ``pool_remaining`` is pool authorized minus all granted options and is
    allowed to go negative when the pool is over-granted (the validator
    reports that case as an error).
    """

    issued: int = 0
    grants: int = 0
    pool_remaining: int = 0
    total_fd: int = 0


class CapTableTotals(DomainModel):
    issued_total: int = 0
    vested_options: int = 0
    unvested_options: int = 0
    outstanding_total: int = 0
    fd: FullyDilutedBreakdown = Field(default_factory=FullyDilutedBreakdown)


class CapTableResult(DomainModel):
    """Point-in-time cap table.

    Usage:
        result = calc_cap(record, "2025-01-01")
        for row in result.rows:
            print(row.name, row.pct_fully_diluted)
        result.totals.fd.total_fd
    """

    as_of_date: str
    rows: List[CapTableRow] = Field(default_factory=list)
    totals: CapTableTotals = Field(default_factory=CapTableTotals)

    def get_row(self, stakeholder_id: str):
        """Return the row for a stakeholder, or None if it has no holdings."""
        return next((r for r in self.rows if r.stakeholder_id == stakeholder_id), None)
