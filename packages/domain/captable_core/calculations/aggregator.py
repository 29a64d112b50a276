"""Cap table aggregation.

Turns a record into a point-in-time ownership snapshot. Everything is
re-derived from the record on every call; the record is never mutated and
nothing is cached.

Definitions (per stakeholder and in total):
    outstanding   = issued shares + vested options
    fully diluted = issued shares + all granted options
    total FD      = issued + granted + pool remaining
    pool remaining = sum(pool authorized) - granted   (may be negative)

The aggregator does not run the validator. Dangling references are handled
leniently: issuances into unknown (or pool) classes are skipped, and rows for
unknown stakeholders fall back to the id as their name.
"""

import logging
from typing import Dict, Optional

from ..config import DEFAULT_ENGINE_CFG, EngineCFG
from ..schemas import (
    CapTableRecord,
    CapTableResult,
    CapTableRow,
    CapTableTotals,
    FullyDilutedBreakdown,
    SecurityKind,
)
from .dates import parse_date
from .validator import ensure_supported_version
from .vesting import vested_options

logger = logging.getLogger(__name__)


def calc_cap(
    record: CapTableRecord,
    as_of: str,
    cfg: Optional[EngineCFG] = None,
) -> CapTableResult:
    """Compute the cap table as of ``as_of``.

    Args:
        record: Cap table record (read only)
        as_of: Snapshot date (YYYY-MM-DD); drives vesting only
        cfg: Engine configuration (supported schema versions)

    Returns:
        CapTableResult with one row per stakeholder holding anything
        (non-zero outstanding or fully diluted), sorted by fully diluted
        holdings descending, and company-wide totals.

    Raises:
        SchemaVersionError: Record version outside the supported window
        DateFormatError: Malformed ``as_of``

    Example:
        One founder holding 7M of a 10M-authorized common class:
            result = calc_cap(record, "2025-01-01")
            result.rows[0].outstanding      -> 7_000_000
            result.rows[0].pct_outstanding  -> 1.0
    """
    cfg = cfg or DEFAULT_ENGINE_CFG
    ensure_supported_version(record.version, cfg)
    parse_date(as_of)

    classes = record.security_classes_by_id()
    stakeholders = record.stakeholders_by_id()

    # Insertion order = first appearance; the final sort is stable
    rows: Dict[str, CapTableRow] = {}

    def row_for(stakeholder_id: str) -> CapTableRow:
        if stakeholder_id not in rows:
            stakeholder = stakeholders.get(stakeholder_id)
            rows[stakeholder_id] = CapTableRow(
                stakeholder_id=stakeholder_id,
                name=stakeholder.name if stakeholder else stakeholder_id,
            )
        return rows[stakeholder_id]

    # Step 1: issued shares
    issued_total = 0
    for issuance in record.issuances:
        security_class = classes.get(issuance.security_class_id)
        if security_class is None or security_class.kind == SecurityKind.OPTION_POOL:
            continue
        row = row_for(issuance.stakeholder_id)
        row.issued += issuance.quantity
        issued_total += issuance.quantity

    # Step 2: option grants
    grants_total = 0
    vested_total = 0
    unvested_total = 0
    for grant in record.option_grants:
        vested = vested_options(grant, as_of)
        unvested = grant.quantity - vested
        row = row_for(grant.stakeholder_id)
        row.vested_options += vested
        row.unvested_options += unvested
        grants_total += grant.quantity
        vested_total += vested
        unvested_total += unvested

    # Step 3: company totals
    pool_authorized = sum(pool.authorized for pool in record.option_pools())
    pool_remaining = pool_authorized - grants_total
    outstanding_total = issued_total + vested_total
    total_fd = issued_total + grants_total + pool_remaining

    # Step 4: per-stakeholder figures and percentages
    result_rows = []
    for row in rows.values():
        row.outstanding = row.issued + row.vested_options
        row.fully_diluted = row.issued + row.vested_options + row.unvested_options
        if row.outstanding == 0 and row.fully_diluted == 0:
            continue
        row.pct_outstanding = row.outstanding / outstanding_total if outstanding_total else 0.0
        row.pct_fully_diluted = row.fully_diluted / total_fd if total_fd else 0.0
        result_rows.append(row)

    result_rows.sort(key=lambda r: r.fully_diluted, reverse=True)

    totals = CapTableTotals(
        issued_total=issued_total,
        vested_options=vested_total,
        unvested_options=unvested_total,
        outstanding_total=outstanding_total,
        fd=FullyDilutedBreakdown(
            issued=issued_total,
            grants=grants_total,
            pool_remaining=pool_remaining,
            total_fd=total_fd,
        ),
    )

    logger.debug(
        "Cap table as of %s: %d rows, outstanding=%d, fully diluted=%d",
        as_of, len(result_rows), outstanding_total, total_fd,
    )

    return CapTableResult(as_of_date=as_of, rows=result_rows, totals=totals)
