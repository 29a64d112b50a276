"""Equity calculation engine.

Pure, deterministic functions over a ``CapTableRecord``:

- dates: calendar parsing and whole-month distances
- vesting: vested quantity of a grant at a date
- safe_pricer: SAFE conversion price and share count
- aggregator: point-in-time cap table
- validator: referential and business-rule checks
- capacity: remaining authorized / pool capacity before a mutation

None of these functions mutate the record, perform I/O, or keep state
between calls.

Usage:
    from captable_core.calculations import calc_cap, validate_extended

    result = validate_extended(record)
    if result.valid:
        cap_table = calc_cap(record, "2025-01-01")
"""

from .dates import (
    CalendarDate,
    parse_date,
    format_date,
    is_valid_date,
    months_between,
    add_months,
)
from .vesting import (
    vested_qty,
    vested_options,
    unvested_options,
    cliff_date,
    fully_vested_date,
)
from .safe_pricer import (
    convert_safe,
    current_outstanding_shares,
    simulate_conversions,
)
from .validator import (
    validate_extended,
    validate_schema,
    is_version_supported,
    ensure_supported_version,
)
from .aggregator import calc_cap
from .capacity import (
    issued_by_class,
    remaining_authorized,
    pool_capacity,
    ensure_can_issue,
    ensure_can_grant,
)

__all__ = [
    # Calendar
    "CalendarDate",
    "parse_date",
    "format_date",
    "is_valid_date",
    "months_between",
    "add_months",
    # Vesting
    "vested_qty",
    "vested_options",
    "unvested_options",
    "cliff_date",
    "fully_vested_date",
    # SAFE pricing
    "convert_safe",
    "current_outstanding_shares",
    "simulate_conversions",
    # Validation
    "validate_extended",
    "validate_schema",
    "is_version_supported",
    "ensure_supported_version",
    # Aggregation
    "calc_cap",
    # Capacity
    "issued_by_class",
    "remaining_authorized",
    "pool_capacity",
    "ensure_can_issue",
    "ensure_can_grant",
]
