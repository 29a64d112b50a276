"""Cap Table Core - equity calculation engine for startup capitalization records.

This package provides:
- A pydantic schema for the cap table record (stakeholders, security
  classes, issuances, option grants, SAFEs, valuations, audit trail)
- Calendar and vesting arithmetic
- SAFE conversion pricing
- Point-in-time cap table aggregation
- Referential and business-rule validation
- Report blocks that lay results out as pandas DataFrames

The engine is:
- Pure (functions read the record and return values; nothing is mutated)
- Deterministic (no dependence on clock, timezone or locale)
- Framework-agnostic (persistence, CLI and rendering live elsewhere)
"""

import logging

from .schemas import *  # noqa: F403, F401
from .errors import (  # noqa: F401
    CapTableError,
    DateFormatError,
    SchemaVersionError,
    ReferenceNotFoundError,
    CapacityExceededError,
    InvalidIssuanceTargetError,
)
from .config import EngineCFG, DEFAULT_ENGINE_CFG  # noqa: F401
from .calculations import (  # noqa: F401
    parse_date,
    format_date,
    months_between,
    vested_qty,
    convert_safe,
    calc_cap,
    validate_extended,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
