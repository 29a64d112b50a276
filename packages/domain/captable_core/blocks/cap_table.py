"""Cap table computation block.

Runs the aggregator and lays its result out as DataFrames for the
presentation layer.

Output DataFrames:
- cap_table_ownership: one row per stakeholder with holdings
- cap_table_summary: single row of company-wide totals
"""

from typing import List

import pandas as pd

from ..calculations import calc_cap
from ..schemas import CapTableResult
from .base import Block, BlockContext

OWNERSHIP_COLUMNS = [
    "stakeholder_id",
    "name",
    "issued",
    "vested_options",
    "unvested_options",
    "outstanding",
    "pct_outstanding",
    "fully_diluted",
    "pct_fully_diluted",
]


class CapTableBlock(Block):
    """Computes the cap table for a record as of a date.

    Inputs (from context):
        - record: CapTableRecord
        - as_of_date: snapshot date (YYYY-MM-DD)

    Outputs (to context):
        - cap_table_result: the CapTableResult itself
        - cap_table_ownership: DataFrame with columns OWNERSHIP_COLUMNS,
          ordered by fully diluted holdings descending; percentages are
          fractions (1.0 = 100%)
        - cap_table_summary: single-row DataFrame with columns:
            * as_of_date
            * issued_total, vested_options, unvested_options, outstanding_total
            * fd_issued, fd_grants, fd_pool_remaining, fd_total
            * holders: number of rows in the ownership table

    Example:
        context = BlockContext()
        context.set("record", record)
        context.set("as_of_date", "2025-01-01")

        CapTableBlock().execute(context)
        context.get("cap_table_ownership").iloc[0]["pct_outstanding"]
    """

    def __init__(self, record_key: str = "record", as_of_key: str = "as_of_date"):
        self.record_key = record_key
        self.as_of_key = as_of_key

    def inputs(self) -> List[str]:
        return [self.record_key, self.as_of_key]

    def outputs(self) -> List[str]:
        return [
            "cap_table_result",
            "cap_table_ownership",
            "cap_table_summary",
        ]

    def execute(self, context: BlockContext) -> None:
        result = calc_cap(context.get(self.record_key), context.get(self.as_of_key))

        context.set("cap_table_result", result)
        context.set("cap_table_ownership", self._ownership(result))
        context.set("cap_table_summary", self._summary(result))

    def _ownership(self, result: CapTableResult) -> pd.DataFrame:
        if not result.rows:
            return pd.DataFrame(columns=OWNERSHIP_COLUMNS)
        return pd.DataFrame(
            [row.model_dump() for row in result.rows],
            columns=OWNERSHIP_COLUMNS,
        )

    def _summary(self, result: CapTableResult) -> pd.DataFrame:
        totals = result.totals
        return pd.DataFrame([{
            "as_of_date": result.as_of_date,
            "issued_total": totals.issued_total,
            "vested_options": totals.vested_options,
            "unvested_options": totals.unvested_options,
            "outstanding_total": totals.outstanding_total,
            "fd_issued": totals.fd.issued,
            "fd_grants": totals.fd.grants,
            "fd_pool_remaining": totals.fd.pool_remaining,
            "fd_total": totals.fd.total_fd,
            "holders": len(result.rows),
        }])
