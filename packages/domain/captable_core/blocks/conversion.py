"""SAFE conversion simulation block."""

from typing import List

import pandas as pd

from ..calculations import simulate_conversions
from .base import Block, BlockContext

CONVERSION_COLUMNS = [
    "safe_id",
    "stakeholder_id",
    "stakeholder_name",
    "investment_amount",
    "price",
    "reason",
    "shares",
]


class SAFEConversionBlock(Block):
    """Converts every SAFE on the record at a proposed priced round.

    Inputs (from context):
        - record: CapTableRecord
        - round_terms: RoundTerms

    Outputs (to context):
        - safe_conversions: list of SAFEConversion
        - safe_conversions_table: DataFrame with columns CONVERSION_COLUMNS
          (``reason`` as its string tag)

    The record is not modified; converted shares are a what-if.
    """

    def __init__(self, record_key: str = "record", round_terms_key: str = "round_terms"):
        self.record_key = record_key
        self.round_terms_key = round_terms_key

    def inputs(self) -> List[str]:
        return [self.record_key, self.round_terms_key]

    def outputs(self) -> List[str]:
        return ["safe_conversions", "safe_conversions_table"]

    def execute(self, context: BlockContext) -> None:
        conversions = simulate_conversions(
            context.get(self.record_key),
            context.get(self.round_terms_key),
        )
        context.set("safe_conversions", conversions)

        table = pd.DataFrame(
            [c.model_dump(mode="json") for c in conversions],
            columns=CONVERSION_COLUMNS,
        )
        context.set("safe_conversions_table", table)
