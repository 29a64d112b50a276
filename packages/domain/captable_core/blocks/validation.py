"""Validation block."""

from typing import List

import pandas as pd

from ..calculations import validate_extended
from .base import Block, BlockContext

ISSUE_COLUMNS = ["severity", "path", "message"]


class ValidationBlock(Block):
    """Validates the record and tabulates every finding.

    Inputs (from context):
        - record: CapTableRecord (or raw record data)

    Outputs (to context):
        - validation_result: ValidationResult
        - validation_issues: DataFrame with columns severity/path/message.
          Fatal errors come first with severity "error" and an empty path
          (their message carries the location); warnings follow with their
          own severity ("warning" or "info").
    """

    def __init__(self, record_key: str = "record"):
        self.record_key = record_key

    def inputs(self) -> List[str]:
        return [self.record_key]

    def outputs(self) -> List[str]:
        return ["validation_result", "validation_issues"]

    def execute(self, context: BlockContext) -> None:
        result = validate_extended(context.get(self.record_key))
        context.set("validation_result", result)

        rows = [{"severity": "error", "path": "", "message": e} for e in result.errors]
        rows.extend(
            {"severity": w.severity.value, "path": w.path, "message": w.message}
            for w in result.warnings
        )
        context.set("validation_issues", pd.DataFrame(rows, columns=ISSUE_COLUMNS))
