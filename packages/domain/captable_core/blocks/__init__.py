"""Report blocks for cap table analysis.

This package wraps the calculation engine in composable blocks that emit
pandas DataFrames for whatever renders them (tables, CSV, spreadsheets).

Architecture:
    Record (schemas) -> Engine (calculations) -> Blocks -> DataFrames

Available blocks:
- CapTableBlock: ownership table and totals as of a date
- SAFEConversionBlock: what-if conversion of every SAFE at a priced round
- ValidationBlock: validation findings as a table

Usage:
    from captable_core.blocks import BlockContext, BlockExecutor, CapTableBlock

    context = BlockContext()
    context.set("record", record)
    context.set("as_of_date", "2025-01-01")
    BlockExecutor([CapTableBlock()]).execute(context)

    ownership_df = context.get("cap_table_ownership")
"""

from .base import Block, BlockExecutor, BlockContext, CircularDependencyError, resolve_order
from .cap_table import CapTableBlock
from .conversion import SAFEConversionBlock
from .validation import ValidationBlock

__all__ = [
    "Block",
    "BlockExecutor",
    "BlockContext",
    "CircularDependencyError",
    "resolve_order",
    "CapTableBlock",
    "SAFEConversionBlock",
    "ValidationBlock",
]
