"""Tests for blocks architecture.

Tests cover:
- BlockContext get/set/has operations
- Dependency ordering
- BlockExecutor validation and execution
- CapTableBlock, SAFEConversionBlock, ValidationBlock integration
"""

import pytest

from captable_core.blocks import (
    Block,
    BlockContext,
    BlockExecutor,
    CapTableBlock,
    SAFEConversionBlock,
    ValidationBlock,
)
from captable_core.blocks.base import CircularDependencyError, resolve_order
from captable_core.schemas import (
    SAFE,
    CapTableRecord,
    Company,
    Issuance,
    OptionGrant,
    RoundTerms,
    SecurityClass,
    Stakeholder,
    Vesting,
)


def _record() -> CapTableRecord:
    return CapTableRecord(
        version=1,
        company=Company(id="comp_test", name="Test Corp", formation_date="2024-01-01"),
        stakeholders=[
            Stakeholder(id="sh_alice", name="Alice"),
            Stakeholder(id="sh_bob", name="Bob"),
            Stakeholder(id="sh_carol", name="Carol"),
            Stakeholder(id="sh_angel", name="Angel Fund", type="entity"),
        ],
        security_classes=[
            SecurityClass(id="sc_common", kind="COMMON", label="Common Stock", authorized=10_000_000),
            SecurityClass(id="sc_pool", kind="OPTION_POOL", label="2024 Plan", authorized=1_000_000),
        ],
        issuances=[
            Issuance(
                id="is_1", stakeholder_id="sh_alice", security_class_id="sc_common",
                quantity=4_000_000, date="2024-01-01",
            ),
            Issuance(
                id="is_2", stakeholder_id="sh_bob", security_class_id="sc_common",
                quantity=1_000_000, date="2024-01-01",
            ),
        ],
        option_grants=[
            OptionGrant(
                id="og_1", stakeholder_id="sh_carol", quantity=480_000,
                exercise_price=0.1, grant_date="2024-01-01",
                vesting=Vesting(start="2024-01-01", months_total=48, cliff_months=12),
            ),
        ],
        safes=[
            SAFE(id="safe_1", stakeholder_id="sh_angel", amount=100_000,
                 date="2024-03-01", cap=4_000_000),
        ],
    )


# =============================================================================
# BlockContext Tests
# =============================================================================

def test_block_context_get_set():
    """Test basic get/set operations."""
    context = BlockContext()
    context.set("key1", "value1")
    assert context.get("key1") == "value1"


def test_block_context_has():
    context = BlockContext()
    assert not context.has("key1")
    context.set("key1", "value1")
    assert context.has("key1")


def test_block_context_keys():
    context = BlockContext()
    context.set("key1", "value1")
    context.set("key2", "value2")
    assert set(context.keys()) == {"key1", "key2"}


def test_block_context_get_missing_key():
    """Test that getting missing key raises KeyError."""
    context = BlockContext()
    with pytest.raises(KeyError, match="Key 'missing' not found"):
        context.get("missing")


# =============================================================================
# Dependency Ordering Tests
# =============================================================================

class SimpleBlock(Block):
    """Block that writes a marker string to each of its outputs."""

    def __init__(self, name, inputs, outputs):
        self.name = name
        self._inputs = inputs
        self._outputs = outputs

    def inputs(self):
        return self._inputs

    def outputs(self):
        return self._outputs

    def execute(self, context):
        for output in self._outputs:
            context.set(output, f"{self.name}_output")

    def __repr__(self):
        return f"SimpleBlock({self.name})"


def test_resolve_order_linear_chain():
    """Test ordering a chain given in reverse: A -> B -> C."""
    block_a = SimpleBlock("A", [], ["data_a"])
    block_b = SimpleBlock("B", ["data_a"], ["data_b"])
    block_c = SimpleBlock("C", ["data_b"], ["data_c"])

    assert resolve_order([block_c, block_a, block_b]) == [block_a, block_b, block_c]


def test_resolve_order_keeps_independent_blocks_in_place():
    block_a = SimpleBlock("A", [], ["data_a"])
    block_b = SimpleBlock("B", ["data_a"], ["data_b"])
    block_c = SimpleBlock("C", ["data_a"], ["data_c"])

    assert resolve_order([block_c, block_b, block_a]) == [block_a, block_c, block_b]


def test_resolve_order_circular_dependency():
    block_a = SimpleBlock("A", ["data_c"], ["data_a"])
    block_b = SimpleBlock("B", ["data_a"], ["data_b"])
    block_c = SimpleBlock("C", ["data_b"], ["data_c"])

    with pytest.raises(CircularDependencyError, match="Circular dependency detected"):
        resolve_order([block_a, block_b, block_c])


def test_resolve_order_duplicate_output():
    block_a = SimpleBlock("A", [], ["data_a"])
    block_b = SimpleBlock("B", [], ["data_a"])

    with pytest.raises(ValueError, match="Multiple blocks produce"):
        resolve_order([block_a, block_b])


def test_resolve_order_external_inputs():
    """Test that inputs without a producer are left to the initial context."""
    block_a = SimpleBlock("A", ["record"], ["data_a"])
    block_b = SimpleBlock("B", ["data_a"], ["data_b"])

    assert resolve_order([block_b, block_a]) == [block_a, block_b]


# =============================================================================
# BlockExecutor Tests
# =============================================================================

def test_block_executor_simple_chain():
    block_a = SimpleBlock("A", [], ["data_a"])
    block_b = SimpleBlock("B", ["data_a"], ["data_b"])

    context = BlockExecutor([block_b, block_a]).execute(BlockContext())

    assert context.get("data_a") == "A_output"
    assert context.get("data_b") == "B_output"


def test_block_executor_missing_input():
    executor = BlockExecutor([SimpleBlock("A", ["missing_input"], ["output"])])

    with pytest.raises(KeyError, match="requires input 'missing_input'"):
        executor.execute(BlockContext())


def test_block_executor_missing_output():
    class BadBlock(Block):
        def inputs(self):
            return []

        def outputs(self):
            return ["output"]

        def execute(self, context):
            pass

    with pytest.raises(ValueError, match="declared output 'output' but didn't write"):
        BlockExecutor([BadBlock()]).execute(BlockContext())


# =============================================================================
# CapTableBlock Integration Tests
# =============================================================================

def test_cap_table_block_basic():
    context = BlockContext()
    context.set("record", _record())
    context.set("as_of_date", "2025-01-01")

    CapTableBlock().execute(context)

    ownership_df = context.get("cap_table_ownership")
    assert list(ownership_df["stakeholder_id"]) == ["sh_alice", "sh_bob", "sh_carol"]
    assert ownership_df.iloc[0]["outstanding"] == 4_000_000
    assert ownership_df.iloc[2]["vested_options"] == 120_000
    assert ownership_df.iloc[2]["unvested_options"] == 360_000
    assert ownership_df["pct_outstanding"].sum() == pytest.approx(1.0)

    summary_df = context.get("cap_table_summary")
    assert len(summary_df) == 1
    assert summary_df.iloc[0]["outstanding_total"] == 5_120_000
    assert summary_df.iloc[0]["fd_pool_remaining"] == 520_000
    assert summary_df.iloc[0]["fd_total"] == 6_000_000
    assert summary_df.iloc[0]["holders"] == 3

    assert context.get("cap_table_result").totals.fd.grants == 480_000


def test_cap_table_block_empty_record():
    context = BlockContext()
    context.set("record", CapTableRecord(version=1, company=Company(id="comp_test", name="Test")))
    context.set("as_of_date", "2025-01-01")

    CapTableBlock().execute(context)

    ownership_df = context.get("cap_table_ownership")
    assert ownership_df.empty
    assert "pct_fully_diluted" in ownership_df.columns


# =============================================================================
# SAFEConversionBlock Integration Tests
# =============================================================================

def test_safe_conversion_block():
    context = BlockContext()
    context.set("record", _record())
    context.set("round_terms", RoundTerms(pre_money_valuation=10_000_000))

    SAFEConversionBlock().execute(context)

    table = context.get("safe_conversions_table")
    assert len(table) == 1
    row = table.iloc[0]
    assert row["stakeholder_name"] == "Angel Fund"
    assert row["reason"] == "cap"
    # Round price 10M / 5M = 2.00; cap price 4M / 5M = 0.80
    assert row["price"] == 0.8
    assert row["shares"] == 125_000

    assert len(context.get("safe_conversions")) == 1


# =============================================================================
# ValidationBlock Integration Tests
# =============================================================================

def test_validation_block_clean_record():
    context = BlockContext()
    context.set("record", _record())

    ValidationBlock().execute(context)

    assert context.get("validation_result").valid
    assert context.get("validation_issues").empty


def test_validation_block_errors_then_warnings():
    record = _record()
    record.stakeholders.append(Stakeholder(id="sh_idle", name="Idle"))
    record.option_grants.append(
        OptionGrant(
            id="og_2", stakeholder_id="sh_ghost", quantity=600_000,
            exercise_price=0.1, grant_date="2024-01-01",
        )
    )

    context = BlockContext()
    context.set("record", record)
    ValidationBlock().execute(context)

    issues = context.get("validation_issues")
    assert list(issues.columns) == ["severity", "path", "message"]
    assert list(issues["severity"]) == ["error", "error", "info"]
    assert issues.iloc[2]["path"] == "stakeholder.sh_idle"


# =============================================================================
# Full pipeline
# =============================================================================

def test_full_pipeline():
    """Test all report blocks run together from one context."""
    context = BlockContext()
    context.set("record", _record())
    context.set("as_of_date", "2025-01-01")
    context.set("round_terms", RoundTerms(pre_money_valuation=10_000_000, price_per_share=2.0))

    BlockExecutor([SAFEConversionBlock(), CapTableBlock(), ValidationBlock()]).execute(context)

    for key in (
        "cap_table_ownership",
        "cap_table_summary",
        "safe_conversions_table",
        "validation_issues",
    ):
        assert context.has(key)
