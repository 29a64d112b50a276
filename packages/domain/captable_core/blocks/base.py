"""Block pipeline primitives.

A report is assembled from small computation blocks. Each block names the
context keys it reads and writes; the executor orders blocks so every input
is produced before it is consumed, runs them, and checks that each block
delivered what it promised.

- BlockContext: key/value store shared by the blocks of one run
- Block: abstract computation unit
- resolve_order: dependency ordering (Kahn's algorithm)
- BlockExecutor: ordered execution with input/output checks
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


# =============================================================================
# Block Context
# =============================================================================

@dataclass
class BlockContext:
    """Values passed between blocks during one run.

    Example:
        context = BlockContext()
        context.set("record", record)
        context.set("as_of_date", "2025-01-01")

        CapTableBlock().execute(context)
        ownership_df = context.get("cap_table_ownership")
    """

    _values: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str) -> Any:
        """Return the value stored under ``key``.

        Raises:
            KeyError: If nothing was stored under ``key``
        """
        try:
            return self._values[key]
        except KeyError:
            raise KeyError(
                f"Key '{key}' not found in context. Available keys: {self.keys()}"
            ) from None

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def has(self, key: str) -> bool:
        return key in self._values

    def keys(self) -> List[str]:
        return list(self._values)


# =============================================================================
# Block Base Class
# =============================================================================

class Block(ABC):
    """A computation unit with declared inputs and outputs.

    Subclass example:
        class OutstandingTotalBlock(Block):
            def inputs(self) -> List[str]:
                return ["cap_table_result"]

            def outputs(self) -> List[str]:
                return ["outstanding_total"]

            def execute(self, context: BlockContext) -> None:
                result = context.get("cap_table_result")
                context.set("outstanding_total", result.totals.outstanding_total)
    """

    @abstractmethod
    def inputs(self) -> List[str]:
        """Context keys this block reads."""
        pass

    @abstractmethod
    def outputs(self) -> List[str]:
        """Context keys this block writes."""
        pass

    @abstractmethod
    def execute(self, context: BlockContext) -> None:
        """Read inputs from ``context``, compute, write outputs to ``context``."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(inputs={self.inputs()}, outputs={self.outputs()})"


# =============================================================================
# Dependency Resolution
# =============================================================================

class CircularDependencyError(Exception):
    """Raised when blocks depend on each other in a cycle."""
    pass


def resolve_order(blocks: List[Block]) -> List[Block]:
    """Order blocks so that producers run before their consumers.

    Inputs not produced by any block are expected in the initial context.
    Blocks with no dependency between them keep their given order.

    Raises:
        ValueError: Two blocks declare the same output
        CircularDependencyError: The dependency graph has a cycle
    """
    producers: Dict[str, Block] = {}
    for block in blocks:
        for key in block.outputs():
            if key in producers:
                raise ValueError(
                    f"Multiple blocks produce '{key}': {producers[key]} and {block}"
                )
            producers[key] = block

    pending: Dict[int, int] = {id(block): 0 for block in blocks}
    consumers: Dict[int, List[Block]] = {id(block): [] for block in blocks}
    for block in blocks:
        for key in block.inputs():
            producer = producers.get(key)
            if producer is not None:
                consumers[id(producer)].append(block)
                pending[id(block)] += 1

    ready = deque(block for block in blocks if pending[id(block)] == 0)
    ordered: List[Block] = []
    while ready:
        block = ready.popleft()
        ordered.append(block)
        for consumer in consumers[id(block)]:
            pending[id(consumer)] -= 1
            if pending[id(consumer)] == 0:
                ready.append(consumer)

    if len(ordered) != len(blocks):
        stuck = [block for block in blocks if pending[id(block)] > 0]
        raise CircularDependencyError(f"Circular dependency detected among blocks: {stuck}")

    return ordered


# =============================================================================
# Block Executor
# =============================================================================

class BlockExecutor:
    """Runs blocks in dependency order.

    Example:
        context = BlockContext()
        context.set("record", record)
        context.set("as_of_date", "2025-01-01")

        BlockExecutor([ValidationBlock(), CapTableBlock()]).execute(context)

        context.get("validation_issues")
        context.get("cap_table_summary")
    """

    def __init__(self, blocks: List[Block]):
        self.blocks = blocks
        self._ordered: Optional[List[Block]] = None

    def execute(self, context: BlockContext) -> BlockContext:
        """Execute every block and return the (same) context.

        Raises:
            CircularDependencyError: Blocks depend on each other in a cycle
            KeyError: A block's input is missing when it is about to run
            ValueError: A block did not write one of its declared outputs
        """
        if self._ordered is None:
            self._ordered = resolve_order(self.blocks)

        for block in self._ordered:
            missing = [key for key in block.inputs() if not context.has(key)]
            if missing:
                raise KeyError(
                    f"Block {block} requires input '{missing[0]}' but it's not in context. "
                    f"Available keys: {context.keys()}"
                )

            logger.debug("Executing %r", block)
            block.execute(context)

            for key in block.outputs():
                if not context.has(key):
                    raise ValueError(
                        f"Block {block} declared output '{key}' but didn't write it to context"
                    )

        return context
