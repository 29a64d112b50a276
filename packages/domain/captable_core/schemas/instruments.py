"""Convertible instruments and valuation records.

SAFEs sit on the record until a priced round converts them; valuations are
kept for reference only (the engine schema-checks them but never computes
over them).
"""

from typing import Optional

from pydantic import Field

from .base import DomainModel, EntityId, ISODate, MoneyAmount, Percentage, SAFEType


# =============================================================================
# SAFE
# =============================================================================

class SAFE(DomainModel):
    """Simple Agreement for Future Equity.

    A SAFE converts into shares at the next priced round, at the cheapest of:
        * the round price
        * the cap price (valuation cap over the pre-conversion share count)
        * the discount price (round price times ``discount``)

    ``discount`` is the fraction of the round price the holder pays:
    0.8 means a 20% discount.

    Types:
        - pre: cap is a pre-money valuation
        - post: cap includes the SAFE's own converted shares

    A SAFE without cap or discount is allowed (it converts at the round
    price) but the validator reports it as a warning.

    Example:
        $100K SAFE, $4M cap, round at $2.00, 5M shares outstanding:
        cap price = $4M / 5M = $0.80 -> 125,000 shares
    """

    id: EntityId
    stakeholder_id: EntityId
    amount: MoneyAmount = Field(description="Amount invested")
    date: ISODate
    cap: Optional[float] = Field(default=None, gt=0, description="Valuation cap")
    discount: Optional[Percentage] = Field(
        default=None,
        description="Price multiplier applied to the round price (0.8 = 20% discount)"
    )
    safe_type: Optional[SAFEType] = Field(default=None, alias="type")
    note: Optional[str] = None

    @property
    def is_post_money(self) -> bool:
        return self.safe_type == SAFEType.post


# =============================================================================
# Valuation
# =============================================================================

class Valuation(DomainModel):
    """A recorded company valuation (409A, priced round, ...)."""

    id: EntityId
    date: ISODate
    valuation_type: str = Field(alias="type", description="e.g. '409a', 'priced_round'")
    pre_money: Optional[MoneyAmount] = None
    post_money: Optional[MoneyAmount] = None
    share_price: Optional[MoneyAmount] = None
    methodology: Optional[str] = None
    provider: Optional[str] = None
