"""SAFE conversion inputs and results."""

from typing import Optional

from pydantic import Field

from .base import ConversionReason, DomainModel, MoneyAmount


class RoundTerms(DomainModel):
    """Terms of the priced round a set of SAFEs converts into.

    If ``price_per_share`` is omitted it is derived as
    ``pre_money_valuation / current outstanding shares``.
    """

    pre_money_valuation: MoneyAmount
    price_per_share: Optional[float] = Field(default=None, gt=0)


class SAFEConversion(DomainModel):
    """Outcome of converting one SAFE.

    ``price`` is the effective conversion price per share, ``reason`` which
    candidate produced it, and ``shares`` the whole number of shares issued
    (``floor(investment_amount / price)``).
    """

    safe_id: str
    stakeholder_id: str
    stakeholder_name: str = ""
    investment_amount: float
    price: float
    reason: ConversionReason
    shares: int


class PoolCapacity(DomainModel):
    """Authorized, granted and remaining option capacity."""

    authorized: int
    granted: int
    remaining: int
