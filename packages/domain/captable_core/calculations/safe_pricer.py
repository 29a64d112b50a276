"""SAFE conversion pricing.

All monetary arithmetic in the engine lives in this module. Prices, caps and
discounts are plain floats; share counts are always floored to integers.

Conversion price selection:
    1. Round price (clamped to ``cfg.min_conversion_price`` when <= 0)
    2. Cap price, when the SAFE has a cap and shares are outstanding:
        * pre-money:  cap / outstanding
        * post-money: (cap - amount) / outstanding, only if cap > amount.
          This is the closed form of price = cap / (outstanding + shares)
          with shares = amount / price, i.e. the SAFE's own shares are in
          the cap's denominator.
    3. Discount price: round price * discount (0.8 = 20% off)

The lowest candidate wins; on a tie the earlier candidate in the order above
is kept.

Example:
    $100K SAFE, $4M pre-money cap, 20% discount
    Round at $2.00/share, 5M shares outstanding

    Round price:    $2.00
    Cap price:      $4M / 5M = $0.80   <- lowest
    Discount price: $2.00 * 0.8 = $1.60

    Converts at $0.80 -> floor($100K / $0.80) = 125,000 shares (reason "cap")
"""

import logging
import math
from typing import List, Optional

from ..config import DEFAULT_ENGINE_CFG, EngineCFG
from ..schemas import (
    SAFE,
    CapTableRecord,
    ConversionReason,
    RoundTerms,
    SAFEConversion,
    SecurityKind,
)

logger = logging.getLogger(__name__)


def _cap_price(
    safe: SAFE, outstanding_shares: int, is_post_money: bool
) -> Optional[float]:
    """Cap-based price, or None when the cap does not bind."""
    if safe.cap is None or outstanding_shares <= 0:
        return None

    if is_post_money:
        numerator = safe.cap - safe.amount
        if numerator <= 0:
            return None
        price = numerator / outstanding_shares
    else:
        price = safe.cap / outstanding_shares

    return price if price > 0 else None


def convert_safe(
    safe: SAFE,
    round_price: float,
    outstanding_shares: int,
    is_post_money: Optional[bool] = None,
    cfg: Optional[EngineCFG] = None,
) -> SAFEConversion:
    """Convert one SAFE at a priced round.

    Args:
        safe: The SAFE being converted (only amount, cap and discount are used)
        round_price: Price per share paid by new money in the round
        outstanding_shares: Pre-conversion outstanding share count
        is_post_money: Treat the cap as post-money. None means use the
            SAFE's own ``type``.
        cfg: Engine configuration (price floor)

    Returns:
        SAFEConversion with the selected price, the reason it was selected,
        and ``shares = floor(amount / price)``. A zero-amount SAFE yields
        zero shares at whichever price would have won.
    """
    cfg = cfg or DEFAULT_ENGINE_CFG
    if is_post_money is None:
        is_post_money = safe.is_post_money

    base_price = round_price
    if base_price <= 0:
        # TODO: no documented business rule for the 1e-6 floor; pending
        # product-owner review of degenerate round prices
        base_price = cfg.min_conversion_price

    price = base_price
    reason = ConversionReason.price

    cap_price = _cap_price(safe, outstanding_shares, is_post_money)
    if cap_price is not None and cap_price < price:
        price = cap_price
        reason = ConversionReason.cap

    # Discounts <= 0 are a no-op; >= 1 inflate the price and never win
    if safe.discount is not None and safe.discount > 0:
        discount_price = base_price * safe.discount
        if discount_price < price:
            price = discount_price
            reason = ConversionReason.discount

    shares = math.floor(safe.amount / price)

    logger.debug(
        "SAFE %s converts at %.6f (%s): %d shares",
        safe.id, price, reason.value, shares,
    )

    return SAFEConversion(
        safe_id=safe.id,
        stakeholder_id=safe.stakeholder_id,
        investment_amount=safe.amount,
        price=price,
        reason=reason,
        shares=shares,
    )


def current_outstanding_shares(record: CapTableRecord) -> int:
    """Issued shares across existing non-pool classes (options excluded)."""
    classes = record.security_classes_by_id()
    total = 0
    for issuance in record.issuances:
        security_class = classes.get(issuance.security_class_id)
        if security_class is not None and security_class.kind != SecurityKind.OPTION_POOL:
            total += issuance.quantity
    return total


def simulate_conversions(
    record: CapTableRecord,
    round_terms: RoundTerms,
    cfg: Optional[EngineCFG] = None,
) -> List[SAFEConversion]:
    """Convert every SAFE on the record at the given round, without mutating it.

    The round price is ``round_terms.price_per_share`` or, when omitted,
    the pre-money valuation divided by current outstanding shares. Each SAFE
    uses its own pre/post-money type.

    Returns:
        One SAFEConversion per SAFE, in record order, with the stakeholder
        name filled in ("Unknown" for a dangling reference).
    """
    outstanding = current_outstanding_shares(record)

    if round_terms.price_per_share is not None:
        round_price = round_terms.price_per_share
    elif outstanding > 0:
        round_price = round_terms.pre_money_valuation / outstanding
    else:
        round_price = 0.0

    stakeholders = record.stakeholders_by_id()
    conversions = []
    for safe in record.safes:
        conversion = convert_safe(safe, round_price, outstanding, cfg=cfg)
        stakeholder = stakeholders.get(safe.stakeholder_id)
        conversion.stakeholder_name = stakeholder.name if stakeholder else "Unknown"
        conversions.append(conversion)

    logger.debug(
        "Simulated %d SAFE conversions at %.6f/share over %d outstanding",
        len(conversions), round_price, outstanding,
    )
    return conversions
