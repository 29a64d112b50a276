"""Vesting evaluation for option grants."""

from ..schemas import OptionGrant, Vesting
from .dates import add_months, months_between


def vested_qty(as_of: str, total_qty: int, vesting: Vesting) -> int:
    """Quantity of ``total_qty`` vested under ``vesting`` as of ``as_of``.

    Nothing vests before the cliff (which also covers ``as_of`` preceding the
    vesting start, where the elapsed month count is negative). After the
    cliff the vested amount is the elapsed fraction of the schedule, capped
    at the full quantity and floored to a whole number.

    Args:
        as_of: Evaluation date (YYYY-MM-DD)
        total_qty: Total quantity subject to the schedule
        vesting: Schedule (start, months_total, cliff_months)

    Returns:
        Vested quantity, 0 <= result <= total_qty

    Raises:
        ValueError: If ``vesting.months_total`` is 0
        DateFormatError: If ``as_of`` or ``vesting.start`` is malformed

    Example:
        v = Vesting(start="2024-01-01", months_total=48, cliff_months=12)
        vested_qty("2024-12-31", 4800, v)  -> 0
        vested_qty("2025-01-01", 4800, v)  -> 1200
    """
    if vesting.months_total == 0:
        raise ValueError("Vesting months_total must be greater than 0")

    elapsed = months_between(as_of, vesting.start)
    if elapsed < vesting.cliff_months:
        return 0

    months = min(elapsed, vesting.months_total)
    # Integer arithmetic: floor(total * months / months_total) exactly
    return (total_qty * months) // vesting.months_total


def vested_options(grant: OptionGrant, as_of: str) -> int:
    """Vested options of a grant; a grant without a schedule is fully vested."""
    if grant.vesting is None:
        return grant.quantity
    return vested_qty(as_of, grant.quantity, grant.vesting)


def unvested_options(grant: OptionGrant, as_of: str) -> int:
    return grant.quantity - vested_options(grant, as_of)


def cliff_date(vesting: Vesting) -> str:
    """First date on which anything vests."""
    return add_months(vesting.start, vesting.cliff_months)


def fully_vested_date(vesting: Vesting) -> str:
    """First date on which the full quantity is vested."""
    return add_months(vesting.start, vesting.months_total)
