"""Capacity queries used before mutating a record.

The CRUD layer calls ``ensure_can_issue`` / ``ensure_can_grant`` before
appending an issuance or grant, so capacity violations fail the mutation
instead of landing in the record. The validator re-checks the same limits
over the whole record.

Option grants are not linked to a specific pool: every grant draws on the
combined authorization of all OPTION_POOL classes. With more than one pool,
the per-pool view in ``pool_capacity(record, pool_id)`` therefore compares a
single pool against all grants.
"""

from typing import Optional

from ..errors import CapacityExceededError, InvalidIssuanceTargetError, ReferenceNotFoundError
from ..schemas import CapTableRecord, PoolCapacity, SecurityClass, SecurityKind


def _require_class(record: CapTableRecord, security_class_id: str) -> SecurityClass:
    security_class = record.get_security_class(security_class_id)
    if security_class is None:
        raise ReferenceNotFoundError("Security class", security_class_id)
    return security_class


def issued_by_class(record: CapTableRecord, security_class_id: str) -> int:
    """Total quantity issued into a security class."""
    return sum(
        i.quantity for i in record.issuances if i.security_class_id == security_class_id
    )


def remaining_authorized(record: CapTableRecord, security_class_id: str) -> int:
    """Authorized minus issued for a class (negative if over-issued).

    Raises:
        ReferenceNotFoundError: Unknown security class id
    """
    security_class = _require_class(record, security_class_id)
    return security_class.authorized - issued_by_class(record, security_class_id)


def pool_capacity(record: CapTableRecord, pool_id: Optional[str] = None) -> PoolCapacity:
    """Option pool authorization versus granted options.

    Args:
        record: Cap table record
        pool_id: Restrict authorization to one pool; None sums all pools

    Returns:
        PoolCapacity; ``remaining`` is floored at zero

    Raises:
        ReferenceNotFoundError: ``pool_id`` given but no such OPTION_POOL class
    """
    if pool_id is not None:
        pools = [p for p in record.option_pools() if p.id == pool_id]
        if not pools:
            raise ReferenceNotFoundError("Option pool", pool_id)
    else:
        pools = record.option_pools()

    authorized = sum(pool.authorized for pool in pools)
    granted = sum(g.quantity for g in record.option_grants)
    return PoolCapacity(
        authorized=authorized,
        granted=granted,
        remaining=max(0, authorized - granted),
    )


def ensure_can_issue(record: CapTableRecord, security_class_id: str, quantity: int) -> None:
    """Raise unless ``quantity`` more shares may be issued into the class.

    Raises:
        ReferenceNotFoundError: Unknown security class id
        InvalidIssuanceTargetError: The class is an option pool
        CapacityExceededError: Not enough authorized shares remain
    """
    security_class = _require_class(record, security_class_id)
    if security_class.kind == SecurityKind.OPTION_POOL:
        raise InvalidIssuanceTargetError(
            f'Cannot issue shares from option pool "{security_class.label}" - '
            "grant options instead"
        )

    remaining = remaining_authorized(record, security_class_id)
    if quantity > remaining:
        raise CapacityExceededError(quantity, max(0, remaining), f'"{security_class.label}"')


def ensure_can_grant(record: CapTableRecord, quantity: int) -> None:
    """Raise CapacityExceededError unless ``quantity`` more options fit in the pools."""
    capacity = pool_capacity(record)
    if quantity > capacity.remaining:
        raise CapacityExceededError(quantity, capacity.remaining, "the option pool")
