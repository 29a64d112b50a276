"""Issued shares and option grants.

Issuances are outstanding shares. Option grants are rights to acquire
shares; they count toward outstanding only once vested, but toward the
fully diluted total from the moment they are granted.
"""

from typing import Optional

from pydantic import Field, model_validator

from .base import DomainModel, EntityId, ISODate, ShareQuantity


class Issuance(DomainModel):
    """Shares of a (non-pool) security class issued to a stakeholder.

    The sum of quantities per class must stay within the class's authorized
    quantity; the validator re-checks this across the whole record.
    """

    id: EntityId
    stakeholder_id: EntityId
    security_class_id: EntityId
    quantity: ShareQuantity = Field(alias="qty")
    price_per_share: Optional[float] = Field(default=None, ge=0, alias="pps")
    date: ISODate
    certificate: Optional[str] = Field(default=None, alias="cert")


class Vesting(DomainModel):
    """Vesting schedule embedded in an option grant.

    Nothing vests until ``cliff_months`` whole months have elapsed since
    ``start``; from then on the vested fraction is elapsed months over
    ``months_total``, capped at 1.

    Example:
        4-year schedule with 1-year cliff starting 2024-01-01:
        Vesting(start="2024-01-01", months_total=48, cliff_months=12)
    """

    start: ISODate
    months_total: int = Field(gt=0, description="Total vesting duration in months")
    cliff_months: int = Field(ge=0, description="Months before anything vests")

    @model_validator(mode='after')
    def validate_cliff(self):
        """Cliff cannot be longer than the schedule itself."""
        if self.cliff_months > self.months_total:
            raise ValueError(
                f"cliff_months ({self.cliff_months}) cannot exceed "
                f"months_total ({self.months_total})"
            )
        return self


class OptionGrant(DomainModel):
    """Options granted to a stakeholder out of the company's option pools.

    Grants are not linked to a specific pool: capacity is checked against the
    sum of all OPTION_POOL classes. A grant without ``vesting`` is fully
    vested when granted.
    """

    id: EntityId
    stakeholder_id: EntityId
    quantity: ShareQuantity = Field(alias="qty")
    exercise_price: float = Field(gt=0, alias="exercise")
    grant_date: ISODate
    vesting: Optional[Vesting] = None
