"""Security class definitions.

A security class is a capacity bucket: common stock, preferred stock, or an
option pool. Issuances draw down a common/preferred class; option grants
draw down the combined capacity of all option pools.
"""

from typing import Optional

from pydantic import Field

from .base import DomainModel, EntityId, SecurityKind, ShareQuantity


class SecurityClass(DomainModel):
    """A class of securities with an authorized ceiling.

    Kinds:
        - COMMON: ordinary shares (or LLC units)
        - PREF: preferred shares
        - OPTION_POOL: reserved capacity for option grants. Never the target
          of a direct issuance; it only bounds the total granted options.

    Example:
        SecurityClass(id="sc_common", kind="COMMON", label="Common Stock",
                      authorized=10_000_000, par_value=0.0001)
    """

    id: EntityId
    kind: SecurityKind
    label: str = Field(min_length=1)
    authorized: ShareQuantity = Field(
        description="Maximum quantity that may be issued (or granted, for pools)"
    )
    par_value: Optional[float] = Field(default=None, ge=0)

    @property
    def is_option_pool(self) -> bool:
        return self.kind == SecurityKind.OPTION_POOL
