"""Exception hierarchy for the cap table engine.

Format errors (dates, ids) fail fast at the call site. Referential problems
are never raised by the engine itself - the validator collects them - so the
exceptions below are reserved for conditions a caller must handle before the
record can be used or mutated.
"""


class CapTableError(Exception):
    """Base class for all engine errors."""
    pass


class DateFormatError(CapTableError, ValueError):
    """Raised when a date string is not a valid YYYY-MM-DD calendar date."""

    def __init__(self, text, reason: str = "Date must be in YYYY-MM-DD format"):
        self.text = text
        self.reason = reason
        super().__init__(f"{reason}: {text!r}")


class SchemaVersionError(CapTableError):
    """Raised when a record's schema version is outside the supported window."""

    def __init__(self, version: int, message: str):
        self.version = version
        super().__init__(message)


class ReferenceNotFoundError(CapTableError, KeyError):
    """Raised when a lookup by id finds no matching entity."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f'{entity} with ID "{entity_id}" not found')

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class CapacityExceededError(CapTableError):
    """Raised when an issuance or grant would exceed authorized capacity."""

    def __init__(self, requested: int, remaining: int, target: str):
        self.requested = requested
        self.remaining = remaining
        self.target = target
        super().__init__(
            f"Cannot allocate {requested} - only {remaining} remaining for {target}"
        )


class InvalidIssuanceTargetError(CapTableError):
    """Raised when shares would be issued directly from an option pool."""
    pass
