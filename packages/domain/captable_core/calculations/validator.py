"""Referential and business-rule validation of a whole record.

Validation is a separate, explicit step: the aggregator will happily compute
over an inconsistent record. ``validate_extended`` collects every problem
instead of stopping at the first one.

Fatal errors (``valid`` becomes False):
    - Schema version outside the supported window
    - Duplicate ids across entity collections
    - References to stakeholders / security classes that do not exist
    - Direct issuances into an option pool
    - Issued quantity above a class's authorized quantity
    - Granted options above the combined option pool authorization

Warnings (never affect ``valid``):
    - Schema version supported but not current (info)
    - Stakeholder with no equity of any kind (info)
    - SAFE with neither cap nor discount
    - Vesting start before the grant date
    - Issuance or grant dated before company formation
"""

import logging
from collections import Counter
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError

from ..config import DEFAULT_ENGINE_CFG, EngineCFG
from ..errors import SchemaVersionError
from ..schemas import (
    CapTableRecord,
    IssueSeverity,
    SecurityKind,
    ValidationIssue,
    ValidationResult,
)
from .dates import parse_date

logger = logging.getLogger(__name__)


# =============================================================================
# Schema Version
# =============================================================================

def is_version_supported(version: int, cfg: Optional[EngineCFG] = None) -> bool:
    cfg = cfg or DEFAULT_ENGINE_CFG
    return cfg.min_supported_version <= version <= cfg.max_supported_version


def _version_error(version: int, cfg: EngineCFG) -> Optional[str]:
    if version < cfg.min_supported_version:
        return (
            f"Schema version {version} is too old. Minimum supported version is "
            f"{cfg.min_supported_version}. Please migrate your data."
        )
    if version > cfg.max_supported_version:
        return (
            f"Schema version {version} is newer than supported. Maximum supported "
            f"version is {cfg.max_supported_version}. Please upgrade."
        )
    return None


def ensure_supported_version(version: int, cfg: Optional[EngineCFG] = None) -> None:
    """Raise SchemaVersionError unless ``version`` is inside the supported window."""
    message = _version_error(version, cfg or DEFAULT_ENGINE_CFG)
    if message is not None:
        raise SchemaVersionError(version, message)


# =============================================================================
# Schema Validation
# =============================================================================

def _format_validation_error(error: ValidationError) -> List[str]:
    return [
        f"{'.'.join(str(part) for part in e['loc'])}: {e['msg']}"
        for e in error.errors()
    ]


def validate_schema(data: Any) -> ValidationResult:
    """Check raw record data (e.g. parsed JSON) against the record schema only.

    Returns:
        ValidationResult with one ``path: message`` error per schema problem.
    """
    try:
        CapTableRecord.model_validate(data)
    except ValidationError as e:
        return ValidationResult(valid=False, errors=_format_validation_error(e))
    return ValidationResult(valid=True)


# =============================================================================
# Extended Validation
# =============================================================================

def validate_extended(
    record: Union[CapTableRecord, Mapping[str, Any]],
    cfg: Optional[EngineCFG] = None,
) -> ValidationResult:
    """Validate structure and cross-entity rules over the whole record.

    Args:
        record: A CapTableRecord, or raw record data which is first checked
            against the schema (schema failures are returned immediately)
        cfg: Engine configuration (supported schema versions)

    Returns:
        ValidationResult; ``valid`` is True iff no fatal errors were found.

    Example:
        A grant of 2,000 options against a pool authorized for 1,000:
            result = validate_extended(record)
            result.valid   -> False
            result.errors  -> ["Total option grants (2000) exceed option pool
                               authorized (1000)"]
    """
    cfg = cfg or DEFAULT_ENGINE_CFG

    if not isinstance(record, CapTableRecord):
        try:
            record = CapTableRecord.model_validate(record)
        except ValidationError as e:
            return ValidationResult(valid=False, errors=_format_validation_error(e))

    errors: List[str] = []
    warnings: List[ValidationIssue] = []

    # Step 1: schema version
    version_error = _version_error(record.version, cfg)
    if version_error is not None:
        errors.append(version_error)
    elif record.version != cfg.current_schema_version:
        warnings.append(ValidationIssue(
            path="version",
            message=(
                f"Schema version {record.version} is supported but outdated. "
                f"Current version is {cfg.current_schema_version}."
            ),
            severity=IssueSeverity.info,
        ))

    # Step 2: duplicate ids across all collections
    all_ids = [
        *(s.id for s in record.stakeholders),
        *(sc.id for sc in record.security_classes),
        *(i.id for i in record.issuances),
        *(g.id for g in record.option_grants),
        *(s.id for s in record.safes),
        *(v.id for v in record.valuations),
    ]
    for entity_id, count in Counter(all_ids).items():
        if count > 1:
            errors.append(f"Duplicate ID found: {entity_id} appears {count} times")

    # Step 3: references
    stakeholder_ids = {s.id for s in record.stakeholders}
    classes = record.security_classes_by_id()

    for idx, issuance in enumerate(record.issuances):
        if issuance.stakeholder_id not in stakeholder_ids:
            errors.append(
                f"issuances[{idx}]: Invalid stakeholderId reference: {issuance.stakeholder_id}"
            )
        security_class = classes.get(issuance.security_class_id)
        if security_class is None:
            errors.append(
                f"issuances[{idx}]: Invalid securityClassId reference: "
                f"{issuance.security_class_id}"
            )
        elif security_class.kind == SecurityKind.OPTION_POOL:
            errors.append(
                f"issuances[{idx}]: Cannot issue shares directly from option pool "
                f"{security_class.label}"
            )

    for idx, grant in enumerate(record.option_grants):
        if grant.stakeholder_id not in stakeholder_ids:
            errors.append(
                f"optionGrants[{idx}]: Invalid stakeholderId reference: {grant.stakeholder_id}"
            )

    for idx, safe in enumerate(record.safes):
        if safe.stakeholder_id not in stakeholder_ids:
            errors.append(
                f"safes[{idx}]: Invalid stakeholderId reference: {safe.stakeholder_id}"
            )

    # Step 4: per-class capacity
    issued_by_class: Counter = Counter()
    for issuance in record.issuances:
        issued_by_class[issuance.security_class_id] += issuance.quantity

    for security_class in record.security_classes:
        if security_class.kind == SecurityKind.OPTION_POOL:
            continue
        issued = issued_by_class[security_class.id]
        if issued > security_class.authorized:
            errors.append(
                f"Security class {security_class.label}: Issued shares ({issued}) "
                f"exceed authorized ({security_class.authorized})"
            )

    # Step 5: pool-wide capacity
    total_granted = sum(g.quantity for g in record.option_grants)
    pool_authorized = sum(pool.authorized for pool in record.option_pools())
    if total_granted > pool_authorized:
        errors.append(
            f"Total option grants ({total_granted}) exceed option pool "
            f"authorized ({pool_authorized})"
        )

    # Step 6: business-rule warnings
    with_equity = {
        *(i.stakeholder_id for i in record.issuances),
        *(g.stakeholder_id for g in record.option_grants),
        *(s.stakeholder_id for s in record.safes),
    }
    for stakeholder in record.stakeholders:
        if stakeholder.id not in with_equity:
            warnings.append(ValidationIssue(
                path=f"stakeholder.{stakeholder.id}",
                message=f'Stakeholder "{stakeholder.name}" has no equity',
                severity=IssueSeverity.info,
            ))

    for idx, safe in enumerate(record.safes):
        if safe.cap is None and not safe.discount:
            warnings.append(ValidationIssue(
                path=f"safes[{idx}]",
                message="SAFE has neither cap nor discount specified",
            ))

    for idx, grant in enumerate(record.option_grants):
        if grant.vesting is not None and (
            parse_date(grant.vesting.start) < parse_date(grant.grant_date)
        ):
            warnings.append(ValidationIssue(
                path=f"optionGrants[{idx}].vesting.start",
                message="Vesting start date is before grant date",
            ))

    if record.company.formation_date:
        formation = parse_date(record.company.formation_date)
        for idx, issuance in enumerate(record.issuances):
            if parse_date(issuance.date) < formation:
                warnings.append(ValidationIssue(
                    path=f"issuances[{idx}].date",
                    message="Issuance date is before company formation date",
                ))
        for idx, grant in enumerate(record.option_grants):
            if parse_date(grant.grant_date) < formation:
                warnings.append(ValidationIssue(
                    path=f"optionGrants[{idx}].grantDate",
                    message="Grant date is before company formation date",
                ))

    logger.info(
        "Validated record for %s: %d errors, %d warnings",
        record.company.name, len(errors), len(warnings),
    )

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)
