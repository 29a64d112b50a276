"""Smoke tests for schema validation.

These tests verify that:
1. All schemas can be imported
2. Basic instantiation works
3. Field validation catches obvious errors
4. Records load from and dump to the persisted camelCase JSON keys
"""

import json

import pytest
from pydantic import ValidationError

from captable_core.schemas import (
    # Base
    DomainModel,
    SecurityKind,
    SAFEType,
    StakeholderKind,
    # Entities
    Company,
    Stakeholder,
    SecurityClass,
    Issuance,
    Vesting,
    OptionGrant,
    SAFE,
    Valuation,
    AuditEntry,
    # Record
    CapTableRecord,
    # Results
    CapTableResult,
    RoundTerms,
    ValidationResult,
)


class TestBasicInstantiation:
    """Test that basic schema instantiation works."""

    def test_company_minimal(self):
        company = Company(id="comp_acme", name="Acme Inc.")
        assert company.formation_date is None
        assert company.currency is None

    def test_company_full(self):
        company = Company(
            id="comp_acme",
            name="Acme Inc.",
            formation_date="2023-06-01",
            entity_type="C_CORP",
            jurisdiction="DE",
            currency="USD",
        )
        assert company.entity_type.value == "C_CORP"

    def test_stakeholder_defaults_to_person(self):
        stakeholder = Stakeholder(id="sh_alice", name="Alice", email="alice@example.com")
        assert stakeholder.kind == StakeholderKind.person

    def test_security_class_pool(self):
        pool = SecurityClass(id="sc_pool", kind="OPTION_POOL", label="2024 Plan", authorized=1_000_000)
        assert pool.kind == SecurityKind.OPTION_POOL
        assert pool.is_option_pool

    def test_option_grant_with_vesting(self):
        grant = OptionGrant(
            id="og_1",
            stakeholder_id="sh_alice",
            quantity=48_000,
            exercise_price=0.25,
            grant_date="2024-01-01",
            vesting=Vesting(start="2024-01-01", months_total=48, cliff_months=12),
        )
        assert grant.vesting.cliff_months == 12

    def test_safe_post_money(self):
        safe = SAFE(
            id="safe_1",
            stakeholder_id="sh_angel",
            amount=250_000,
            date="2024-05-01",
            cap=8_000_000,
            safe_type="post",
        )
        assert safe.safe_type == SAFEType.post
        assert safe.is_post_money

    def test_valuation(self):
        valuation = Valuation(
            id="val_2024",
            date="2024-06-30",
            valuation_type="409a",
            share_price=0.42,
            provider="Carta",
        )
        assert valuation.share_price == 0.42

    def test_results_default_empty(self):
        assert CapTableResult(as_of_date="2025-01-01").rows == []
        assert ValidationResult(valid=True).warnings == []
        assert RoundTerms(pre_money_valuation=1.0).price_per_share is None

    def test_all_models_share_base(self):
        for model in (Company, Stakeholder, SecurityClass, Issuance, SAFE, CapTableRecord):
            assert issubclass(model, DomainModel)


class TestValidation:
    """Test that validation catches obvious errors."""

    @pytest.mark.parametrize("bad_id", ["alice", "SH_alice", "sh_", "sh__alice", "sh alice", "_alice", "sh_alice\n"])
    def test_rejects_malformed_ids(self, bad_id):
        with pytest.raises(ValidationError, match="prefix_identifier"):
            Stakeholder(id=bad_id, name="Alice")

    @pytest.mark.parametrize("good_id", ["sh_alice", "sh_550e8400-e29b-41d4", "og_test_123", "safe_ABC123"])
    def test_accepts_prefixed_ids(self, good_id):
        assert Stakeholder(id=good_id, name="Alice").id == good_id

    def test_rejects_bad_date(self):
        with pytest.raises(ValidationError, match="YYYY-MM-DD"):
            Issuance(
                id="is_1", stakeholder_id="sh_alice", security_class_id="sc_common",
                quantity=1, date="01/15/2024",
            )

    def test_rejects_impossible_date(self):
        with pytest.raises(ValidationError, match="Invalid day 30"):
            Company(id="comp_acme", name="Acme", formation_date="2024-02-30")

    def test_rejects_date_with_trailing_newline(self):
        """Test that the stored date string is never left with stray characters."""
        with pytest.raises(ValidationError, match="YYYY-MM-DD"):
            Issuance(
                id="is_1", stakeholder_id="sh_alice", security_class_id="sc_common",
                quantity=1, date="2024-01-15\n",
            )

    def test_accepts_timestamp_date(self):
        company = Company(id="comp_acme", name="Acme", formation_date="2024-02-29T10:00:00Z")
        assert company.formation_date == "2024-02-29T10:00:00Z"

    @pytest.mark.parametrize("currency", ["usd", "US", "USDT", "U$D", "USD\n"])
    def test_rejects_bad_currency(self, currency):
        with pytest.raises(ValidationError, match="ISO 4217"):
            Company(id="comp_acme", name="Acme", currency=currency)

    def test_rejects_bad_email(self):
        with pytest.raises(ValidationError, match="Invalid email"):
            Stakeholder(id="sh_alice", name="Alice", email="not-an-email")

    def test_rejects_email_with_trailing_newline(self):
        with pytest.raises(ValidationError, match="Invalid email"):
            Stakeholder(id="sh_alice", name="Alice", email="alice@example.com\n")

    def test_rejects_empty_name(self):
        with pytest.raises(ValidationError):
            Stakeholder(id="sh_alice", name="")

    def test_rejects_non_positive_quantity(self):
        with pytest.raises(ValidationError):
            Issuance(
                id="is_1", stakeholder_id="sh_alice", security_class_id="sc_common",
                quantity=0, date="2024-01-01",
            )

    def test_rejects_non_positive_exercise_price(self):
        with pytest.raises(ValidationError):
            OptionGrant(
                id="og_1", stakeholder_id="sh_alice", quantity=1,
                exercise_price=0, grant_date="2024-01-01",
            )

    def test_rejects_unknown_security_kind(self):
        with pytest.raises(ValidationError):
            SecurityClass(id="sc_x", kind="WARRANT", label="X", authorized=1)

    def test_rejects_non_positive_cap(self):
        with pytest.raises(ValidationError):
            SAFE(id="safe_1", stakeholder_id="sh_a", amount=1, date="2024-01-01", cap=0)

    def test_rejects_negative_amount(self):
        with pytest.raises(ValidationError):
            SAFE(id="safe_1", stakeholder_id="sh_a", amount=-1, date="2024-01-01")

    def test_assignment_is_validated(self):
        stakeholder = Stakeholder(id="sh_alice", name="Alice")
        with pytest.raises(ValidationError):
            stakeholder.id = "not valid"


class TestPersistedFormat:
    """Test loading and dumping the persisted (camelCase) record."""

    RAW = {
        "version": 1,
        "company": {
            "id": "comp_acme",
            "name": "Acme Inc.",
            "formationDate": "2023-06-01",
            "entityType": "C_CORP",
            "currency": "USD",
        },
        "stakeholders": [{"id": "sh_alice", "name": "Alice", "type": "person"}],
        "securityClasses": [
            {"id": "sc_common", "kind": "COMMON", "label": "Common", "authorized": 1000, "parValue": 0.0001},
        ],
        "issuances": [
            {
                "id": "is_1", "stakeholderId": "sh_alice", "securityClassId": "sc_common",
                "qty": 500, "pps": 0.0001, "date": "2023-06-02", "cert": "CS-1",
            },
        ],
        "optionGrants": [
            {
                "id": "og_1", "stakeholderId": "sh_alice", "qty": 100, "exercise": 0.1,
                "grantDate": "2024-01-01",
                "vesting": {"start": "2024-01-01", "monthsTotal": 48, "cliffMonths": 12},
            },
        ],
        "safes": [
            {
                "id": "safe_1", "stakeholderId": "sh_alice", "amount": 1000.0,
                "date": "2024-02-01", "cap": 1000000.0, "type": "pre",
            },
        ],
        "valuations": [],
        "audit": [
            {"ts": "2024-01-01T00:00:00Z", "by": "cli", "action": "INIT", "data": {"version": 1}},
        ],
    }

    def test_load_aliases(self):
        record = CapTableRecord.model_validate(self.RAW)

        assert record.company.entity_type.value == "C_CORP"
        assert record.issuances[0].quantity == 500
        assert record.issuances[0].price_per_share == 0.0001
        assert record.issuances[0].certificate == "CS-1"
        assert record.option_grants[0].exercise_price == 0.1
        assert record.option_grants[0].vesting.months_total == 48
        assert record.safes[0].safe_type == SAFEType.pre
        assert record.audit[0].actor == "cli"
        assert isinstance(record.audit[0], AuditEntry)

    def test_json_round_trip_uses_persisted_keys(self):
        record = CapTableRecord.model_validate(self.RAW)

        dumped = json.loads(record.model_dump_json(by_alias=True, exclude_none=True))

        assert dumped == self.RAW
        assert CapTableRecord.model_validate(dumped) == record

    def test_record_lookups(self):
        record = CapTableRecord.model_validate(self.RAW)

        assert record.get_stakeholder("sh_alice").name == "Alice"
        assert record.get_stakeholder("sh_bob") is None
        assert record.get_security_class("sc_common").authorized == 1000
        assert record.option_pools() == []
        assert [sc.id for sc in record.classes_of_kind(SecurityKind.COMMON)] == ["sc_common"]
