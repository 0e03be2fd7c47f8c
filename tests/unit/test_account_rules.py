"""Unit tests for account scope keys and type-specific fields."""

import uuid

import pytest

from backend.app.errors import ValidationError
from backend.app.itinerary.ledger import check_account_fields, scope_key
from backend.app.models.common import AccountEntityType, AccountType


def test_scope_key_for_entity() -> None:
    entity_id = uuid.UUID(int=1)

    assert scope_key(AccountEntityType.hotel, entity_id) == f"hotel:{entity_id}"


def test_scope_key_for_company() -> None:
    assert scope_key("company", None) == "company:"


def test_same_id_different_kind_are_different_scopes() -> None:
    entity_id = uuid.uuid4()

    assert scope_key("client", entity_id) != scope_key("staff", entity_id)


@pytest.mark.parametrize("account_type", [AccountType.bank, AccountType.other])
def test_bank_name_required(account_type: AccountType) -> None:
    with pytest.raises(ValidationError) as exc_info:
        check_account_fields(account_type, {"bank_name": None})

    assert "bank_name" in exc_info.value.message


def test_online_requires_service_name() -> None:
    with pytest.raises(ValidationError):
        check_account_fields(AccountType.online, {"service_name": ""})


def test_online_with_service_name_passes() -> None:
    values = check_account_fields(AccountType.online, {"service_name": "PayPal"})

    assert values["service_name"] == "PayPal"


def test_cash_clears_bank_name() -> None:
    original = {"bank_name": "Itaú", "account_holder_name": "Front desk"}

    values = check_account_fields(AccountType.cash, original)

    assert values["bank_name"] is None
    assert original["bank_name"] == "Itaú"
