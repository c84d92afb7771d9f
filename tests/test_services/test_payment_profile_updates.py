from __future__ import annotations

import pytest

from app.core.exceptions import MissingPaymentMethod
from app.services.payment_profile_updates import build_payment_profile_update
from vendor_payloads import card_profile


def test_card_profile_update_keeps_billing_and_strips_card_fields():
    existing = card_profile()
    existing["payment"]["creditCard"]["cardCode"] = "XXX"

    update = build_payment_profile_update(existing, "555", "Grace", "Hopper")

    assert list(update) == ["billTo", "payment", "defaultPaymentProfile", "customerPaymentProfileId"]
    assert update["billTo"] == {
        "firstName": "Grace",
        "lastName": "Hopper",
        "company": "",
        "address": "",
        "city": "",
        "state": "",
        "zip": "98004",
        "country": "",
        "phoneNumber": "",
        "faxNumber": "",
    }
    assert update["payment"] == {"creditCard": {"cardNumber": "XXXX1111", "expirationDate": "XXXX"}}
    assert update["defaultPaymentProfile"] is True
    assert update["customerPaymentProfileId"] == "555"


def test_bank_account_copied_as_returned():
    bank = {"accountType": "checking", "routingNumber": "XXXX0000", "accountNumber": "XXXX1234", "nameOnAccount": "Ada"}
    update = build_payment_profile_update({"payment": {"bankAccount": bank}}, "9", "A", "B")
    assert update["payment"] == {"bankAccount": bank}
    assert "defaultPaymentProfile" not in update


def test_wrapped_profile_and_root_level_card():
    existing = {"paymentProfile": {"creditCard": {"cardNumber": "XXXX4242", "cardType": "Visa"}}}
    update = build_payment_profile_update(existing, "1", "A", "B")
    assert update["payment"] == {"creditCard": {"cardNumber": "XXXX4242"}}


@pytest.mark.parametrize("existing", [{}, {"payment": {}}, {"billTo": {"firstName": "x"}}, {"payment": {"creditCard": None}}])
def test_missing_payment_method_fails(existing):
    with pytest.raises(MissingPaymentMethod):
        build_payment_profile_update(existing, "1", "A", "B")
