from __future__ import annotations

import json

from app.config import Settings
from app.services.hosted_forms import (
    add_payment_form_url,
    edit_payment_form_url,
    hosted_payment_settings,
    hosted_payment_transaction,
    hosted_profile_settings,
    resolve_return_base,
)


def test_return_base_prefers_origin():
    assert resolve_return_base("https://ui.example.com/", "https://other.example.com/x", "http://f") == "https://ui.example.com"


def test_return_base_uses_referer_origin():
    assert resolve_return_base(None, "https://ui.example.com/customers/1?x=1", "http://f") == "https://ui.example.com"


def test_return_base_falls_back_and_adds_scheme():
    assert resolve_return_base(None, None, "admin.example.com/") == "http://admin.example.com"


def test_profile_settings_point_back_to_the_ui():
    settings = {item["settingName"]: item["settingValue"] for item in hosted_profile_settings("https://ui", "testMode")}
    assert settings["hostedProfileReturnUrl"] == "https://ui/profile-return.html"
    assert settings["hostedProfileIFrameCommunicatorUrl"] == "https://ui/communicator.html"
    assert settings["hostedProfileValidationMode"] == "testMode"
    assert settings["hostedProfilePageBorderVisible"] == "false"


def test_payment_settings_are_json_strings():
    settings = {item["settingName"]: item["settingValue"] for item in hosted_payment_settings("https://ui", "/api/authorize")}
    return_options = json.loads(settings["hostedPaymentReturnOptions"])
    assert return_options["url"] == "https://ui/api/authorize/payment-response"
    assert return_options["cancelUrl"] == "https://ui/api/authorize/payment-cancel"
    assert json.loads(settings["hostedPaymentButtonOptions"]) == {"text": "Add Card"}


def test_payment_transaction_defaults_to_one_cent_authorization():
    assert hosted_payment_transaction(None) == {"transactionType": "authOnlyTransaction", "amount": "0.01"}
    assert hosted_payment_transaction("19.99") == {"transactionType": "authCaptureTransaction", "amount": "19.99"}


def test_form_urls_follow_environment():
    sandbox = Settings(AUTHORIZE_NET_ENV="sandbox")
    production = Settings(AUTHORIZE_NET_ENV="production")
    assert add_payment_form_url(sandbox) == "https://test.authorize.net/customer/addPayment"
    assert edit_payment_form_url(production) == "https://accept.authorize.net/customer/editPayment"
