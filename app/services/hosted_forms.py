"""Settings and URLs for the processor-hosted iframe forms."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional
from urllib.parse import urlsplit

from app.config import Settings

DEFAULT_AUTH_ONLY_AMOUNT = "0.01"


def resolve_return_base(
    origin: Optional[str],
    referer: Optional[str],
    fallback: str,
) -> str:
    """Pick the public base URL the hosted page should send the browser back to."""
    base = origin
    if not base and referer:
        parts = urlsplit(referer)
        base = f"{parts.scheme}://{parts.netloc}" if parts.scheme and parts.netloc else referer
    base = (base or fallback or "http://localhost:3000").strip().rstrip("/")
    if not base.startswith(("http://", "https://")):
        base = f"http://{base}"
    return base


def hosted_profile_settings(return_base: str, validation_mode: str) -> List[Dict[str, str]]:
    return [
        {"settingName": "hostedProfilePageBorderVisible", "settingValue": "false"},
        {"settingName": "hostedProfileReturnUrl", "settingValue": f"{return_base}/profile-return.html"},
        {
            "settingName": "hostedProfileIFrameCommunicatorUrl",
            "settingValue": f"{return_base}/communicator.html",
        },
        {"settingName": "hostedProfileBillingAddressOptions", "settingValue": "showBillingAddress"},
        {"settingName": "hostedProfileValidationMode", "settingValue": validation_mode},
    ]


def hosted_payment_transaction(amount: Optional[str]) -> Dict[str, str]:
    if amount:
        return {"transactionType": "authCaptureTransaction", "amount": str(amount)}
    # $0.00 is rejected, so card capture without a charge authorizes a cent
    return {"transactionType": "authOnlyTransaction", "amount": DEFAULT_AUTH_ONLY_AMOUNT}


def hosted_payment_settings(return_base: str, api_prefix: str) -> List[Dict[str, str]]:
    return_options = {
        "showReceipt": False,
        "url": f"{return_base}{api_prefix}/payment-response",
        "cancelUrl": f"{return_base}{api_prefix}/payment-cancel",
    }
    settings: List[Dict[str, Any]] = [
        {
            "settingName": "hostedPaymentBillingAddressOptions",
            "settingValue": {"show": True, "required": False, "fields": {"company": "hidden"}},
        },
        {"settingName": "hostedPaymentReturnOptions", "settingValue": return_options},
        {"settingName": "hostedPaymentButtonOptions", "settingValue": {"text": "Add Card"}},
        {
            "settingName": "hostedPaymentPaymentOptions",
            "settingValue": {"cardCodeRequired": True, "showCreditCard": True, "showBankAccount": False},
        },
        {"settingName": "hostedPaymentSecurityOptions", "settingValue": {"captcha": False}},
    ]
    # setting values travel as JSON strings
    return [
        {"settingName": item["settingName"], "settingValue": json.dumps(item["settingValue"])}
        for item in settings
    ]


def add_payment_form_url(settings: Settings) -> str:
    return f"{settings.hosted_form_host}/customer/addPayment"


def edit_payment_form_url(settings: Settings) -> str:
    return f"{settings.hosted_form_host}/customer/editPayment"


def manage_form_url(settings: Settings) -> str:
    return f"{settings.hosted_form_host}/customer/manage"


def payment_form_url(settings: Settings) -> str:
    return f"{settings.hosted_form_host}/payment/payment"
