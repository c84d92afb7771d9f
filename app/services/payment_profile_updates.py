"""Build ``updateCustomerPaymentProfile`` payloads from a fetched profile.

The update call replaces the whole payment profile: omitted billing fields are
cleared, so every field is sent back (empty string when unknown). The card
sub-object must only carry the masked number and expiration date; the update
schema rejects ``cardType`` and ``cardCode``.
"""
from __future__ import annotations

from typing import Any, Dict

from app.core.exceptions import MissingPaymentMethod

PRESERVED_BILL_TO_FIELDS = (
    "company",
    "address",
    "city",
    "state",
    "zip",
    "country",
    "phoneNumber",
    "faxNumber",
)
UPDATABLE_CARD_FIELDS = ("cardNumber", "expirationDate")


def sanitize_credit_card(credit_card: Dict[str, Any]) -> Dict[str, Any]:
    return {field: credit_card[field] for field in UPDATABLE_CARD_FIELDS if credit_card.get(field)}


def sanitize_payment(payment: Dict[str, Any]) -> Dict[str, Any]:
    sanitized: Dict[str, Any] = {}
    if payment.get("creditCard"):
        sanitized["creditCard"] = sanitize_credit_card(payment["creditCard"])
    if payment.get("bankAccount"):
        sanitized["bankAccount"] = dict(payment["bankAccount"])
    return sanitized


def build_payment_profile_update(
    existing: Dict[str, Any],
    payment_profile_id: str,
    first_name: str,
    last_name: str,
) -> Dict[str, Any]:
    """Return the ``paymentProfile`` element for an update request.

    Raises MissingPaymentMethod when ``existing`` holds neither a credit card
    nor a bank account, since the update has to re-assert one.
    """
    profile = existing.get("paymentProfile") if isinstance(existing.get("paymentProfile"), dict) else existing

    # payment method may sit under "payment" or directly on the profile
    payment = profile.get("payment")
    if not isinstance(payment, dict):
        payment = {key: profile[key] for key in ("creditCard", "bankAccount") if profile.get(key)}
    payment = sanitize_payment(payment)
    if not payment:
        raise MissingPaymentMethod(
            "Payment information not found in payment profile. Cannot update without payment method."
        )

    existing_bill_to = profile.get("billTo") or {}
    bill_to: Dict[str, Any] = {"firstName": first_name, "lastName": last_name}
    for field in PRESERVED_BILL_TO_FIELDS:
        value = existing_bill_to.get(field)
        bill_to[field] = "" if value is None else value

    # element order matters to the processor
    update: Dict[str, Any] = {"billTo": bill_to, "payment": payment}
    if profile.get("defaultPaymentProfile") is not None:
        update["defaultPaymentProfile"] = profile["defaultPaymentProfile"]
    update["customerPaymentProfileId"] = payment_profile_id
    return update
