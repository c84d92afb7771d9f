"""Normalization of Authorize.Net response bodies.

The JSON API is a translation of the XML API, so the same logical field shows
up in several shapes depending on how many elements it holds:

* a bare list: ``"paymentProfiles": [{...}, {...}]``
* a single object: ``"paymentProfiles": {...}``
* an object wrapping a singular key: ``"paymentProfiles": {"paymentProfile": {...}}``
  or ``"ids": {"numericString": ["1", "2"]}``

Everything here turns those into one canonical shape so the rest of the
application never probes.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from app.core.exceptions import MalformedResponse

CENTS = Decimal("0.01")
AMOUNT_FIELDS = ("amount", "trialAmount")


def unwrap_result(raw: Any, operation: str) -> Dict[str, Any]:
    """Return the ``<operation>Response`` payload, or the body itself when it carries ``messages``."""
    if not isinstance(raw, dict):
        raise MalformedResponse("Unexpected response structure from Authorize.Net API")

    wrapped = raw.get(f"{operation}Response")
    if isinstance(wrapped, dict):
        result = wrapped
    elif "messages" in raw:
        result = raw
    else:
        raise MalformedResponse("Unexpected response structure from Authorize.Net API")

    if not isinstance(result.get("messages"), dict):
        raise MalformedResponse("Response missing messages field")
    return result


def as_list(value: Any, *wrapper_keys: str) -> List[Any]:
    """Coerce a vendor list field into a flat list.

    ``wrapper_keys`` name the singular keys the vendor may wrap items in.
    Running the output through again returns it unchanged.
    """
    if value is None:
        return []
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict):
        for key in wrapper_keys:
            if key in value:
                return as_list(value[key])
        if not value:
            return []
    return [value]


def as_id_list(value: Any) -> List[str]:
    return [str(item) for item in as_list(value, "numericString") if item not in (None, "")]


def _dedupe(ids: Iterable[str]) -> List[str]:
    seen: Dict[str, None] = {}
    for item in ids:
        seen.setdefault(item, None)
    return list(seen)


def normalize_amount(value: Any) -> Any:
    if value is None or isinstance(value, bool):
        return value
    try:
        return str(Decimal(str(value).strip()).quantize(CENTS, rounding=ROUND_HALF_UP))
    except (InvalidOperation, ValueError):
        return str(value)


def extract_payment_profiles(result: Dict[str, Any]) -> List[Dict[str, Any]]:
    profile = result.get("profile")
    if isinstance(profile, dict) and profile.get("paymentProfiles") is not None:
        return as_list(profile["paymentProfiles"], "paymentProfile")
    if result.get("paymentProfiles") is not None:
        return as_list(result["paymentProfiles"], "paymentProfile")
    if result.get("paymentProfileList") is not None:
        return as_list(result["paymentProfileList"], "paymentProfile")
    if result.get("paymentProfile") is not None:
        return as_list(result["paymentProfile"])
    return []


def extract_profile_ids(result: Dict[str, Any]) -> List[str]:
    return as_id_list(result.get("ids"))


def extract_subscription_ids(result: Dict[str, Any]) -> List[str]:
    ids = as_id_list(result.get("subscriptionIds"))

    profile = result.get("profile")
    if not ids and isinstance(profile, dict):
        ids = as_id_list(profile.get("subscriptionIds"))

    for subscription in as_list(result.get("subscriptions"), "subscription"):
        if isinstance(subscription, dict):
            sub_id = subscription.get("subscriptionId") or subscription.get("id")
            if sub_id:
                ids.append(str(sub_id))

    if result.get("subscriptionId"):
        ids.append(str(result["subscriptionId"]))
    return _dedupe(ids)


def normalize_customer_profile(result: Dict[str, Any], profile_id: Optional[str] = None) -> Dict[str, Any]:
    profile = result.get("profile")
    data = dict(profile) if isinstance(profile, dict) else {}
    data["paymentProfiles"] = extract_payment_profiles(result)
    data["subscriptionIds"] = extract_subscription_ids(result)
    data.pop("shipToList", None)
    data["profileId"] = str(profile_id or data.get("customerProfileId") or "")
    return data


def normalize_subscription(result: Dict[str, Any], subscription_id: Optional[str] = None) -> Dict[str, Any]:
    subscription = result.get("subscription")
    data = dict(subscription) if isinstance(subscription, dict) else {
        key: value for key, value in result.items() if key not in ("messages", "refId")
    }

    for field in AMOUNT_FIELDS:
        if field in data:
            data[field] = normalize_amount(data[field])

    profile = data.get("profile")
    if isinstance(profile, dict):
        profile = dict(profile)
        nested = profile.get("paymentProfile")
        if isinstance(nested, dict) and nested.get("customerPaymentProfileId"):
            profile["customerPaymentProfileId"] = str(nested["customerPaymentProfileId"])
        data["profile"] = profile

    if subscription_id is not None:
        data["subscriptionId"] = str(subscription_id)
    return data


def normalize_payment_profile(result: Dict[str, Any]) -> Dict[str, Any]:
    payment_profile = result.get("paymentProfile")
    if isinstance(payment_profile, dict):
        return dict(payment_profile)
    return {key: value for key, value in result.items() if key not in ("messages", "refId")}
