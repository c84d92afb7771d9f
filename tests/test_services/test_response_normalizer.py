from __future__ import annotations

import pytest

from app.core.exceptions import MalformedResponse
from app.services.response_normalizer import (
    as_id_list,
    as_list,
    extract_payment_profiles,
    extract_profile_ids,
    extract_subscription_ids,
    normalize_amount,
    normalize_customer_profile,
    normalize_subscription,
    unwrap_result,
)
from vendor_payloads import card_profile, ok_messages


def test_unwrap_prefers_operation_response_key():
    raw = {"getCustomerProfileResponse": {"messages": ok_messages(), "profile": {}}}
    assert unwrap_result(raw, "getCustomerProfile") is raw["getCustomerProfileResponse"]


def test_unwrap_accepts_root_level_result():
    raw = {"messages": ok_messages(), "token": "abc"}
    assert unwrap_result(raw, "getHostedProfilePage") is raw


def test_unwrap_rejects_unknown_shape():
    with pytest.raises(MalformedResponse):
        unwrap_result({"somethingElse": {}}, "getCustomerProfile")


def test_unwrap_requires_messages():
    with pytest.raises(MalformedResponse, match="messages"):
        unwrap_result({"getCustomerProfileResponse": {"profile": {}}}, "getCustomerProfile")


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, []),
        ({"paymentProfile": {"id": 1}}, [{"id": 1}]),
        ({"paymentProfile": [{"id": 1}, {"id": 2}]}, [{"id": 1}, {"id": 2}]),
        ([{"id": 1}, {"id": 2}], [{"id": 1}, {"id": 2}]),
        ({"id": 1}, [{"id": 1}]),
        ({}, []),
    ],
)
def test_as_list_shapes(value, expected):
    result = as_list(value, "paymentProfile")
    assert result == expected
    assert as_list(result, "paymentProfile") == result


def test_id_lists_unwrap_numeric_string_and_stringify():
    assert as_id_list({"numericString": 1234}) == ["1234"]
    assert as_id_list({"numericString": ["1", 2]}) == ["1", "2"]
    assert as_id_list([5, 6]) == ["5", "6"]
    assert as_id_list(None) == []
    assert as_id_list(as_id_list({"numericString": ["1", 2]})) == ["1", "2"]


def test_single_wrapped_payment_profile_becomes_one_element_list():
    result = {"profile": {"paymentProfiles": {"paymentProfile": card_profile()}}, "messages": ok_messages()}
    profiles = extract_payment_profiles(result)
    assert isinstance(profiles, list)
    assert len(profiles) == 1
    assert profiles[0]["customerPaymentProfileId"] == "555"


def test_payment_profile_fallback_locations():
    assert extract_payment_profiles({"paymentProfiles": [card_profile("1")]})[0]["customerPaymentProfileId"] == "1"
    assert extract_payment_profiles({"paymentProfileList": [card_profile("2")]})[0]["customerPaymentProfileId"] == "2"
    assert extract_payment_profiles({"paymentProfile": card_profile("3")})[0]["customerPaymentProfileId"] == "3"
    assert extract_payment_profiles({"messages": ok_messages()}) == []


def test_profile_ids():
    assert extract_profile_ids({"ids": {"numericString": ["10", "11"]}}) == ["10", "11"]
    assert extract_profile_ids({"ids": ["12"]}) == ["12"]
    assert extract_profile_ids({}) == []


def test_subscription_ids_merged_from_every_location():
    result = {
        "subscriptionIds": {"numericString": "100"},
        "subscriptions": [{"subscriptionId": "101"}, {"id": 100}],
        "subscriptionId": "102",
    }
    assert extract_subscription_ids(result) == ["100", "101", "102"]


def test_subscription_ids_fall_back_to_profile():
    result = {"profile": {"subscriptionIds": ["7", "8"]}}
    assert extract_subscription_ids(result) == ["7", "8"]


@pytest.mark.parametrize(
    "value, expected",
    [(10, "10.00"), (9.5, "9.50"), ("9.5", "9.50"), ("12.345", "12.35"), ("abc", "abc"), (None, None)],
)
def test_normalize_amount(value, expected):
    assert normalize_amount(value) == expected


def test_subscription_payment_profile_link_copied_up():
    result = {
        "subscription": {
            "amount": 25,
            "trialAmount": "0",
            "profile": {
                "customerProfileId": "900",
                "customerPaymentProfileId": "old",
                "paymentProfile": {"customerPaymentProfileId": 777},
            },
        },
        "messages": ok_messages(),
    }
    subscription = normalize_subscription(result, "12345")
    assert subscription["profile"]["customerPaymentProfileId"] == "777"
    assert subscription["amount"] == "25.00"
    assert subscription["trialAmount"] == "0.00"
    assert subscription["subscriptionId"] == "12345"
    # the raw response is left untouched
    assert result["subscription"]["profile"]["customerPaymentProfileId"] == "old"


def test_subscription_link_kept_when_not_nested():
    result = {"subscription": {"profile": {"customerPaymentProfileId": "42"}}, "messages": ok_messages()}
    assert normalize_subscription(result)["profile"]["customerPaymentProfileId"] == "42"


def test_customer_profile_normalization():
    result = {
        "profile": {
            "customerProfileId": 900,
            "email": "ada@example.com",
            "paymentProfiles": card_profile(),
            "shipToList": [{"zip": "1"}],
        },
        "subscriptionIds": {"numericString": ["1"]},
        "messages": ok_messages(),
    }
    profile = normalize_customer_profile(result)
    assert profile["profileId"] == "900"
    assert len(profile["paymentProfiles"]) == 1
    assert profile["subscriptionIds"] == ["1"]
    assert "shipToList" not in profile
