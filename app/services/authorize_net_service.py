"""Customer profile, payment profile and subscription operations over Authorize.Net.

Each method sends one vendor request through ``AuthorizeNetClient``, unwraps
the body with the response normalizer, checks the result code with the error
mapper and returns pydantic models. Nothing is cached: every call re-reads
the processor.
"""
from __future__ import annotations

import math
from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar, Union

import pydantic

from app.config import Settings
from app.core.exceptions import MalformedResponse, ValidationError
from app.core.logger import get_logger
from app.integrations.authorize_net import AuthorizeNetClient
from app.schemas.customer import CustomerProfile
from app.schemas.payment_profile import PaymentProfile
from app.schemas.subscription import Subscription, SubscriptionCreate
from app.services import hosted_forms
from app.services.error_mapper import map_result
from app.services.fan_out import fetch_each
from app.services.payment_profile_updates import build_payment_profile_update
from app.services.response_normalizer import (
    extract_payment_profiles,
    extract_profile_ids,
    normalize_amount,
    normalize_customer_profile,
    normalize_payment_profile,
    normalize_subscription,
    unwrap_result,
)

logger = get_logger(__name__)

INTERVAL_UNITS = ("days", "months")

M = TypeVar("M", bound=pydantic.BaseModel)


def checked(raw: Dict[str, Any], operation: str, *, not_found_ok: bool = False) -> Optional[Dict[str, Any]]:
    return map_result(unwrap_result(raw, operation), not_found_ok=not_found_ok)


class AuthorizeNetService:
    def __init__(self, client: AuthorizeNetClient, settings: Settings):
        self.client = client
        self.settings = settings

    # Customer profiles

    async def create_customer_profile(self, email: str) -> str:
        result = checked(await self.client.create_customer_profile(email), "createCustomerProfile")
        profile_id = result.get("customerProfileId")
        if not profile_id:
            raise MalformedResponse("No customer profile ID received from Authorize.Net")
        return str(profile_id)

    async def get_customer_profile_by_email(self, email: str) -> Optional[str]:
        """Profiles are created with the email as merchantCustomerId, so it doubles as a lookup key."""
        result = checked(
            await self.client.get_customer_profile_by_merchant_id(email),
            "getCustomerProfile",
            not_found_ok=True,
        )
        if result is None:
            return None
        profile = result.get("profile") or {}
        profile_id = profile.get("customerProfileId") if isinstance(profile, dict) else None
        return str(profile_id) if profile_id else None

    async def get_or_create_customer_profile(self, email: str) -> Tuple[str, bool]:
        profile_id = await self.get_customer_profile_by_email(email)
        if profile_id:
            logger.info("Using existing customer profile for %s: %s", email, profile_id)
            return profile_id, False
        profile_id = await self.create_customer_profile(email)
        logger.info("Created new customer profile for %s: %s", email, profile_id)
        return profile_id, True

    async def get_customer_profile_ids(self) -> List[str]:
        result = checked(await self.client.get_customer_profile_ids(), "getCustomerProfileIds")
        return extract_profile_ids(result)

    async def get_customer_profile(self, profile_id: str) -> CustomerProfile:
        result = checked(await self.client.get_customer_profile(profile_id), "getCustomerProfile")
        return _parse(CustomerProfile, normalize_customer_profile(result, profile_id))

    async def list_customers(self) -> List[Union[CustomerProfile, Dict[str, Any]]]:
        profile_ids = await self.get_customer_profile_ids()
        return await fetch_each(profile_ids, self.get_customer_profile, "profileId")

    async def get_customer_detail(
        self, profile_id: str
    ) -> Tuple[CustomerProfile, List[Union[Subscription, Dict[str, Any]]]]:
        profile = await self.get_customer_profile(profile_id)
        subscriptions = await fetch_each(profile.subscription_ids, self.get_subscription, "subscriptionId")
        return profile, subscriptions

    # Payment profiles

    async def get_customer_payment_profile_list(self, profile_id: str) -> List[PaymentProfile]:
        result = checked(await self.client.get_customer_profile(profile_id), "getCustomerProfile")
        return [_parse(PaymentProfile, item) for item in extract_payment_profiles(result)]

    async def get_customer_payment_profile(self, profile_id: str, payment_profile_id: str) -> PaymentProfile:
        result = checked(
            await self.client.get_customer_payment_profile(profile_id, payment_profile_id),
            "getCustomerPaymentProfile",
        )
        return _parse(PaymentProfile, normalize_payment_profile(result))

    async def update_customer_payment_profile(
        self,
        profile_id: str,
        payment_profile_id: str,
        first_name: str,
        last_name: str,
    ) -> str:
        """Rename the billing contact while sending every other stored field back unchanged."""
        result = checked(
            await self.client.get_customer_payment_profile(profile_id, payment_profile_id),
            "getCustomerPaymentProfile",
        )
        update = build_payment_profile_update(
            normalize_payment_profile(result), payment_profile_id, first_name, last_name
        )
        checked(
            await self.client.update_customer_payment_profile(
                profile_id, update, self.settings.hosted_profile_validation_mode
            ),
            "updateCustomerPaymentProfile",
        )
        return payment_profile_id

    async def delete_customer_payment_profile(self, profile_id: str, payment_profile_id: str) -> None:
        checked(
            await self.client.delete_customer_payment_profile(profile_id, payment_profile_id),
            "deleteCustomerPaymentProfile",
        )

    # Recurring billing

    async def create_subscription(self, request: SubscriptionCreate) -> str:
        subscription, ref_id = build_subscription(request)
        result = checked(
            await self.client.create_subscription(subscription, ref_id),
            "ARBCreateSubscription",
        )
        subscription_id = result.get("subscriptionId")
        if not subscription_id:
            raise MalformedResponse("No subscription ID received from Authorize.Net")
        return str(subscription_id)

    async def get_subscription(self, subscription_id: str) -> Subscription:
        result = checked(await self.client.get_subscription(subscription_id), "ARBGetSubscription")
        return _parse(Subscription, normalize_subscription(result, subscription_id))

    async def cancel_subscription(self, subscription_id: str) -> None:
        checked(await self.client.cancel_subscription(subscription_id), "ARBCancelSubscription")

    # Hosted forms

    async def get_hosted_profile_page_token(self, profile_id: str, return_base: str) -> str:
        settings = hosted_forms.hosted_profile_settings(
            return_base, self.settings.hosted_profile_validation_mode
        )
        result = checked(
            await self.client.get_hosted_profile_page(profile_id, settings),
            "getHostedProfilePage",
        )
        return _require_token(result)

    async def get_hosted_payment_page_token(self, amount: Optional[str], return_base: str) -> str:
        if amount:
            amount = _amount(amount, "amount")
        result = checked(
            await self.client.get_hosted_payment_page(
                hosted_forms.hosted_payment_transaction(amount),
                hosted_forms.hosted_payment_settings(return_base, self.settings.api_prefix),
            ),
            "getHostedPaymentPage",
        )
        return _require_token(result)

    async def close(self):
        await self.client.close()


def _parse(model: Type[M], data: Any) -> M:
    """Validate vendor data into ``model``; a shape it cannot hold is a malformed response."""
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        logger.warning("Unexpected %s shape from Authorize.Net: %s", model.__name__, exc)
        raise MalformedResponse(
            f"Unexpected {model.__name__} structure from Authorize.Net API"
        ) from exc


def _require_token(result: Dict[str, Any]) -> str:
    token = result.get("token")
    if not token:
        raise MalformedResponse("No token received from Authorize.Net")
    return str(token)


def build_subscription(request: SubscriptionCreate) -> Tuple[Dict[str, Any], Optional[str]]:
    """Validate a create request and build the ARB ``subscription`` element, applying defaults."""
    if not request.customer_profile_id or not request.payment_profile_id:
        raise ValidationError(
            "Please provide both customer profile ID and payment profile ID",
            error="Customer Profile ID and Payment Profile ID are required",
        )
    if not request.subscription_name or not request.amount:
        raise ValidationError(
            "Please provide subscription name and amount",
            error="Subscription name and amount are required",
        )

    amount = _amount(request.amount, "amount")
    trial_amount = _amount(request.trial_amount or "0.00", "trialAmount")
    interval_unit = request.interval_unit or "months"
    if interval_unit not in INTERVAL_UNITS:
        raise ValidationError(
            f"intervalUnit must be one of: {', '.join(INTERVAL_UNITS)}",
            error="Invalid interval unit",
        )
    start_date = request.start_date or date.today().isoformat()
    try:
        date.fromisoformat(start_date)
    except ValueError:
        raise ValidationError("startDate must use the YYYY-MM-DD format", error="Invalid start date")

    subscription = {
        "name": request.subscription_name,
        "paymentSchedule": {
            "interval": {"length": request.interval_length or "1", "unit": interval_unit},
            "startDate": start_date,
            "totalOccurrences": request.total_occurrences or "12",
            "trialOccurrences": request.trial_occurrences or "0",
        },
        "amount": amount,
        "trialAmount": trial_amount,
        "profile": {
            "customerProfileId": request.customer_profile_id,
            "customerPaymentProfileId": request.payment_profile_id,
        },
    }
    return subscription, request.ref_id


def _amount(value: str, field: str) -> str:
    normalized = normalize_amount(value)
    try:
        number = float(normalized)
        valid = math.isfinite(number) and number >= 0
    except (TypeError, ValueError):
        valid = False
    if not valid:
        raise ValidationError(f"{field} must be a non-negative decimal number", error="Invalid amount")
    return normalized
