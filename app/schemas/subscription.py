from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import computed_field

from app.schemas.base import RequestModel, VendorModel
from app.services.subscription_lifecycle import is_cancellable


class Interval(VendorModel):
    length: Optional[str] = None
    unit: Optional[str] = None


class PaymentSchedule(VendorModel):
    interval: Optional[Interval] = None
    start_date: Optional[str] = None
    total_occurrences: Optional[str] = None
    trial_occurrences: Optional[str] = None


class SubscriptionProfile(VendorModel):
    customer_profile_id: Optional[str] = None
    customer_payment_profile_id: Optional[str] = None
    payment_profile: Optional[Dict[str, Any]] = None


class Subscription(VendorModel):
    subscription_id: str
    name: Optional[str] = None
    status: Optional[str] = None
    amount: Optional[str] = None
    trial_amount: Optional[str] = None
    payment_schedule: Optional[PaymentSchedule] = None
    profile: Optional[SubscriptionProfile] = None

    @computed_field
    @property
    def cancellable(self) -> bool:
        return is_cancellable(self.status)


class SubscriptionCreate(RequestModel):
    customer_profile_id: Optional[str] = None
    payment_profile_id: Optional[str] = None
    subscription_name: Optional[str] = None
    amount: Optional[str] = None
    interval_length: Optional[str] = None
    interval_unit: Optional[str] = None
    start_date: Optional[str] = None
    total_occurrences: Optional[str] = None
    trial_occurrences: Optional[str] = None
    trial_amount: Optional[str] = None
    ref_id: Optional[str] = None
