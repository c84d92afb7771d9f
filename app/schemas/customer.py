from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from app.schemas.base import VendorModel
from app.schemas.payment_profile import PaymentProfile


class CustomerProfile(VendorModel):
    profile_id: str
    customer_profile_id: Optional[str] = None
    merchant_customer_id: Optional[str] = None
    email: Optional[str] = None
    description: Optional[str] = None
    payment_profiles: List[PaymentProfile] = Field(default_factory=list)
    subscription_ids: List[str] = Field(default_factory=list)

    def payment_method_summary(self) -> str:
        if not self.payment_profiles:
            return "No payment methods"
        return ", ".join(profile.describe() for profile in self.payment_profiles)
