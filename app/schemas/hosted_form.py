from __future__ import annotations

from typing import Optional

from app.schemas.base import RequestModel


class HostedTokenRequest(RequestModel):
    email: Optional[str] = None


class HostedTokenEditRequest(RequestModel):
    customer_profile_id: Optional[str] = None


class HostedPaymentTokenRequest(RequestModel):
    amount: Optional[str] = None
