from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import httpx

from app.config import Settings
from app.core.exceptions import ConfigurationError, MalformedResponse, VendorTransportError
from app.core.logger import get_logger

logger = get_logger(__name__)

REDACTED = "***"


class AuthorizeNetClient:
    """Authorize.Net JSON API client.

    Every vendor operation is a POST of ``{"<operation>Request": {...}}`` to one
    endpoint, authenticated by ``merchantAuthentication`` inside the body. The
    methods here return the parsed body untouched; unwrapping and result-code
    handling happen in ``app.services``.
    """

    def __init__(
        self,
        api_login_id: str,
        transaction_key: str,
        endpoint: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_login_id or not transaction_key:
            raise ConfigurationError("API_LOGIN_ID and TRANSACTION_KEY environment variables are required")
        self.api_login_id = api_login_id
        self.transaction_key = transaction_key
        self.endpoint = endpoint
        self.client = httpx.AsyncClient(
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "AuthorizeNetClient":
        return cls(
            api_login_id=settings.api_login_id,
            transaction_key=settings.transaction_key.get_secret_value(),
            endpoint=settings.api_endpoint,
            timeout=settings.authorize_net_timeout,
            transport=transport,
        )

    def _merchant_authentication(self) -> Dict[str, str]:
        return {"name": self.api_login_id, "transactionKey": self.transaction_key}

    def build_envelope(self, operation: str, fields: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        # merchantAuthentication must be the first element; the API converts to XML internally.
        request: Dict[str, Any] = {"merchantAuthentication": self._merchant_authentication()}
        request.update(fields or {})
        return {f"{operation}Request": request}

    @staticmethod
    def redacted(envelope: Dict[str, Any]) -> str:
        """JSON text of ``envelope`` with the transaction key masked."""
        masked = {}
        for name, request in envelope.items():
            request = dict(request)
            auth = request.get("merchantAuthentication")
            if isinstance(auth, dict):
                request["merchantAuthentication"] = {**auth, "transactionKey": REDACTED}
            masked[name] = request
        return json.dumps(masked)

    async def send(self, operation: str, fields: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        envelope = self.build_envelope(operation, fields)
        logger.debug("Authorize.Net %s request: %s", operation, self.redacted(envelope))
        try:
            response = await self.client.post(self.endpoint, json=envelope)
        except httpx.TimeoutException as exc:
            logger.warning("Authorize.Net %s timed out: %s", operation, exc)
            raise VendorTransportError(f"Authorize.Net {operation} request timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning("Authorize.Net %s failed: %s", operation, exc)
            raise VendorTransportError(f"Failed to reach Authorize.Net: {exc}") from exc

        try:
            body = json.loads(response.content.decode("utf-8-sig")) if response.content else None
        except (UnicodeDecodeError, ValueError):
            body = None
        logger.debug("Authorize.Net %s response (%s): %s", operation, response.status_code, body)

        if not isinstance(body, dict):
            if response.is_error:
                raise VendorTransportError(
                    f"Authorize.Net returned HTTP {response.status_code}: {response.text[:200]}"
                )
            raise MalformedResponse("Unexpected response structure from Authorize.Net API")
        return body

    # Customer profiles

    async def create_customer_profile(self, email: str) -> Dict[str, Any]:
        return await self.send(
            "createCustomerProfile",
            {"profile": {"merchantCustomerId": email, "email": email}},
        )

    async def get_customer_profile(self, customer_profile_id: str) -> Dict[str, Any]:
        return await self.send("getCustomerProfile", {"customerProfileId": customer_profile_id})

    async def get_customer_profile_by_merchant_id(self, merchant_customer_id: str) -> Dict[str, Any]:
        return await self.send("getCustomerProfile", {"merchantCustomerId": merchant_customer_id})

    async def get_customer_profile_ids(self) -> Dict[str, Any]:
        return await self.send("getCustomerProfileIds")

    # Payment profiles

    async def get_customer_payment_profile(
        self, customer_profile_id: str, payment_profile_id: str
    ) -> Dict[str, Any]:
        return await self.send(
            "getCustomerPaymentProfile",
            {
                "customerProfileId": customer_profile_id,
                "customerPaymentProfileId": payment_profile_id,
            },
        )

    async def update_customer_payment_profile(
        self,
        customer_profile_id: str,
        payment_profile: Dict[str, Any],
        validation_mode: str = "testMode",
    ) -> Dict[str, Any]:
        return await self.send(
            "updateCustomerPaymentProfile",
            {
                "customerProfileId": customer_profile_id,
                "paymentProfile": payment_profile,
                "validationMode": validation_mode,
            },
        )

    async def delete_customer_payment_profile(
        self, customer_profile_id: str, payment_profile_id: str
    ) -> Dict[str, Any]:
        return await self.send(
            "deleteCustomerPaymentProfile",
            {
                "customerProfileId": customer_profile_id,
                "customerPaymentProfileId": payment_profile_id,
            },
        )

    # Recurring billing

    async def create_subscription(
        self, subscription: Dict[str, Any], ref_id: Optional[str] = None
    ) -> Dict[str, Any]:
        fields: Dict[str, Any] = {}
        if ref_id:
            fields["refId"] = ref_id
        fields["subscription"] = subscription
        return await self.send("ARBCreateSubscription", fields)

    async def get_subscription(self, subscription_id: str) -> Dict[str, Any]:
        return await self.send("ARBGetSubscription", {"subscriptionId": subscription_id})

    async def cancel_subscription(self, subscription_id: str) -> Dict[str, Any]:
        return await self.send("ARBCancelSubscription", {"subscriptionId": subscription_id})

    # Hosted forms

    async def get_hosted_profile_page(
        self, customer_profile_id: str, settings: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        return await self.send(
            "getHostedProfilePage",
            {
                "customerProfileId": customer_profile_id,
                "hostedProfileSettings": {"setting": settings},
            },
        )

    async def get_hosted_payment_page(
        self, transaction_request: Dict[str, Any], settings: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        # transactionRequest has to precede hostedPaymentSettings
        return await self.send(
            "getHostedPaymentPage",
            {
                "transactionRequest": transaction_request,
                "hostedPaymentSettings": {"setting": settings},
            },
        )

    async def close(self):
        await self.client.aclose()
