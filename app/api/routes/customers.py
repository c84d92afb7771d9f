"""
Customers API Routes
Customer profile list and per-customer detail
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from app.api.dependencies import get_payment_service
from app.api.responses import error_response, require_ids
from app.core.exceptions import AppError
from app.core.logger import get_logger
from app.schemas.customer import CustomerProfile
from app.services.authorize_net_service import AuthorizeNetService

logger = get_logger(__name__)

router = APIRouter()


def _to_api(item: Any) -> Dict[str, Any]:
    return item.to_api() if hasattr(item, "to_api") else item


@router.get("/customers")
async def list_customers(service: AuthorizeNetService = Depends(get_payment_service)):
    """
    List every customer profile. A profile that fails to load is returned as
    {profileId, error} so the rest of the list still renders.
    """
    try:
        customers = await service.list_customers()
    except AppError as exc:
        logger.error("Error getting customer list: %s", exc)
        return error_response("Failed to get customer list", exc)

    items = []
    for customer in customers:
        item = _to_api(customer)
        if isinstance(customer, CustomerProfile):
            item["paymentMethodSummary"] = customer.payment_method_summary()
        items.append(item)
    return {"success": True, "count": len(items), "customers": items}


@router.get("/customers/{profile_id}")
async def get_customer(
    profile_id: str,
    service: AuthorizeNetService = Depends(get_payment_service),
):
    """
    Customer profile with its payment profiles and resolved subscriptions
    """
    try:
        require_ids("Profile ID is required", "Please provide a customer profile ID", profile_id)
        profile, subscriptions = await service.get_customer_detail(profile_id)
    except AppError as exc:
        logger.error("Error getting customer details for %s: %s", profile_id, exc)
        return error_response("Failed to get customer details", exc)

    customer = profile.to_api()
    payment_profiles = customer.pop("paymentProfiles", [])
    return {
        "success": True,
        "customerProfile": customer,
        "paymentProfiles": payment_profiles,
        "subscriptions": [_to_api(item) for item in subscriptions],
    }
