"""
Subscription API Routes
Create, inspect and cancel recurring billing subscriptions
"""
from typing import Optional

from fastapi import APIRouter, Depends

from app.api.dependencies import get_payment_service
from app.api.responses import error_response, require_ids
from app.core.exceptions import AppError
from app.core.logger import get_logger
from app.schemas.subscription import SubscriptionCreate
from app.services.authorize_net_service import AuthorizeNetService

logger = get_logger(__name__)

router = APIRouter()


@router.post("/subscription")
async def create_subscription(
    payload: Optional[SubscriptionCreate] = None,
    service: AuthorizeNetService = Depends(get_payment_service),
):
    try:
        subscription_id = await service.create_subscription(payload or SubscriptionCreate())
    except AppError as exc:
        logger.error("Error creating subscription: %s", exc)
        return error_response("Failed to create subscription", exc)
    return {
        "success": True,
        "message": "Subscription created successfully",
        "subscriptionId": subscription_id,
    }


@router.get("/subscription/{subscription_id}")
async def get_subscription(
    subscription_id: str,
    service: AuthorizeNetService = Depends(get_payment_service),
):
    try:
        require_ids("Subscription ID is required", "Please provide a subscription ID", subscription_id)
        subscription = await service.get_subscription(subscription_id)
    except AppError as exc:
        logger.error("Error getting subscription %s: %s", subscription_id, exc)
        return error_response("Failed to get subscription", exc)
    return {"success": True, "subscription": subscription.to_api()}


@router.delete("/subscription/{subscription_id}")
async def cancel_subscription(
    subscription_id: str,
    service: AuthorizeNetService = Depends(get_payment_service),
):
    """
    Cancel a subscription. Cancelling twice surfaces the processor's error.
    """
    try:
        require_ids("Subscription ID is required", "Please provide a subscription ID", subscription_id)
        await service.cancel_subscription(subscription_id)
    except AppError as exc:
        logger.error("Error cancelling subscription %s: %s", subscription_id, exc)
        return error_response("Failed to cancel subscription", exc)
    return {"success": True, "message": "Subscription cancelled successfully"}
