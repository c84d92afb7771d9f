"""
Payment Profile API Routes
Stored payment methods for a customer profile
"""
from typing import Optional

from fastapi import APIRouter, Depends

from app.api.dependencies import get_payment_service
from app.api.responses import error_response, require_ids
from app.core.exceptions import AppError, ValidationError
from app.core.logger import get_logger
from app.schemas.payment_profile import PaymentProfileNameUpdate
from app.services.authorize_net_service import AuthorizeNetService

logger = get_logger(__name__)

router = APIRouter()

IDS_REQUIRED = "Profile ID and Payment Profile ID are required"
IDS_MESSAGE = "Please provide both customer profile ID and payment profile ID"


@router.get("/payment-profiles/{profile_id}")
async def list_payment_profiles(
    profile_id: str,
    service: AuthorizeNetService = Depends(get_payment_service),
):
    try:
        require_ids("Profile ID is required", "Please provide a customer profile ID", profile_id)
        payment_profiles = await service.get_customer_payment_profile_list(profile_id)
    except AppError as exc:
        logger.error("Error getting payment profiles for %s: %s", profile_id, exc)
        return error_response("Failed to get payment profiles", exc)
    return {"success": True, "paymentProfiles": [item.to_api() for item in payment_profiles]}


@router.get("/payment-profile/{profile_id}/{payment_profile_id}")
async def get_payment_profile(
    profile_id: str,
    payment_profile_id: str,
    service: AuthorizeNetService = Depends(get_payment_service),
):
    try:
        require_ids(IDS_REQUIRED, IDS_MESSAGE, profile_id, payment_profile_id)
        payment_profile = await service.get_customer_payment_profile(profile_id, payment_profile_id)
    except AppError as exc:
        logger.error("Error getting payment profile %s/%s: %s", profile_id, payment_profile_id, exc)
        return error_response("Failed to get payment profile", exc)
    return {"success": True, "paymentProfile": payment_profile.to_api()}


@router.put("/payment-profile/{profile_id}/{payment_profile_id}")
async def update_payment_profile(
    profile_id: str,
    payment_profile_id: str,
    payload: Optional[PaymentProfileNameUpdate] = None,
    service: AuthorizeNetService = Depends(get_payment_service),
):
    """
    Change the billing name on a stored payment method
    """
    try:
        require_ids(IDS_REQUIRED, IDS_MESSAGE, profile_id, payment_profile_id)
        if payload is None or not payload.first_name or not payload.last_name:
            raise ValidationError(
                "Please provide firstName and lastName",
                error="First name and last name are required",
            )
        updated_id = await service.update_customer_payment_profile(
            profile_id, payment_profile_id, payload.first_name, payload.last_name
        )
    except AppError as exc:
        logger.error("Error updating payment profile %s/%s: %s", profile_id, payment_profile_id, exc)
        return error_response("Failed to update payment profile", exc)
    return {
        "success": True,
        "message": "Payment profile updated successfully",
        "paymentProfileId": updated_id,
    }


@router.delete("/payment-profile/{profile_id}/{payment_profile_id}")
async def delete_payment_profile(
    profile_id: str,
    payment_profile_id: str,
    service: AuthorizeNetService = Depends(get_payment_service),
):
    try:
        require_ids(IDS_REQUIRED, IDS_MESSAGE, profile_id, payment_profile_id)
        await service.delete_customer_payment_profile(profile_id, payment_profile_id)
    except AppError as exc:
        logger.error("Error deleting payment profile %s/%s: %s", profile_id, payment_profile_id, exc)
        return error_response("Failed to delete payment profile", exc)
    return {"success": True, "message": "Payment profile deleted successfully"}
