"""
Hosted Form API Routes
Tokens for the processor-hosted iframe pages and the endpoints the processor
posts back to when the shopper leaves them
"""
import re
from typing import Optional

from fastapi import APIRouter, Depends, Request

from app.api.dependencies import get_payment_service
from app.api.responses import error_response, require_ids
from app.core.exceptions import AppError, ValidationError
from app.core.logger import get_logger
from app.schemas.hosted_form import HostedPaymentTokenRequest, HostedTokenEditRequest, HostedTokenRequest
from app.services import hosted_forms
from app.services.authorize_net_service import AuthorizeNetService

logger = get_logger(__name__)

router = APIRouter()

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _return_base(request: Request, service: AuthorizeNetService) -> str:
    return hosted_forms.resolve_return_base(
        request.headers.get("origin"),
        request.headers.get("referer"),
        service.settings.frontend_url,
    )


@router.post("/hosted-token")
async def hosted_token(
    request: Request,
    payload: Optional[HostedTokenRequest] = None,
    service: AuthorizeNetService = Depends(get_payment_service),
):
    """
    Find or create the customer profile for an email, then issue a hosted
    profile page token for adding a payment method to it.
    """
    email = (payload.email or "").strip() if payload else ""
    try:
        if not email:
            raise ValidationError("Please provide an email address", error="Email is required")
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("Please provide a valid email address", error="Invalid email format")
    except ValidationError as exc:
        return error_response("Invalid request", exc)

    try:
        profile_id, profile_created = await service.get_or_create_customer_profile(email)
    except AppError as exc:
        logger.error("Error managing customer profile for %s: %s", email, exc)
        return error_response("Failed to manage customer profile", exc)

    try:
        token = await service.get_hosted_profile_page_token(profile_id, _return_base(request, service))
    except AppError as exc:
        logger.error("Error getting hosted payment token: %s", exc)
        return error_response("Failed to get hosted payment token", exc)

    return {
        "token": token,
        "profileId": profile_id,
        "profileCreated": profile_created,
        "isSandbox": not service.settings.is_production,
    }


@router.post("/hosted-token-edit")
async def hosted_token_edit(
    request: Request,
    payload: Optional[HostedTokenEditRequest] = None,
    service: AuthorizeNetService = Depends(get_payment_service),
):
    profile_id = payload.customer_profile_id if payload else None
    try:
        if not profile_id:
            raise ValidationError(
                "Please provide a customer profile ID", error="Customer Profile ID is required"
            )
        token = await service.get_hosted_profile_page_token(profile_id, _return_base(request, service))
    except AppError as exc:
        logger.error("Error getting hosted payment token for editing: %s", exc)
        return error_response("Failed to get hosted payment token", exc)
    return {
        "token": token,
        "formUrl": hosted_forms.manage_form_url(service.settings),
        "isSandbox": not service.settings.is_production,
    }


@router.post("/hosted-profile-add/{profile_id}")
async def hosted_profile_add(
    profile_id: str,
    request: Request,
    service: AuthorizeNetService = Depends(get_payment_service),
):
    try:
        require_ids("Profile ID is required", "Please provide a customer profile ID", profile_id)
        token = await service.get_hosted_profile_page_token(profile_id, _return_base(request, service))
    except AppError as exc:
        logger.error("Error getting hosted profile token for adding payment: %s", exc)
        return error_response("Failed to get hosted profile token", exc)
    return {
        "token": token,
        "formUrl": hosted_forms.add_payment_form_url(service.settings),
        "isSandbox": not service.settings.is_production,
    }


@router.post("/hosted-profile-edit/{profile_id}/{payment_profile_id}")
async def hosted_profile_edit(
    profile_id: str,
    payment_profile_id: str,
    request: Request,
    service: AuthorizeNetService = Depends(get_payment_service),
):
    try:
        require_ids(
            "Profile ID and Payment Profile ID are required",
            "Please provide both customer profile ID and payment profile ID",
            profile_id,
            payment_profile_id,
        )
        token = await service.get_hosted_profile_page_token(profile_id, _return_base(request, service))
    except AppError as exc:
        logger.error("Error getting hosted profile token for editing: %s", exc)
        return error_response("Failed to get hosted profile token", exc)
    return {
        "token": token,
        "formUrl": hosted_forms.edit_payment_form_url(service.settings),
        "paymentProfileId": payment_profile_id,
        "isSandbox": not service.settings.is_production,
    }


@router.post("/hosted-payment-token")
async def hosted_payment_token(
    request: Request,
    payload: Optional[HostedPaymentTokenRequest] = None,
    service: AuthorizeNetService = Depends(get_payment_service),
):
    """
    Token for the hosted payment page (card capture with a charge, or a
    one-cent authorization when no amount is given)
    """
    amount = payload.amount if payload else None
    try:
        token = await service.get_hosted_payment_page_token(amount, _return_base(request, service))
    except AppError as exc:
        logger.error("Error getting hosted payment page token: %s", exc)
        return error_response("Failed to get hosted payment token", exc)
    return {
        "token": token,
        "formUrl": hosted_forms.payment_form_url(service.settings),
        "isSandbox": not service.settings.is_production,
    }


async def _read_callback(request: Request) -> dict:
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            body = await request.json()
        except ValueError:
            body = None
        return body if isinstance(body, dict) else {"body": body}
    if "form" in content_type:
        form = await request.form()
        return dict(form)
    raw = await request.body()
    return {"body": raw.decode("utf-8", errors="replace")} if raw else {}


@router.post("/payment-response")
async def payment_response(request: Request):
    logger.info("Payment response received: %s", await _read_callback(request))
    return {"success": True, "message": "Payment processed"}


@router.post("/payment-cancel")
async def payment_cancel(request: Request):
    logger.info("Payment cancelled: %s", await _read_callback(request))
    return {"cancelled": True, "message": "Payment cancelled"}


@router.post("/profile-return")
async def profile_return(request: Request):
    logger.info("Profile return received: %s", await _read_callback(request))
    return {"success": True, "message": "Payment profile added successfully"}
