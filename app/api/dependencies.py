"""Shared API dependencies."""
from fastapi import Request

from app.core.exceptions import ConfigurationError
from app.services.authorize_net_service import AuthorizeNetService


def get_payment_service(request: Request) -> AuthorizeNetService:
    """Return the service built in the application lifespan."""
    service = getattr(request.app.state, "payment_service", None)
    if service is None:
        raise ConfigurationError(
            "API_LOGIN_ID and TRANSACTION_KEY environment variables are required",
            error="Payment processor not configured",
        )
    return service


__all__ = ["get_payment_service"]
