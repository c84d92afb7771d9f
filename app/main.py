"""
Authorize.Net Admin Console - FastAPI Application
Customer profiles, stored payment methods and recurring subscriptions
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import datetime
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from app.config import settings
from app.core.exceptions import AppError, ConfigurationError
from app.core.logger import configure_logging, get_logger
from app.integrations.authorize_net import AuthorizeNetClient
from app.services.authorize_net_service import AuthorizeNetService

from app.api.routes import (
    health,
    customers,
    payment_profiles,
    subscriptions,
    hosted_forms,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    # Startup
    configure_logging(settings.log_level)
    logger.info("Starting Authorize.Net Admin Console API...")

    service = None
    try:
        service = AuthorizeNetService(AuthorizeNetClient.from_settings(settings), settings)
        logger.info("Authorize.Net client ready (%s): %s", settings.authorize_net_env, settings.api_endpoint)
    except ConfigurationError as e:
        logger.error(f"Authorize.Net client not configured: {str(e)}")
    app.state.payment_service = service

    logger.info(f"API running on {settings.app_env} environment")
    yield
    # Shutdown
    if service is not None:
        await service.close()
    logger.info("Shutting down Authorize.Net Admin Console API...")


app = FastAPI(
    title=settings.app_name,
    description="Backend API for the Authorize.Net admin console",
    version="1.0.0",
    lifespan=lifespan,
)

# Respect proxy forwarded proto/host so Origin-derived return URLs stay https.
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.error("Unhandled %s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error or "Request failed", "message": exc.message or str(exc)},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "message": details or "Invalid request body"},
    )


@app.get("/")
async def root() -> dict:
    return {
        "name": settings.app_name,
        "environment": settings.app_env,
        "timestamp": datetime.utcnow().isoformat(),
    }


app.include_router(health.router, tags=["Health"])
app.include_router(customers.router, prefix=settings.api_prefix, tags=["Customers"])
app.include_router(payment_profiles.router, prefix=settings.api_prefix, tags=["Payment Profiles"])
app.include_router(subscriptions.router, prefix=settings.api_prefix, tags=["Subscriptions"])
app.include_router(hosted_forms.router, prefix=settings.api_prefix, tags=["Hosted Forms"])
