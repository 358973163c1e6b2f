"""FastAPI application factory for the delivery pricing service.

Usage:
    delivery-pricing serve --host 0.0.0.0 --port 8000
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from delivery_pricing.logging import get_logger
from delivery_pricing.persistence import PersistenceError
from delivery_pricing.quoting import QuoteService

from .routes import health_router, router

logger = get_logger(__name__, component="api")


def create_app(quote_service: QuoteService, default_owner_id: Optional[str] = None) -> FastAPI:
    """Build the HTTP application around an already wired QuoteService.

    Args:
        quote_service: Service shared by every request
        default_owner_id: Owner used when a request carries no user identity

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="Delivery Pricing API",
        description="Delivery zone matching, price estimates and order confirmation",
    )
    app.state.quote_service = quote_service
    app.state.default_owner_id = default_owner_id

    # ---------------------------------------------------------------------------
    # Error mapping
    # ---------------------------------------------------------------------------
    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "invalid_request", "message": "Invalid request body"},
        )

    @app.exception_handler(PersistenceError)
    async def store_unavailable(request: Request, exc: PersistenceError):
        logger.error(
            f"Address store failure: {exc}",
            extra={"event": "api.store_error", "path": request.url.path},
        )
        return JSONResponse(
            status_code=503,
            content={
                "error": "address_store_unavailable",
                "message": "Address store is temporarily unavailable",
            },
        )

    app.include_router(router)
    app.include_router(health_router)
    return app
