"""FastAPI endpoints for delivery estimates and order price confirmation."""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse

from delivery_pricing.api.schemas import ConfirmRequest, ErrorResponse, EstimateRequest, HealthResponse
from delivery_pricing.matching import MatchResult
from delivery_pricing.persistence import AddressNotFoundError
from delivery_pricing.quoting import ConfirmedPrice, PriceConflict, QuoteService

router = APIRouter(prefix="/api/v1", tags=["delivery"])
health_router = APIRouter(tags=["health"])


def get_quote_service(request: Request) -> QuoteService:
    return request.app.state.quote_service


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, message=message).model_dump(),
    )


def _resolve_owner(request: Request, header_owner: Optional[str], body_owner: Optional[str]) -> Optional[str]:
    """Pick the requesting user: X-User-Id header, then body userId, then the configured default."""
    for candidate in (header_owner, body_owner, request.app.state.default_owner_id):
        if candidate and candidate.strip():
            return candidate.strip()
    return None


def _address_not_found() -> JSONResponse:
    return _error(404, "address_not_found", "Address not found or does not belong to user")


@router.post("/delivery/estimate")
def estimate_delivery(
    body: EstimateRequest,
    request: Request,
    x_user_id: Optional[str] = Header(None),
    service: QuoteService = Depends(get_quote_service),
):
    if not body.address_id or not body.address_id.strip():
        return _error(400, "validation_error", "addressId is required")

    owner_id = _resolve_owner(request, x_user_id, body.user_id)
    if owner_id is None:
        return _error(401, "unauthenticated", "A user identity is required")

    try:
        result = service.estimate(owner_id, body.address_id.strip())
    except AddressNotFoundError:
        return _address_not_found()

    if isinstance(result, MatchResult):
        return JSONResponse(status_code=200, content=result.to_dict())
    return JSONResponse(status_code=422, content=result.to_dict())


@router.post("/orders/confirm")
def confirm_order(
    body: ConfirmRequest,
    request: Request,
    x_user_id: Optional[str] = Header(None),
    service: QuoteService = Depends(get_quote_service),
):
    if not body.address_id or not body.address_id.strip():
        return _error(400, "validation_error", "addressId is required")
    if body.client_price is None or body.client_price <= 0:
        return _error(400, "validation_error", "clientPrice must be greater than 0")

    owner_id = _resolve_owner(request, x_user_id, body.user_id)
    if owner_id is None:
        return _error(401, "unauthenticated", "A user identity is required")

    try:
        result = service.confirm_order(owner_id, body.address_id.strip(), body.client_price)
    except AddressNotFoundError:
        return _address_not_found()

    if isinstance(result, ConfirmedPrice):
        return JSONResponse(status_code=200, content=result.to_dict())
    if isinstance(result, PriceConflict):
        return JSONResponse(status_code=409, content=result.to_dict())
    return JSONResponse(status_code=422, content=result.to_dict())


@health_router.get("/healthz", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    return HealthResponse(zones=len(request.app.state.quote_service.matcher.catalog))
