from fastapi import APIRouter, Depends, Request

from learnhub.core.config import settings
from learnhub.core.rate_limit import limiter
from learnhub.courses.schemas.promo import PromoValidateRequest, PromoValidateResponse
from learnhub.courses.services.promo_service import PromoRegistry, get_promo_registry

router = APIRouter(prefix="/promo")


@router.post("/validate", response_model=PromoValidateResponse)
@limiter.limit(settings.PROMO_VALIDATE_RATE_LIMIT)
async def validate_promo_code(
    request: Request,
    payload: PromoValidateRequest,
    registry: PromoRegistry = Depends(get_promo_registry),
) -> PromoValidateResponse:
    """Preview a promo code's discount without enrolling."""
    promo = registry.validate(payload.promo_code)
    return PromoValidateResponse(
        code=promo.code,
        discount_percent=promo.discount_percent,
        description=promo.description,
    )
