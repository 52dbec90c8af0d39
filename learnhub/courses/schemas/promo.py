from pydantic import BaseModel, Field


class PromoValidateRequest(BaseModel):
    # Optional so that an absent code is reported as MISSING_CODE, not a schema error
    promo_code: str | None = Field(None, max_length=64)


class PromoValidateResponse(BaseModel):
    code: str
    discount_percent: str
    description: str
