import json
from typing import Any

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    BACKEND_CORS_ORIGINS: str = '["http://localhost:5173","http://localhost:3000"]'

    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "LearnHub API"
    DEBUG: bool = False

    # Promo codes: JSON object {"CODE": {"discount": 0.5, "description": "..."}}
    PROMO_CODES: str = '{"BFSALE25": {"discount": 0.5, "description": "Black Friday Sale - 50% off"}}'

    RATE_LIMIT_ENABLED: bool = True
    PROMO_VALIDATE_RATE_LIMIT: str = "20/minute"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @property
    def cors_origins(self) -> list[str]:
        if isinstance(self.BACKEND_CORS_ORIGINS, str):
            try:
                parsed: list[str] = json.loads(self.BACKEND_CORS_ORIGINS)
                return parsed
            except json.JSONDecodeError:
                return ["http://localhost:5173", "http://localhost:3000"]
        return self.BACKEND_CORS_ORIGINS

    @property
    def promo_codes(self) -> dict[str, dict[str, Any]]:
        parsed: dict[str, dict[str, Any]] = json.loads(self.PROMO_CODES)
        return parsed


settings = Settings()
