from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import learnhub.db.base  # noqa: F401  registers all models on Base.metadata
from learnhub.core.config import settings
from learnhub.core.exceptions import register_exception_handlers
from learnhub.core.log_config import RequestLoggingMiddleware, setup_logging
from learnhub.core.rate_limit import limiter
from learnhub.courses.routes import content, courses, enrollment, promo
from learnhub.courses.services.promo_service import get_promo_registry
from learnhub.db.session import get_db

setup_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Fails startup on a malformed PROMO_CODES setting.
    registry = get_promo_registry()
    logger.info("promo_registry_loaded", codes=len(registry))

    yield

    logger.info("shutdown")


app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
    lifespan=lifespan,
    description="Course subscription backend: enrollments, promo codes and course access",
    version="1.0.0",
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]
register_exception_handlers(app, debug=settings.DEBUG)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(courses.router, prefix=settings.API_V1_PREFIX, tags=["courses"])
app.include_router(content.router, prefix=settings.API_V1_PREFIX, tags=["content"])
app.include_router(enrollment.router, prefix=settings.API_V1_PREFIX, tags=["enrollments"])
app.include_router(promo.router, prefix=settings.API_V1_PREFIX, tags=["promo"])


@app.get("/")
async def root() -> dict[str, str]:
    return {"message": settings.PROJECT_NAME, "version": "1.0.0", "status": "running"}


@app.get("/health")
async def health_check(db: Session = Depends(get_db)) -> dict[str, str]:
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as e:
        logger.error("health_check_database_failed", error=str(e))
        db_status = "unhealthy"

    overall = "healthy" if db_status == "healthy" else "degraded"
    return {"status": overall, "database": db_status}
