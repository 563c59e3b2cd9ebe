"""
FastAPI application entry point.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from moodflow import __version__
from moodflow.api.v1.api import api_router
from moodflow.core.config import settings
from moodflow.core.database import create_db_and_tables
from moodflow.core.logging_config import log_info, setup_logging
from moodflow.core.rate_limiting import limiter, rate_limit_exceeded_handler
from moodflow.middleware.request_logging import RequestLoggingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    log_info(f"{settings.app_name} {__version__} started ({settings.environment})")
    yield


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report invalid or missing request fields as 400 Bad Request."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app() -> FastAPI:
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        description="Mood journal API: record daily moods and view trends.",
        lifespan=lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()
