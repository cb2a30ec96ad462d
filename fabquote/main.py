from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from fabquote.api.v1.router import api_router
from fabquote.core.config import get_settings
from fabquote.core.errors import PipelineError
from fabquote.core.logging import configure_logging

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    settings = get_settings()
    if not settings.s3_bucket:
        logger.warning("storage_not_configured")
    logger.info("startup", env=settings.app_env)
    yield
    logger.info("shutdown")


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_log_middleware(request: Request, call_next):
        response = await call_next(request)
        logger.info(
            "request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
        )
        return response

    @app.exception_handler(PipelineError)
    async def pipeline_error_handler(_: Request, exc: PipelineError):
        if exc.status_code >= 500:
            logger.error("pipeline_error", error=exc.message, kind=type(exc).__name__)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.error, "message": exc.client_message},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(_: Request, exc: Exception):
        logger.exception("unhandled_exception", error=str(exc))
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": "Unexpected error"},
        )

    app.include_router(api_router, prefix=settings.api_prefix)
    return app
