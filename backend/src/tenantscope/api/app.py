"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tenantscope.api.endpoints import create_context_router
from tenantscope.auth import AuthMiddleware, JWTService
from tenantscope.baseline import BaselineLoader, check_baseline_integrity
from tenantscope.config import AppSettings
from tenantscope.context.service import TenantContextResolver
from tenantscope.errors import NotFoundError, UnexpectedError
from tenantscope.store import create_store

logger = logging.getLogger(__name__)


def _log_integrity(baseline) -> None:
    """Report baseline layout problems (warn on errors, don't block startup)."""
    issues = check_baseline_integrity(baseline)
    if not issues:
        return
    error_count = sum(1 for i in issues if i.severity == "error")
    warn_count = sum(1 for i in issues if i.severity == "warning")
    for issue in issues:
        if issue.severity == "error":
            logger.error("Baseline integrity error: %s", issue)
        else:
            logger.warning("Baseline integrity warning: %s", issue)
    logger.warning(
        "Baseline integrity: %d error(s), %d warning(s). "
        "Run 'tenantscope baseline validate' for details.",
        error_count,
        warn_count,
    )


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Build the API application.

    The baseline is loaded and the store opened in the lifespan, so a
    missing or invalid baseline fails startup with BaselineError.
    """
    settings = settings or AppSettings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        baseline = BaselineLoader(settings.baseline_path).load()
        _log_integrity(baseline)

        store = create_store(settings.database, baseline)
        app.state.baseline = baseline
        app.state.store = store
        app.state.resolver = TenantContextResolver(store, baseline)

        yield

        store.dispose()

    app = FastAPI(title="Tenantscope API", lifespan=lifespan)
    app.state.baseline = None
    app.state.resolver = None

    app.add_middleware(
        AuthMiddleware,
        jwt_service=None if settings.disable_auth else JWTService(settings.secret_key),
        trust_headers=settings.disable_auth,
    )
    # CORS for frontend dev server
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"message": str(exc)})

    @app.exception_handler(UnexpectedError)
    async def unexpected_handler(request: Request, exc: UnexpectedError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"message": "An unexpected error occurred"})

    @app.exception_handler(Exception)
    async def fallback_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(status_code=500, content={"message": "An unexpected error occurred"})

    app.include_router(create_context_router(
        get_resolver=lambda: app.state.resolver,
        get_baseline=lambda: app.state.baseline,
    ))
    return app
