"""
API Gateway -- FastAPI application factory.

Creates the FastAPI app with all routes, middleware, and shared state.
This is the entrypoint for uvicorn:

    uvicorn emailbuddy.api.gateway:create_app --factory --host 127.0.0.1 --port 48123

Or simply `emailbuddy serve`, which reads host/port from config.json.

Shared state (request.app.state):
  - registry       -- ProviderRegistry (closed provider set)
  - secrets        -- SecretStore (env vars / macOS keychain)
  - profile_store  -- ProfileStore (profile.json)
  - history        -- HistoryLog (history.jsonl, only written when enabled)

Every error leaves as {"error": "..."}; the extension shows it verbatim.
"""

import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from .. import __version__
from ..history import HistoryLog
from ..learning.profile import ProfileStore
from ..providers.registry import ProviderRegistry, build_provider_registry
from ..security.secrets import SecretStore
from .middleware import get_request_id, log_requests
from .routes import health, profile, rewrite, secrets, settings

logger = logging.getLogger(__name__)

API_PREFIX = "/v1"


def _get_cors_origins() -> list[str]:
    """CORS origins from CORS_ORIGINS (comma-separated); any origin by default.

    The extension calls from a chrome-extension:// origin whose id differs
    per install, and the service only listens on loopback.
    """
    origins_env = os.environ.get("CORS_ORIGINS", "")
    if origins_env.strip():
        return [o.strip() for o in origins_env.split(",") if o.strip()]
    return ["*"]


def _error(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _install_error_handlers(application: FastAPI) -> None:
    @application.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail), headers=exc.headers)

    @application.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, "request body must be a JSON object")

    @application.exception_handler(Exception)
    async def unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            f"[Gateway] {get_request_id(request)} unhandled {type(exc).__name__}: {exc}",
            exc_info=exc,
        )
        return _error(
            500,
            str(exc) or type(exc).__name__,
            headers={"X-Request-ID": get_request_id(request)},
        )


def create_app(
    registry: ProviderRegistry | None = None,
    secrets_store: SecretStore | None = None,
    profile_store: ProfileStore | None = None,
    history: HistoryLog | None = None,
) -> FastAPI:
    """
    Application factory -- creates and configures the FastAPI app.

    Args:
        registry: Provider registry (builds the default closed set if None).
        secrets_store: Credential store shared by providers and /v1/secrets.
        profile_store: Writing profile persistence.
        history: History sink used when history is enabled in config.
    """
    application = FastAPI(
        title="EmailBuddy Companion API",
        description="Local email rewriting service for the EmailBuddy extension",
        version=__version__,
        docs_url="/docs",
        redoc_url=None,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=_get_cors_origins(),
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    application.middleware("http")(log_requests)
    _install_error_handlers(application)

    secrets_store = secrets_store or SecretStore()
    application.state.secrets = secrets_store
    application.state.registry = registry or build_provider_registry(secrets_store)
    application.state.profile_store = profile_store or ProfileStore()
    application.state.history = history or HistoryLog()

    application.include_router(health.router, prefix=API_PREFIX, tags=["Health"])
    application.include_router(rewrite.router, prefix=API_PREFIX, tags=["Rewrite"])
    application.include_router(profile.router, prefix=API_PREFIX, tags=["Profile"])
    application.include_router(settings.router, prefix=API_PREFIX, tags=["Settings"])
    application.include_router(secrets.router, prefix=API_PREFIX, tags=["Secrets"])

    logger.info(
        f"[Gateway] API initialized (providers={application.state.registry.ids})"
    )
    return application


app = create_app()
