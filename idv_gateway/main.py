import logging
from pathlib import Path

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from .api import provider_error_handler, router
from .config import Settings
from .endpoints.api import api
from .endpoints.routers.webhooks import router as webhooks_router
from .services.exceptions import ProviderAPIError
from .services.identity_providers.base import IdentityProvider
from .services.identity_providers.factory import get_identity_provider
from .services.identity_providers.onfido import OnfidoProvider
from .services.result_store import ResultStore

logger = logging.getLogger(__name__)


def _mount_frontend(app: FastAPI, dist_dir: Path) -> None:
    """Serve the built client (SPA): real files when they exist, index.html otherwise."""
    root = dist_dir.resolve()
    index = root / "index.html"

    @app.get("/{full_path:path}", include_in_schema=False)
    async def frontend(full_path: str):
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)
        if index.is_file():
            return FileResponse(index)
        raise HTTPException(status_code=404, detail="Not Found")

    logger.info(f"Serving frontend from {root}")


def check_credentials(settings: Settings, provider: IdentityProvider) -> None:
    """The real Onfido client cannot work without a token; sandbox/mock can."""
    if not settings.onfido_api_token and isinstance(provider, OnfidoProvider):
        raise RuntimeError("ONFIDO_API_TOKEN is missing (set it in the environment or enable DEBUG=1)")


def create_app(
    settings: Settings | None = None,
    store: ResultStore | None = None,
    provider: IdentityProvider | None = None,
) -> FastAPI:
    """Build the app. Serve with `uvicorn --factory idv_gateway.main:create_app` or `run()`."""
    settings = settings or Settings.from_env()

    app = FastAPI(title="Identity verification gateway")
    app.state.settings = settings
    app.state.result_store = store if store is not None else ResultStore()
    app.state.provider = provider or get_identity_provider(settings.identity_provider, settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ProviderAPIError, provider_error_handler)

    # Refuse to start without credentials, whichever server launches the app
    @app.on_event("startup")
    async def startup_event():
        try:
            check_credentials(app.state.settings, app.state.provider)
        except RuntimeError as e:
            logger.error(str(e))
            raise

    app.include_router(router)
    app.include_router(webhooks_router)
    app.include_router(api)

    if not settings.signature_required:
        logger.warning("ONFIDO_WEBHOOK_SECRET not set, webhook signatures are NOT verified")

    # Catch-all frontend route goes last so it never shadows the API
    dist_dir = Path(settings.client_dist_dir)
    if dist_dir.is_dir():
        _mount_frontend(app, dist_dir)

    return app


def run() -> None:
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    app = create_app(settings=settings)
    try:
        check_credentials(settings, app.state.provider)
    except RuntimeError as e:
        logger.error(str(e))
        raise SystemExit(1)

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)


if __name__ == "__main__":
    run()
