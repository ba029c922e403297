import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import Response
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import APP_PREFIX, ApiConfig, load_settings
from .db import check_db
from .metrics import MetricsMiddleware
from .routes_admin import router as admin_router
from .routes_chirps import router as chirps_router
from .routes_health import router as health_router


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    cfg: ApiConfig = app.state.api_config
    if cfg.db_url:
        try:
            await check_db(cfg.db_url)
            logger.info("database reachable")
        except Exception as exc:
            # Don't crash without a DB; chirps are never stored
            logger.warning("database check failed: %s", exc)
    yield


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    # router misses (404/405) carry no body
    return Response(status_code=exc.status_code, headers=exc.headers)


def create_app(api_config: Optional[ApiConfig] = None) -> FastAPI:
    if api_config is None:
        api_config = ApiConfig(db_url=load_settings().db_url)

    app = FastAPI(
        title="Chirpy",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.api_config = api_config
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.include_router(health_router)
    app.include_router(chirps_router)
    app.include_router(admin_router)

    files = StaticFiles(directory=api_config.filepath_root, html=True)
    app.mount(APP_PREFIX, MetricsMiddleware(files, api_config.fileserver_hits), name="app")

    logger.debug("serving %s under %s/", api_config.filepath_root, APP_PREFIX)
    return app


app = create_app()
