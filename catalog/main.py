# catalog/main.py

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.api.cities import router as cities_router
from catalog.api.states import router as states_router
from catalog.auth import api_route_not_found, require_token
from catalog.config import Settings
from catalog.db.engine import check_connection, get_engine
from catalog.errors import install_error_handlers

STATIC_DIR = Path(__file__).resolve().parent / "static"
JS_DIR = STATIC_DIR / "js"
CSS_DIR = STATIC_DIR / "css"
INDEX = STATIC_DIR / "index.html"

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("[startup] INDEX: %s exists=%s", INDEX, INDEX.exists())
    logger.info("[startup] JS_DIR: %s exists=%s", JS_DIR, JS_DIR.exists())
    logger.info("[startup] CSS_DIR: %s exists=%s", CSS_DIR, CSS_DIR.exists())

    # A dead database is logged, not fatal: /health keeps answering.
    try:
        check_connection(app.state.engine)
        logger.info("Database reachable at %s", app.state.engine.url.render_as_string())
    except SQLAlchemyError as e:
        logger.error("Database connection failed: %s", e)

    try:
        yield
    finally:
        app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    `settings` defaults to the environment; tests pass their own (temporary
    database, known token).
    """
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="States & Cities Catalog API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = get_engine(settings.database_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["Content-Type", "Authorization"],
    )
    install_error_handlers(app)
    app.add_exception_handler(StarletteHTTPException, api_route_not_found)

    @app.get("/health")
    def health_check():
        return {"ok": True}

    @app.get("/", include_in_schema=False)
    def index():
        return FileResponse(INDEX)

    if JS_DIR.is_dir():
        app.mount("/js", StaticFiles(directory=JS_DIR), name="js")
    if CSS_DIR.is_dir():
        app.mount("/css", StaticFiles(directory=CSS_DIR), name="css")

    api = APIRouter(prefix="/api", dependencies=[Depends(require_token)])
    api.include_router(states_router)
    api.include_router(cities_router)
    app.include_router(api)

    return app


_settings = Settings.from_env()
configure_logging(_settings.log_level)
app = create_app(_settings)


def main() -> None:
    import uvicorn

    uvicorn.run(app, host=_settings.host, port=_settings.port)


if __name__ == "__main__":
    main()
