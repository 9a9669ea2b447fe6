from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from careermatch.api.functions import router as functions_router
from careermatch.api.routes import router as api_router
from careermatch.config import get_settings
from careermatch.db.init import init_database
from careermatch.logging_config import configure_logging
from careermatch.web.routes import router as web_router


@asynccontextmanager
async def _lifespan(app: FastAPI):
    configure_logging()
    init_database()
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    static_dir = Path(__file__).resolve().parents[1] / "web" / "static"

    app = FastAPI(title=settings.app_name, lifespan=_lifespan)

    @app.get("/health")
    def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    app.include_router(functions_router)
    app.include_router(api_router)
    if settings.web_ui_enabled:
        app.include_router(web_router)

    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")
    return app
