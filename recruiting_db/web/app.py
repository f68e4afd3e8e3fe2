"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from jinja2 import Environment, FileSystemLoader
from starlette.responses import HTMLResponse

from recruiting_db.config import AppConfig, load_config, validate_config
from recruiting_db.ingest.proxy import IngestProxy
from recruiting_db.profiles.models import TAG_LABELS
from recruiting_db.profiles.query import TAG_PARAMS
from recruiting_db.storage.store import ProfileStore, create_store
from recruiting_db.utils.logging_config import setup_logging

logger = logging.getLogger("recruiting_db.web")

WEB_DIR = Path(__file__).parent
TEMPLATES_DIR = WEB_DIR / "templates"
STATIC_DIR = WEB_DIR / "static"


def _or_na(value):
    """Display filter: None and empty strings render as N/A, zero does not."""
    if value is None or value == "":
        return "N/A"
    return value


def _create_jinja_env() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=True,
    )
    env.filters["or_na"] = _or_na
    env.globals["tag_labels"] = TAG_LABELS
    env.globals["tag_params"] = TAG_PARAMS
    return env


class _Templates:
    """Thin wrapper that mimics Jinja2Templates from starlette."""

    def __init__(self):
        self.env = _create_jinja_env()

    def TemplateResponse(self, name: str, context: dict, status_code: int = 200):
        template = self.env.get_template(name)
        html = template.render(**context)
        return HTMLResponse(html, status_code=status_code)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = app.state.config
    setup_logging(config.log_dir, config.log_level)
    for w in validate_config(config):
        logger.warning("Config: %s", w)
    logger.info("Recruiting database started (store backend: %s)", config.store.backend)

    yield

    logger.info("Recruiting database stopped")


def create_app(
    config: Optional[AppConfig] = None,
    store: Optional[ProfileStore] = None,
    ingest_proxy: Optional[IngestProxy] = None,
) -> FastAPI:
    config = config or load_config()

    app = FastAPI(title="Recruiting Database", lifespan=lifespan)

    app.state.config = config
    app.state.store = store or create_store(config)
    app.state.ingest_proxy = ingest_proxy or IngestProxy(config)

    # Static files
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # Templates
    app.state.templates = _Templates()

    # Routers
    from .api import router as api_router
    from .profiles import router as profiles_router
    app.include_router(profiles_router)
    app.include_router(api_router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
