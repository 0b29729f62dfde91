"""Leaderboard web page.

Serve with:
    zero-leaderboard serve
or
    uvicorn --factory zero_leaderboard.web.app:create_app_from_env
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ..core.config import LeaderboardConfig
from ..core.exceptions import LeaderboardError
from ..orchestrator import build_leaderboard
from ..output.formatters import (
    format_compact,
    format_percent,
    holder_label,
    wallet_overview_url,
)

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent

templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))
templates.env.filters["compact"] = format_compact
templates.env.filters["percent"] = format_percent
templates.env.filters["label"] = holder_label
templates.env.filters["wallet_url"] = wallet_overview_url


def canonical_redirect(request: Request) -> RedirectResponse | None:
    """301 from www.<host> to https://<host>, same path and query."""
    host = request.url.hostname or ""
    if not host.startswith("www."):
        return None
    target = request.url.replace(scheme="https", hostname=host[len("www."):])
    return RedirectResponse(str(target), status_code=301)


def create_app(
    config: LeaderboardConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Build the web application.

    Args:
        config: Site configuration, loaded once at startup
        transport: Optional httpx transport for upstream calls

    Returns:
        FastAPI app serving the leaderboard page
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            f"Serving leaderboard for {config.token_address} "
            f"(explorer={config.explorer_base_url}, production={config.production})"
        )
        yield

    app = FastAPI(lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.config = config

    if config.production:
        @app.middleware("http")
        async def redirect_www(request: Request, call_next):
            redirect = canonical_redirect(request)
            if redirect is not None:
                return redirect
            return await call_next(request)

    @app.exception_handler(LeaderboardError)
    async def leaderboard_error(request: Request, exc: LeaderboardError):
        logger.error(f"Leaderboard build failed: {exc.message}")
        return render_failure(request)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error while rendering the leaderboard", exc_info=exc)
        return render_failure(request)

    def render_failure(request: Request):
        return templates.TemplateResponse(
            request,
            "error.html",
            {"config": config},
            status_code=500,
        )

    @app.get("/", response_class=HTMLResponse)
    async def index(request: Request):
        view = await build_leaderboard(config, transport=transport)
        return templates.TemplateResponse(
            request,
            "index.html",
            {"config": config, "view": view},
        )

    return app


def create_app_from_env() -> FastAPI:
    """App factory reading configuration from the environment."""
    return create_app(LeaderboardConfig.load())
