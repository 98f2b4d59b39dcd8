"""FastAPI application entrypoint."""

import secrets
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware

from app.adapters.inbound.http.admin_routes import router as admin_router
from app.adapters.inbound.http.admin_session import ADMIN_SESSION_COOKIE
from app.adapters.inbound.http.errors import register_exception_handlers
from app.adapters.inbound.http.routes import router
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import logger
from app.infrastructure.wiring.dependencies import get_idempotency_store

# Load environment variables from .env file
load_dotenv()


def _session_secret() -> str:
    """Secret signing the admin session cookie."""
    secret = settings.session_secret or settings.admin_password
    if not secret:
        logger.warning("SESSION_SECRET and ADMIN_PASSWORD are unset; admin sessions reset on restart")
        secret = secrets.token_urlsafe(32)
    return secret


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close the webhook idempotency store on shutdown."""
    yield
    provider = app.dependency_overrides.get(get_idempotency_store, get_idempotency_store)
    await provider().close()


def create_app() -> FastAPI:
    """
    Build the FastAPI application.

    Returns:
        Configured application
    """
    app = FastAPI(
        title="Aura Intuitive",
        description="Paid spiritual consultations: Stripe payment, question form, emailed guidance",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        SessionMiddleware,
        secret_key=_session_secret(),
        session_cookie=ADMIN_SESSION_COOKIE,
        max_age=settings.session_max_age_seconds,
        same_site="lax",
        https_only=settings.app_url.startswith("https://"),
    )
    register_exception_handlers(app)

    app.include_router(router)
    app.include_router(admin_router)

    # Static site last so API routes take precedence
    public_dir = Path(settings.public_dir)
    if public_dir.is_dir():
        app.mount("/", StaticFiles(directory=public_dir, html=True), name="public")

    return app


app = create_app()
