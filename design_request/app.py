"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from design_request.config import Settings
from design_request.models import HealthResponse
from design_request.service import SubmissionHandler
from design_request.transport import MailTransport, SmtpTransport

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the mail transport setup once; nothing to tear down."""
    smtp = app.state.settings.smtp
    logger.info(
        "smtp_configuration",
        host=smtp.host or "not configured",
        port=smtp.port,
        user="configured" if smtp.user else "not configured",
        delivery_enabled=smtp.is_configured,
    )
    yield
    logger.info("shutdown_complete")


def create_app(
    settings: Settings | None = None,
    transport: MailTransport | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    *transport* defaults to an SMTP transport built from ``settings.smtp``;
    tests pass a stub instead.
    """
    if settings is None:
        settings = Settings()
    if transport is None:
        transport = SmtpTransport.configure(settings.smtp)

    app = FastAPI(
        title="Design Request Mailer",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.handler = SubmissionHandler(settings, transport)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from design_request.routers.forms import router as forms_router

    app.include_router(forms_router)

    @app.get("/api/health", response_model=HealthResponse)
    async def health():
        return HealthResponse()

    static_dir = settings.static_dir

    @app.get("/", include_in_schema=False)
    async def index():
        page = static_dir / "index.html"
        if not page.is_file():
            raise HTTPException(status_code=404, detail="Not Found")
        return FileResponse(page)

    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=static_dir), name="static")

    return app
