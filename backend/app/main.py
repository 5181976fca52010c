"""
LifeVault - Main Application Entry Point

A modular monolithic API for digital asset inheritance: owners record
assets, nominees and trading accounts; nominees request vault access after
a death; admins review those requests.
"""

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.core.config import settings
from app.core.database import SessionLocal, init_database
from app.core.errors import register_exception_handlers
from app.core.timezone import now_utc_iso

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Import module routers
from app.core.auth_router import router as auth_router
from app.modules.dashboard.router import router as dashboard_router
from app.modules.assets.router import router as assets_router
from app.modules.nominees.router import router as nominees_router
from app.modules.trading_accounts.router import router as trading_accounts_router
from app.modules.vault.router import router as vault_router
from app.modules.uploads.router import router as uploads_router
from app.modules.admin.router import router as admin_router
from app.modules.users.services import ensure_default_admin


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Digital asset inheritance: asset ledger, nominees and vault access requests",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Use ["*"] if CORS_ALLOW_ALL is True (development), otherwise use explicit origins
    cors_origins = ["*"] if settings.CORS_ALLOW_ALL else settings.CORS_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register module routers
    app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(dashboard_router, prefix="/api/dashboard", tags=["Dashboard"])
    app.include_router(assets_router, prefix="/api/assets", tags=["Assets"])
    app.include_router(nominees_router, prefix="/api/nominees", tags=["Nominees"])
    app.include_router(trading_accounts_router, prefix="/api/trading-accounts", tags=["Trading Accounts"])
    app.include_router(vault_router, prefix="/api/vault", tags=["Vault"])
    app.include_router(uploads_router, prefix="/api/upload", tags=["Uploads"])
    app.include_router(admin_router, prefix="/api/admin", tags=["Admin"])

    # Uploaded documents are served back under /files/<userId>/<name>
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/files", StaticFiles(directory=str(upload_dir)), name="files")

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint - health check."""
        return {
            "application": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "running"
        }

    @app.get("/api/health", tags=["Health"])
    async def health_check():
        """API health check endpoint."""
        return {"status": "ok", "timestamp": now_utc_iso()}

    @app.on_event("startup")
    async def startup_event():
        """Create missing tables and bootstrap the super-admin account."""
        init_database()
        db = SessionLocal()
        try:
            ensure_default_admin(db)
        finally:
            db.close()
        logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} startup complete")

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
