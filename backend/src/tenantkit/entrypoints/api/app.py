"""FastAPI application definition."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tenantkit import __version__
from tenantkit.config import Settings

from .deps import lifespan
from .errors import register_exception_handlers
from .middleware.correlation import CorrelationIdMiddleware
from .routes import api_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Application settings. Loaded from the environment if omitted.

    Returns:
        Configured FastAPI app. Services are built when its lifespan starts.
    """
    app = FastAPI(
        title="tenantkit",
        description="Multi-tenant organization and user API with hybrid search",
        version=__version__,
        lifespan=lifespan,
        redirect_slashes=False,  # Prevent 307 redirects that lose auth headers
    )
    app.state.settings = settings or Settings()

    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-ID"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
