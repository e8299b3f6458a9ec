"""API route modules for the Neon Love Test API."""

from app.routes.health import router as health_router
from app.routes.sessions import router as sessions_router


def register_routes(app) -> None:
    """Register all route modules with the FastAPI app."""
    app.include_router(health_router)
    app.include_router(sessions_router, prefix="/sessions", tags=["sessions"])
