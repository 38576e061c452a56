"""Register all route modules on the FastAPI app."""

from fastapi import FastAPI

from .root import router as root_router
from .books import router as books_router
from .recommend import router as recommend_router


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the app."""
    app.include_router(root_router)
    app.include_router(books_router, prefix="/api/books", tags=["books"])
    app.include_router(recommend_router, prefix="/api/recommend", tags=["recommend"])
