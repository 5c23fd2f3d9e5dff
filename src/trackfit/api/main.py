"""FastAPI application factory."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlmodel import SQLModel

from trackfit.db.engine import get_engine
from trackfit.api.routes import activities, athletes, track_efforts, tracks, uploads


def create_app() -> FastAPI:
    """Build and return the FastAPI app."""

    engine = get_engine()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Create tables on startup (idempotent)
        SQLModel.metadata.create_all(engine)
        yield

    app = FastAPI(
        title="Trackfit API",
        description="Athletes, tracks, activities and FIT uploads",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.get("/ping")
    def ping():
        return {"pong": "it works!!"}

    app.include_router(athletes.router, prefix="/athletes", tags=["athletes"])
    app.include_router(tracks.router, prefix="/tracks", tags=["tracks"])
    app.include_router(activities.router, prefix="/activities", tags=["activities"])
    app.include_router(track_efforts.router, prefix="/track-efforts", tags=["track-efforts"])
    app.include_router(uploads.router, prefix="/uploads", tags=["uploads"])

    return app


# Module-level app instance for uvicorn
app = create_app()
