"""
Purpose:
- FastAPI application factory and router mounts.
- Adds CORS for the local front end dev server + future domain.
- Uvicorn will serve this on 0.0.0.0:8000 by default.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .core.settings import settings
from .core.logging import configure_logging
from .api.health import router as health_router
from .api.scenes import router as scenes_router
from .api.generate import router as generate_router
from .api.visits import router as visits_router

def create_app() -> FastAPI:
    configure_logging(settings.log_level)
    app = FastAPI(title="ChronoSnap API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(health_router)
    app.include_router(scenes_router)
    app.include_router(generate_router)
    app.include_router(visits_router)
    return app



app = create_app()
