"""FastAPI entry point for the physlab backend."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from physlab import __version__
from physlab.logging_utils import configure_backend_logging
from physlab.models.settings import settings
from physlab.routers import half_atwood, resonance, trials

logger = configure_backend_logging(settings.LOG_LEVEL)

app = FastAPI(title="physlab API", version=__version__)

# CORS middleware - must be added before routes
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    max_age=3600,  # Cache preflight for 1 hour
)

app.include_router(half_atwood.router)
app.include_router(resonance.router)
app.include_router(trials.router)

logger.info(f"physlab API {__version__} ready (env={settings.APP_ENV})")


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    """Basic health-check endpoint."""
    return {"status": "ok", "env": settings.APP_ENV}
