"""
Fitlog Backend - FastAPI Application
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fitlog.core.config import settings
from fitlog.core.logging import setup_logging, get_logger
from fitlog.core.session import init_store
from fitlog.api import records, state, stats

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    logger.info("Starting Fitlog Backend", version="1.0.0")
    store, client = await init_store()
    app.state.store = store
    logger.info("Store initialized", records=len(store.records))

    yield

    # Shutdown
    await client.aclose()
    logger.info("Shutting down Fitlog Backend")


app = FastAPI(
    title="Fitlog API",
    description="Personal exercise log with weekly, monthly and streak stats",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(records.router, prefix="/api", tags=["records"])
app.include_router(stats.router, prefix="/api/stats", tags=["stats"])
app.include_router(state.router, prefix="/api/state", tags=["state"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "fitlog-backend"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
