"""
StrideLog API

FastAPI application serving accounts and activity history.
"""

from contextlib import asynccontextmanager
import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stridelog import __version__
from stridelog.config import settings
from stridelog.db.session import init_db, AsyncSessionLocal
from stridelog.api.v1.router import api_router
from stridelog.features.tracking import SaveQueue


# === Logging Setup ===
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)
logger = logging.getLogger(__name__)


# Finished tracking sessions are handed to this queue
save_queue = SaveQueue(AsyncSessionLocal)


# === Lifespan ===
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting StrideLog API...")
    added = init_db()
    logger.info(f"Database initialized (added columns: {added or 'none'})")

    await save_queue.start()
    app.state.save_queue = save_queue

    yield

    await save_queue.stop()
    if save_queue.failed:
        logger.warning(f"{len(save_queue.failed)} activities could not be saved")
    logger.info("Shutting down...")


# === App Creation ===
app = FastAPI(
    title="StrideLog API",
    description="Activity tracking: accounts, activity history and routes",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)


# === Middleware ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Routes ===
app.include_router(api_router, prefix="/api/v1")


# === Health Check ===
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
