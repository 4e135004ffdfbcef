# /grading_app/main.py

# --- Core FastAPI Imports ---
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

# --- Application-specific Imports ---
from .core.config import AUTO_CREATE_TABLES, CORS_ORIGINS, LOG_LEVEL
from .db.base import Base
from .db.database import engine
from .routers import grading_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# --- Application Lifecycle Management ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Runs once at startup. Production schemas are managed by Alembic.
    if AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ensured on %s", engine.url.render_as_string(hide_password=True))
    yield


# --- FastAPI Application Instance Creation ---
app = FastAPI(
    title="Simulazioni Grading API",
    description="Manual grading of open answers for simulations, with score reconciliation.",
    version="1.0.0",
    lifespan=lifespan
)

# --- Middleware Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Router Inclusion ---
app.include_router(grading_router.router, prefix="/api/grading", tags=["Grading"])


# --- Root / Health Check Endpoint ---
@app.get("/", tags=["Health Check"])
async def read_root():
    """A simple health check endpoint to confirm the API is online."""
    return {"status": "Grading backend is running!", "version": app.version}
